from __future__ import annotations

import json

from proton.main.app import create_app, create_asgi_app
from proton.main.application import Application
from proton.main.config import AppSettings, KernelSettings
from proton.presentation import ASGIAdapter
from proton.shared.consts import EnumEnvironment
from tests.conftest import build_request


def test_create_app_seeds_config_from_settings() -> None:
    settings = AppSettings(
        environment=EnumEnvironment.TESTING,
        kernel=KernelSettings(title="Kernel Test", debug=True),
    )

    application = create_app(settings)

    assert isinstance(application, Application)
    assert application.get_config("debug") is True
    assert application.get_config("title") == "Kernel Test"
    assert application.get_config("environment") == "testing"


def test_create_app_without_debug_hides_traces() -> None:
    settings = AppSettings(kernel=KernelSettings(debug=False))

    response = create_app(settings).handle(build_request("GET", "/"))

    assert json.loads(response.body) == {"error": {"message": "Not Found"}}


def test_create_app_uses_settings_factory(monkeypatch) -> None:
    monkeypatch.setattr(
        "proton.main.app.get_settings",
        lambda: AppSettings(kernel=KernelSettings(title="Patched")),
    )

    assert create_app().get_config("title") == "Patched"


def test_create_asgi_app_wraps_application() -> None:
    adapter = create_asgi_app(AppSettings())

    assert isinstance(adapter, ASGIAdapter)
    assert isinstance(adapter.application, Application)
