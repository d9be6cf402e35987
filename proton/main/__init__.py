"""
Main module - Main/Composition Root Layer

Hosts the ``Application`` facade and the composition root that configures
it from settings.
"""

from .application import Application
from .config import AppSettings, get_settings

__all__ = ["Application", "AppSettings", "get_settings"]
