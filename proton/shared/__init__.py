"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides shared utilities, constants, and enums that are used
across multiple layers of the kernel.

Its primary responsibilities include:
- Defining cross-layer constants (environment names, log levels, HTTP verbs)
- Naming the lifecycle events and well-known container keys
- Structured logging setup
"""

from .consts import (
    APP_KEY,
    REQUEST_KEY,
    EnumEnvironment,
    EnumLogLevel,
    HttpMethod,
    LifecycleEvent,
    RequestType,
)
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "APP_KEY",
    "REQUEST_KEY",
    "EnumEnvironment",
    "EnumLogLevel",
    "HttpMethod",
    "LifecycleEvent",
    "RequestType",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
