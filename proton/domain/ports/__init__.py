"""Domain ports package."""

from .http import ExceptionDecorator, RequestFactory, ResponseSender, ServiceProvider

__all__ = ["ExceptionDecorator", "RequestFactory", "ResponseSender", "ServiceProvider"]
