"""
Application Layer Package

Policies applied around the request cycle, such as turning raised errors
into responses.
"""

from .exception_decorator import JsonExceptionDecorator

__all__ = ["JsonExceptionDecorator"]
