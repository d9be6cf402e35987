"""
Proton Kernel Root Module

A minimal HTTP application kernel wiring together a dependency-injection
container, a route table, an event emitter and exception-to-response
translation.

Layer Structure:
- Domain: Errors, entities and collaborator ports
- Application: Exception decoration
- Infrastructure: Container, router, emitter and CGI transport adapters
- Presentation: ASGI adapter
- Shared: Cross-cutting concerns and shared utilities
- Main: Application facade, composition root and configuration
"""

from proton.main.application import Application

__all__ = ["Application"]
