"""Web application for the link shortener."""

from .app_factory import create_app, attach_service

__all__ = ["create_app", "attach_service"]
