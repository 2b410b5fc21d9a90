"""Core business logic for the link shortener."""

from .shortcode import CodeGenerator
from .service import LinkService
from .router import RequestRouter, RouterResponse

__all__ = ["CodeGenerator", "LinkService", "RequestRouter", "RouterResponse"]
