"""Storage layer for the link shortener."""

from .base import LinkStore, WriteCondition
from .models import Link
from .memory import MemoryLinkStore

__all__ = ["LinkStore", "WriteCondition", "Link", "MemoryLinkStore"]
