"""Data models for the link shortener."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Link:
    """A short code bound to its redirect target.

    ``owner_execution_id`` is only a partition key for backends that need
    one. It is never part of the public representation.
    """

    code: str
    long_url: str
    created_at: datetime = field(default_factory=_utcnow)
    owner_execution_id: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to the public dictionary form."""
        return {
            "code": self.code,
            "long_url": self.long_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Link":
        """Create from dictionary."""
        created_at = data.get("created_at")
        if created_at is None:
            created_at = _utcnow()
        elif not isinstance(created_at, datetime):
            created_at = datetime.fromisoformat(created_at)
        return cls(
            code=data["code"],
            long_url=data.get("long_url") or "",
            created_at=created_at,
            owner_execution_id=data.get("owner_execution_id"),
        )
