"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from .models import Link


class WriteCondition(Enum):
    """Precondition a store must check atomically when writing a link."""

    MUST_BE_ABSENT = "must_be_absent"
    OVERWRITE_OK = "overwrite_ok"


class LinkStore(ABC):
    """Abstract base class for link persistence.

    Implementations raise their native exceptions on I/O failure; callers
    are responsible for translating them.
    """

    name = "abstract"

    @abstractmethod
    async def put(
        self,
        link: Link,
        condition: WriteCondition = WriteCondition.MUST_BE_ABSENT,
    ) -> bool:
        """Write a link.

        Args:
            link: The link to persist
            condition: MUST_BE_ABSENT fails atomically if the code exists;
                OVERWRITE_OK replaces any existing link with the same code

        Returns:
            True if written, False if the condition failed (code already exists)
        """
        pass

    @abstractmethod
    async def get_by_code(self, code: str) -> Optional[Link]:
        """Look up a link by its short code.

        Args:
            code: The short code to lookup

        Returns:
            The link if found, None otherwise
        """
        pass

    async def create_tables(self) -> None:
        """Provision backing tables. No-op for schemaless stores."""
        return None

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close store connections."""
        pass
