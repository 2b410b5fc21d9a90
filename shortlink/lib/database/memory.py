"""In-process link store for tests and local runs."""

import asyncio
import logging
from typing import Dict, Optional

from .base import LinkStore, WriteCondition
from .models import Link


class MemoryLinkStore(LinkStore):
    """Dictionary-backed store; the lock makes check-and-insert atomic."""

    name = "memory"

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._links: Dict[str, Link] = {}
        self._lock = asyncio.Lock()

    async def put(
        self,
        link: Link,
        condition: WriteCondition = WriteCondition.MUST_BE_ABSENT,
    ) -> bool:
        async with self._lock:
            if condition is WriteCondition.MUST_BE_ABSENT and link.code in self._links:
                self.logger.debug(f"Code already exists: {link.code}")
                return False
            self._links[link.code] = link
        return True

    async def get_by_code(self, code: str) -> Optional[Link]:
        return self._links.get(code)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self._links.clear()

    def __len__(self) -> int:
        return len(self._links)
