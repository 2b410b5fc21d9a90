"""Business logic service for the link shortener."""

import logging
from typing import Optional, Dict
from datetime import datetime, timezone

from .shortcode import CodeGenerator
from .database.base import LinkStore, WriteCondition
from .database.cache import RedisCache
from .database.models import Link
from .common.validators import is_valid_url, is_valid_custom_code
from .common.url_builder import build_short_url
from .errors import (
    ValidationError,
    ConflictError,
    NotFoundError,
    StorageError,
    CollisionExhaustedError,
)


class LinkService:
    """Creates and resolves short links on top of a link store.

    The service keeps no per-request state. Every dependency (store,
    generator, cache, base URL) is injected at construction.
    """

    def __init__(
        self,
        store: LinkStore,
        generator: CodeGenerator,
        base_url: str,
        path_prefix: str = "",
        custom_code_min_length: int = 8,
        max_collision_retries: int = 5,
        cache: Optional[RedisCache] = None,
        execution_id: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize link service.

        Args:
            store: Link store backend
            generator: Code generator for random codes
            base_url: Host prefix for returned short URLs
            path_prefix: Optional path prefix for short URLs (e.g. '/s')
            custom_code_min_length: Minimum length of caller-supplied codes
            max_collision_retries: Attempts at a fresh random code before giving up
            cache: Optional read-through cache
            execution_id: Partition key stamped on links this process creates
            logger: Optional logger
        """
        if max_collision_retries < 1:
            raise ValueError("max_collision_retries must be at least 1")

        self.store = store
        self.generator = generator
        self.base_url = base_url
        self.path_prefix = path_prefix
        self.custom_code_min_length = custom_code_min_length
        self.max_collision_retries = max_collision_retries
        self.cache = cache
        self.execution_id = execution_id
        self.logger = logger or logging.getLogger(__name__)

    def _short_url(self, code: str) -> str:
        return build_short_url(code, self.base_url, self.path_prefix)

    def _new_link(self, code: str, long_url: str) -> Link:
        return Link(
            code=code,
            long_url=long_url,
            created_at=datetime.now(timezone.utc),
            owner_execution_id=self.execution_id,
        )

    async def _put_if_absent(self, link: Link) -> bool:
        try:
            return await self.store.put(link, WriteCondition.MUST_BE_ABSENT)
        except Exception as e:
            self.logger.error(f"Store write failed for {link.code}: {e}")
            raise StorageError("Failed to store short link") from e

    async def _get_link(self, code: str) -> Optional[Link]:
        try:
            return await self.store.get_by_code(code)
        except Exception as e:
            self.logger.error(f"Store lookup failed for {code}: {e}")
            raise StorageError("Failed to look up short link") from e

    async def create_short_link(self, long_url: str) -> str:
        """Create a short link with a randomly generated code.

        Args:
            long_url: The redirect target

        Returns:
            The complete short URL

        Raises:
            ValidationError: If long_url is empty
            CollisionExhaustedError: If every generated code was taken
            StorageError: If the store fails
        """
        is_valid, error = is_valid_url(long_url)
        if not is_valid:
            raise ValidationError(error)

        for attempt in range(1, self.max_collision_retries + 1):
            link = self._new_link(self.generator.generate(), long_url)
            if await self._put_if_absent(link):
                await self._cache_set(link)
                self.logger.info(f"Created short link: {link.code} -> {long_url}")
                return self._short_url(link.code)
            self.logger.warning(
                f"Code collision on {link.code} (attempt {attempt}/{self.max_collision_retries})"
            )

        raise CollisionExhaustedError(
            f"Unable to generate a unique short code after {self.max_collision_retries} attempts"
        )

    async def create_custom_short_link(self, long_url: str, code: str) -> str:
        """Create a short link with a caller-chosen code.

        Args:
            long_url: The redirect target
            code: The requested short code

        Returns:
            The complete short URL

        Raises:
            ValidationError: If long_url or code is invalid
            ConflictError: If the code is already taken
            StorageError: If the store fails
        """
        is_valid, error = is_valid_url(long_url)
        if not is_valid:
            raise ValidationError(error)

        is_valid, error = is_valid_custom_code(code, min_length=self.custom_code_min_length)
        if not is_valid:
            raise ValidationError(error)

        if await self._get_link(code) is not None:
            raise ConflictError(f"Short code '{code}' already exists")

        # The read above can race with another writer; the conditional write decides.
        link = self._new_link(code, long_url)
        if not await self._put_if_absent(link):
            raise ConflictError(f"Short code '{code}' already exists")

        await self._cache_set(link)
        self.logger.info(f"Created custom short link: {code} -> {long_url}")
        return self._short_url(code)

    async def resolve_short_link(self, code: str) -> str:
        """Resolve a short code to its long URL.

        Raises:
            ValidationError: If code is empty
            NotFoundError: If no usable link exists for code
            StorageError: If the store fails
        """
        if not code:
            raise ValidationError("Short code is required")

        if self.cache:
            cached = await self.cache.get(code)
            if cached:
                self.logger.debug(f"Cache hit for {code}")
                return cached

        link = await self._get_link(code)
        if link is None or not link.long_url:
            self.logger.warning(f"Short code not found: {code}")
            raise NotFoundError(f"Short code '{code}' not found")

        await self._cache_set(link)
        self.logger.debug(f"Resolved {code} -> {link.long_url}")
        return link.long_url

    async def _cache_set(self, link: Link) -> None:
        if self.cache:
            await self.cache.set(link.code, link.long_url)

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        store_healthy = await self.store.health_check()

        cache_healthy = True
        if self.cache and self.cache.enabled:
            cache_healthy = await self.cache.ping()

        return {
            "store": store_healthy,
            "cache": cache_healthy,
            "overall": store_healthy and cache_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.store.close()
        if self.cache:
            await self.cache.close()
