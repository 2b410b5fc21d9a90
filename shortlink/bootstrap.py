"""Wire configured components together."""

import logging

from .config import Config
from .lib.database.base import LinkStore
from .lib.database.cache import RedisCache
from .lib.database.memory import MemoryLinkStore
from .lib.service import LinkService
from .lib.shortcode import CodeGenerator


def create_store(config: Config, logger: logging.Logger) -> LinkStore:
    """Instantiate the configured link store backend."""
    if config.store_backend == "postgres":
        from .lib.database.postgres import PostgresLinkStore

        logger.info("Using PostgreSQL link store")
        return PostgresLinkStore(db_config=config.database_url, logger=logger)

    if config.store_backend == "dynamodb":
        from .lib.database.dynamodb import DynamoDBLinkStore

        logger.info(f"Using DynamoDB link store (table={config.dynamodb_table})")
        return DynamoDBLinkStore(
            table_name=config.dynamodb_table,
            default_execution_id=config.execution_id,
            region_name=config.dynamodb_region,
            endpoint_url=config.dynamodb_endpoint_url,
            logger=logger,
        )

    logger.warning("Using in-memory link store; links are lost on restart")
    return MemoryLinkStore(logger=logger)


async def create_service(config: Config, logger: logging.Logger) -> LinkService:
    """Build a ready-to-use LinkService from configuration."""
    store = create_store(config, logger)
    if config.create_tables:
        await store.create_tables()

    cache = None
    if config.redis_url:
        logger.info(f"Connecting to Redis at {config.redis_url}")
        cache = RedisCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger,
        )
        await cache.connect()
    else:
        logger.info("Redis caching disabled")

    generator = CodeGenerator.from_name(
        config.code_alphabet,
        default_length=config.short_code_length,
    )

    return LinkService(
        store=store,
        generator=generator,
        base_url=config.base_url,
        path_prefix=config.path_prefix,
        custom_code_min_length=config.custom_code_min_length,
        max_collision_retries=config.max_collision_retries,
        cache=cache,
        execution_id=config.execution_id if config.store_backend == "dynamodb" else None,
        logger=logger,
    )
