"""Pytest configuration and fixtures."""

import pytest
from httpx import AsyncClient, ASGITransport

from shortlink.config import Config
from shortlink.lib.database.memory import MemoryLinkStore
from shortlink.lib.service import LinkService
from shortlink.lib.shortcode import CodeGenerator
from shortlink.lib.common.logging_config import setup_logging
from shortlink.web_app import create_app

BASE_URL = "https://host"


class SequenceGenerator(CodeGenerator):
    """Generator that replays a fixed list of codes."""

    def __init__(self, codes):
        super().__init__(default_length=len(codes[0]))
        self._codes = iter(codes)

    def generate(self, length=None):
        return next(self._codes)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store(logger):
    return MemoryLinkStore(logger=logger)


@pytest.fixture
def code_generator():
    """Seeded generator so failures are reproducible."""
    return CodeGenerator(default_length=6, seed=1234)


@pytest.fixture
def service(store, code_generator, logger) -> LinkService:
    """Create service instance over the in-memory store."""
    return LinkService(
        store=store,
        generator=code_generator,
        base_url=BASE_URL,
        logger=logger,
    )


@pytest.fixture
def config():
    return Config(base_url=BASE_URL, store_backend="memory")


@pytest.fixture
def app(service, config, logger):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config, logger=logger)


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456?tab=Votes#answer-1",
    ]
