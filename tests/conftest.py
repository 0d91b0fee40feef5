from contextlib import asynccontextmanager

import pytest

from pharmacy_api.ai_gateway import AIGateway, FailureCounter
from pharmacy_api.cache import TTLCache
from pharmacy_api.main import app

from fixtures import SAMPLE_LABELS
from mocks import MockLabelClient, MockProvider, pharmacy_responder


@pytest.fixture(scope="session")
def anyio_backend():
    """Restrict anyio tests to the asyncio backend."""

    yield "asyncio"


@pytest.fixture
def dependency_overrides_guard():
    """Save and restore FastAPI dependency overrides for each test."""

    original_overrides = dict(app.dependency_overrides)

    try:
        yield app.dependency_overrides
    finally:
        app.dependency_overrides = original_overrides


def _noop_lifespan(_app):
    @asynccontextmanager
    async def _lifespan(_):
        yield

    return _lifespan


@pytest.fixture
def noop_lifespan():
    """Skip the real service container so routes only see overridden dependencies."""

    original_lifespan = app.router.lifespan_context
    app.router.lifespan_context = _noop_lifespan(app)
    try:
        yield
    finally:
        app.router.lifespan_context = original_lifespan


@pytest.fixture
def label_client():
    return MockLabelClient(SAMPLE_LABELS)


@pytest.fixture
def provider():
    return MockProvider("primary", responder=pharmacy_responder)


@pytest.fixture
def gateway(provider):
    return AIGateway([provider], FailureCounter(threshold=5, window_seconds=300), TTLCache(120))
