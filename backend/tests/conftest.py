"""Shared test fixtures."""

import json
import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("S3_BUCKET", "test-bucket")
os.environ.setdefault("PEXELS_API_KEY", "test-pexels-key")
os.environ.setdefault("DEMO_MODE", "false")

from cms.core.config import settings  # noqa: E402
from cms.core.dependencies import get_store  # noqa: E402
from cms.main import app  # noqa: E402
from cms.services.content_store import ContentStore  # noqa: E402
from tests.helpers import sample_document  # noqa: E402


@pytest.fixture
def store(tmp_path) -> ContentStore:
    """Empty content store in a per-test temp directory."""
    return ContentStore(tmp_path / "site.json")


@pytest.fixture
def seeded_store(store: ContentStore) -> ContentStore:
    """Content store pre-loaded with the sample site."""
    store.path.write_text(json.dumps(sample_document()), encoding="utf-8")
    return store


@pytest.fixture
async def client(store: ContentStore) -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client with ``get_store`` pointed at the per-test store."""
    app.dependency_overrides[get_store] = lambda: store
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_store, None)


@pytest.fixture
async def seeded_client(seeded_store: ContentStore, client: AsyncClient) -> AsyncClient:
    """``client`` over the sample site."""
    return client


@pytest.fixture
def demo_mode(monkeypatch):
    monkeypatch.setattr(settings, "DEMO_MODE", True)
