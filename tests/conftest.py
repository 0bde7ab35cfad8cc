"""Shared pytest fixtures for webtool API tests."""

import sys
from pathlib import Path
from typing import AsyncGenerator, Dict

import pytest
import pytest_asyncio

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def sample_config(tmp_path) -> Dict:
    """Sample configuration for testing."""
    return {
        "kv_backend": "memory",
        "kv_db_path": str(tmp_path / "kv.db"),
        "max_videos": 50,
        "max_submissions": 100,
        "client_ip_header": "CF-Connecting-IP",
        "cors_allow_origin": "*",
        "log_level": "INFO",
        "log_json": False,
        "host": "127.0.0.1",
        "port": 8000,
    }


@pytest.fixture
def memory_store():
    """Empty in-memory key-value store."""
    from services.kv_store import MemoryKVStore

    return MemoryKVStore()


@pytest.fixture
def app(sample_config, memory_store):
    """API application bound to the in-memory store."""
    from api.server import create_app

    return create_app(sample_config, store=memory_store)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator:
    """HTTP client talking to the app in-process."""
    from httpx import ASGITransport, AsyncClient

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
