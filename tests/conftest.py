import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport

from golinks.backends.memory import MemoryBackend
from golinks.backends.sql import SQLBackend
from golinks.config import Settings
from golinks.database import build_engine
from golinks.main import create_app
from golinks.registry import LinkRegistry


def sqlite_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'golinks.db'}"


@pytest.fixture(params=["memory", "sql"])
async def backend(request, tmp_path):
    # Every backend-level test runs against both implementations
    if request.param == "memory":
        backend = MemoryBackend()
    else:
        backend = SQLBackend(build_engine(sqlite_url(tmp_path), pool_timeout=30))
    await backend.init()
    yield backend
    await backend.close()


@pytest.fixture
def registry(backend) -> LinkRegistry:
    return LinkRegistry(backend)


@pytest.fixture
def settings() -> Settings:
    return Settings(USE_DATABASE=False, API_TOKEN=None, ENVIRONMENT="test")


@pytest.fixture
def app(settings):
    return create_app(settings, backend=MemoryBackend())


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    # ASGITransport does not run lifespan events; enter the lifespan by hand
    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
            yield c
