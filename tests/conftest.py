import pytest
from httpx import AsyncClient, ASGITransport

from app.config import settings
from app.database import redis_manager
from app.utils.redis import KVStore

from fakeredis import FakeAsyncRedis, FakeServer


@pytest.fixture()
def redis_server():
    return FakeServer()


@pytest.fixture()
async def redis(redis_server):
    fake_redis = FakeAsyncRedis(server=redis_server, decode_responses=True)
    yield fake_redis
    await fake_redis.aclose()


@pytest.fixture()
def store(redis):
    return KVStore(redis)


@pytest.fixture()
def media_folder(tmp_path, monkeypatch):
    folder = tmp_path / "media"
    monkeypatch.setattr(settings, "MEDIA_FOLDER", folder)
    return folder


@pytest.fixture()
def app(redis):
    from main import app
    redis_manager._redis = redis
    yield app
    redis_manager._redis = None


@pytest.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
