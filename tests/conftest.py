import pytest
from httpx import ASGITransport, AsyncClient

from todo_api.app import create_app
from todo_api.config import Settings
from todo_api.database import init_models

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

PASSWORD = "Passw0rd!"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings():
    return Settings(
        jwt_secret=TEST_JWT_SECRET,
        database_url=TEST_DATABASE_URL,
        bcrypt_rounds=4,
    )


@pytest.fixture
async def initialized_app(settings):
    app = create_app(settings)
    # ASGITransport does not run the lifespan, so create the tables here
    await init_models(app.state.engine)
    yield app
    await app.state.engine.dispose()


@pytest.fixture
async def client(initialized_app):
    transport = ASGITransport(app=initialized_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def register(client):
    async def _register(email="a@b.com", password=PASSWORD):
        res = await client.post("/api/auth/register", json={"email": email, "password": password})
        assert res.status_code == 201, res.text
        data = res.json()
        return data["user"], {"Authorization": f"Bearer {data['token']}"}

    return _register
