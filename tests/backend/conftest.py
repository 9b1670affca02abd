import os
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise


TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ.setdefault("JWT_SECRET", "test-secret")

from storerating.core import db as db_module  # noqa: E402
from storerating.core.security import create_access_token, hash_password  # noqa: E402
from storerating.main import app  # noqa: E402
from storerating.models.rating import Rating  # noqa: E402
from storerating.models.store import Store  # noqa: E402
from storerating.models.user import Role, User  # noqa: E402

db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL

API = "/api"
DEFAULT_PASSWORD = "Secret#123"


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def client():
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    """
    await _init_test_db()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def create_user(client):
    """
    Factory fixture to create users of any role directly via ORM.
    """

    async def _create_user(
        role: Role = Role.USER,
        password: str = DEFAULT_PASSWORD,
        email: str | None = None,
        name: str | None = None,
    ) -> User:
        tag = uuid.uuid4().hex[:6]
        return await User.create(
            name=name or f"{role.value} {tag}",
            email=email or f"{role.value}_{tag}@storerating.io",
            password_hash=hash_password(password),
            address="1 Market Street",
            role=role,
        )

    return _create_user


@pytest_asyncio.fixture
async def create_store(client):
    """
    Factory fixture to create stores directly via ORM.
    """

    async def _create_store(owner: User | None = None, name: str | None = None) -> Store:
        tag = uuid.uuid4().hex[:6]
        return await Store.create(
            name=name or f"Store {tag}",
            email=f"store_{tag}@storerating.io",
            address="42 High Street",
            owner=owner,
        )

    return _create_store


@pytest_asyncio.fixture
async def create_rating(client):
    async def _create_rating(user: User, store: Store, value: int) -> Rating:
        return await Rating.create(user=user, store=store, rating=value)

    return _create_rating


def auth_headers(user: User) -> dict[str, str]:
    """Authorization header carrying a freshly issued token for `user`."""
    token = create_access_token(user.id, user.email, user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers
