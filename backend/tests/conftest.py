"""
StudyBridge - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator

import pytest
from faker import Faker
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

# Set testing environment before the settings module is imported
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite://'
os.environ['LOG_LEVEL'] = 'WARNING'

from main import app
from studybridge.db.dependencies import get_database
from studybridge.db.models import Base
from studybridge.db.session import Database

fake = Faker()

TEST_DATABASE_URL = 'sqlite+aiosqlite://'
DEFAULT_PASSWORD = 'testpassword123'


@pytest.fixture(scope='function')
async def test_db() -> AsyncGenerator[Database, None]:
    """A fresh in-memory database with every table created"""
    database = Database(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={'check_same_thread': False},
    )
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield database

    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await database.dispose()


@pytest.fixture
async def session(test_db: Database):
    """A session on the test database for direct service and crud tests"""
    async with test_db.session_factory() as session:
        yield session


@pytest.fixture
async def client(test_db: Database) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    app.dependency_overrides[get_database] = lambda: test_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


async def register_user(client: AsyncClient, **overrides) -> dict:
    """
    Register a user through the API and return its id, token and auth
    headers alongside the submitted fields.
    """
    payload = {
        'name': fake.name(),
        'email': f'{fake.unique.user_name()}@example.com',
        'password': DEFAULT_PASSWORD,
    }
    payload.update(overrides)
    response = await client.post('/register', json=payload)
    assert response.status_code == 201, response.text
    body = response.json()
    return {
        **payload,
        'id': body['user']['id'],
        'token': body['token'],
        'headers': {'Authorization': f"Bearer {body['token']}"},
    }


@pytest.fixture
async def alice(client: AsyncClient) -> dict:
    return await register_user(client, name='Alice')


@pytest.fixture
async def bob(client: AsyncClient) -> dict:
    return await register_user(client, name='Bob')


@pytest.fixture
async def carol(client: AsyncClient) -> dict:
    return await register_user(client, name='Carol')
