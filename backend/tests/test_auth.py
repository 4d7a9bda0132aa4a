"""
Tests for registration, login and bearer token handling
"""
from datetime import timedelta
from uuid import uuid4

from httpx import AsyncClient

from studybridge.core.security import create_access_token, decode_access_token, get_password_hash, verify_password
from conftest import DEFAULT_PASSWORD, fake, register_user


class TestRegistration:
    """Test user registration"""

    async def test_register_returns_token_and_user(self, client: AsyncClient):
        email = f'{fake.unique.user_name()}@example.com'
        response = await client.post('/register', json={
            'name': 'Dana',
            'email': email,
            'password': 'secret',
        })

        assert response.status_code == 201
        data = response.json()
        assert data['token']
        assert data['token_type'] == 'bearer'
        assert data['user']['email'] == email
        assert data['user']['name'] == 'Dana'
        assert 'password' not in data['user']
        assert 'password_hash' not in data['user']

    async def test_register_accepts_username_field(self, client: AsyncClient):
        response = await client.post('/register', json={
            'username': 'Eve',
            'email': f'{fake.unique.user_name()}@example.com',
            'password': 'secret',
        })

        assert response.status_code == 201
        assert response.json()['user']['name'] == 'Eve'

    async def test_register_duplicate_email(self, client: AsyncClient, alice: dict):
        response = await client.post('/register', json={
            'name': 'Other',
            'email': alice['email'].upper(),
            'password': 'secret',
        })

        assert response.status_code == 400
        assert response.json()['code'] == 'conflict'

    async def test_register_duplicate_phone(self, client: AsyncClient):
        await register_user(client, phone='+15550001')

        response = await client.post('/register', json={
            'name': 'Other',
            'email': f'{fake.unique.user_name()}@example.com',
            'password': 'secret',
            'phone': '+15550001',
        })

        assert response.status_code == 400
        assert response.json()['code'] == 'conflict'

    async def test_register_blank_phone_is_not_stored(self, client: AsyncClient):
        first = await register_user(client, phone='')

        response = await client.post('/register', json={
            'name': 'Second',
            'email': f'{fake.unique.user_name()}@example.com',
            'password': 'secret',
            'phone': '',
        })

        assert response.status_code == 201
        assert response.json()['user']['phone'] is None
        profile = await client.get('/profile', headers=first['headers'])
        assert profile.json()['phone'] is None

    async def test_register_missing_fields(self, client: AsyncClient):
        response = await client.post('/register', json={'email': 'nobody@example.com'})

        assert response.status_code == 400
        data = response.json()
        assert data['code'] == 'invalid_request'
        assert data['message']

    async def test_register_invalid_email(self, client: AsyncClient):
        response = await client.post('/register', json={
            'name': 'Bad',
            'email': 'not-an-email',
            'password': 'secret',
        })

        assert response.status_code == 400
        assert response.json()['code'] == 'invalid_request'


class TestLogin:
    """Test email/password login"""

    async def test_login_success(self, client: AsyncClient, alice: dict):
        response = await client.post('/login', json={
            'email': alice['email'],
            'password': DEFAULT_PASSWORD,
        })

        assert response.status_code == 200
        data = response.json()
        assert data['user']['id'] == alice['id']
        assert decode_access_token(data['token']) is not None

    async def test_login_wrong_password(self, client: AsyncClient, alice: dict):
        response = await client.post('/login', json={
            'email': alice['email'],
            'password': 'wrong-password',
        })

        assert response.status_code == 400
        assert response.json()['code'] == 'invalid_credentials'

    async def test_login_unknown_email(self, client: AsyncClient):
        response = await client.post('/login', json={
            'email': 'ghost@example.com',
            'password': 'whatever',
        })

        assert response.status_code == 400
        assert response.json()['code'] == 'invalid_credentials'


class TestBearerAuth:
    """Test protected endpoint access"""

    async def test_missing_header(self, client: AsyncClient):
        response = await client.get('/profile')

        assert response.status_code == 401
        assert response.json()['code'] == 'unauthenticated'
        assert response.headers['www-authenticate'] == 'Bearer'

    async def test_garbage_token(self, client: AsyncClient):
        response = await client.get('/profile', headers={'Authorization': 'Bearer not.a.token'})

        assert response.status_code == 401
        assert response.json()['code'] == 'unauthenticated'

    async def test_expired_token(self, client: AsyncClient, alice: dict):
        token, _ = create_access_token(alice['id'], expires_delta=timedelta(minutes=-1))

        response = await client.get('/profile', headers={'Authorization': f'Bearer {token}'})

        assert response.status_code == 401

    async def test_token_for_deleted_user_is_not_found(self, client: AsyncClient):
        token, _ = create_access_token(uuid4())

        response = await client.get('/profile', headers={'Authorization': f'Bearer {token}'})

        assert response.status_code == 404
        assert response.json()['code'] == 'not_found'


class TestSecurityHelpers:

    def test_password_hash_roundtrip(self):
        hashed = get_password_hash('hunter2')

        assert hashed != 'hunter2'
        assert verify_password('hunter2', hashed)
        assert not verify_password('hunter3', hashed)

    def test_token_carries_user_id(self):
        user_id = uuid4()
        token, expires_at = create_access_token(user_id)

        assert decode_access_token(token) == user_id
        assert expires_at is not None

    def test_tampered_token_rejected(self):
        token, _ = create_access_token(uuid4())

        header_and_payload = token.rsplit('.', 1)[0]

        assert decode_access_token(header_and_payload + '.' + 'A' * 43) is None
