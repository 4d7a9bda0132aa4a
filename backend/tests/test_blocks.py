"""
Tests for blocking and the messaging gate
"""
from uuid import uuid4

import pytest
from httpx import AsyncClient

from studybridge.core.errors import Forbidden
from studybridge.crud import block as block_crud
from studybridge.crud import user as user_crud
from studybridge.services import MessagingService


class TestBlock:

    async def test_block_user(self, client: AsyncClient, alice: dict, bob: dict):
        response = await client.post(f"/block/{bob['id']}", headers=alice['headers'])

        assert response.status_code == 200
        blocked = await client.get('/blocks', headers=alice['headers'])
        assert [user['id'] for user in blocked.json()] == [bob['id']]

    async def test_block_twice_is_noop(self, client: AsyncClient, alice: dict, bob: dict):
        await client.post(f"/block/{bob['id']}", headers=alice['headers'])

        response = await client.post(f"/block/{bob['id']}", headers=alice['headers'])

        assert response.status_code == 200
        blocked = await client.get('/blocks', headers=alice['headers'])
        assert len(blocked.json()) == 1

    async def test_block_self(self, client: AsyncClient, alice: dict):
        response = await client.post(f"/block/{alice['id']}", headers=alice['headers'])

        assert response.status_code == 400
        assert response.json()['code'] == 'invalid_request'

    async def test_block_unknown_user(self, client: AsyncClient, alice: dict):
        response = await client.post(f'/block/{uuid4()}', headers=alice['headers'])

        assert response.status_code == 404

    async def test_blocks_are_private_to_the_blocker(self, client: AsyncClient, alice: dict, bob: dict):
        await client.post(f"/block/{bob['id']}", headers=alice['headers'])

        response = await client.get('/blocks', headers=bob['headers'])

        assert response.json() == []


class TestMessagingGate:

    async def test_block_gates_both_directions(self, client: AsyncClient, alice: dict, bob: dict):
        await client.post(f"/block/{bob['id']}", headers=alice['headers'])

        from_bob = await client.post(f"/message/{alice['id']}", json={'content': 'hi'}, headers=bob['headers'])
        from_alice = await client.post(f"/message/{bob['id']}", json={'content': 'hi'}, headers=alice['headers'])

        assert from_bob.status_code == 403
        assert from_bob.json()['code'] == 'forbidden'
        assert from_alice.status_code == 403

    async def test_blocked_message_is_not_stored(self, client: AsyncClient, alice: dict, bob: dict):
        await client.post(f"/block/{alice['id']}", headers=bob['headers'])
        await client.post(f"/message/{bob['id']}", json={'content': 'hi'}, headers=alice['headers'])

        chat = await client.get(f"/chat/{bob['id']}", headers=alice['headers'])

        assert chat.json() == []

    async def test_block_does_not_affect_third_parties(self, client: AsyncClient, alice: dict, bob: dict, carol: dict):
        await client.post(f"/block/{bob['id']}", headers=alice['headers'])

        response = await client.post(f"/message/{carol['id']}", json={'content': 'hi'}, headers=alice['headers'])

        assert response.status_code == 200

    async def test_unblock_restores_messaging(self, client: AsyncClient, alice: dict, bob: dict):
        await client.post(f"/block/{bob['id']}", headers=alice['headers'])

        unblocked = await client.delete(f"/block/{bob['id']}", headers=alice['headers'])
        response = await client.post(f"/message/{alice['id']}", json={'content': 'hi'}, headers=bob['headers'])

        assert unblocked.status_code == 200
        assert unblocked.json()['message'] == 'User unblocked'
        assert response.status_code == 200

    async def test_unblock_by_blocked_user_has_no_effect(self, client: AsyncClient, alice: dict, bob: dict):
        await client.post(f"/block/{bob['id']}", headers=alice['headers'])

        response = await client.delete(f"/block/{alice['id']}", headers=bob['headers'])

        assert response.json()['message'] == 'User was not blocked'
        still_blocked = await client.post(f"/message/{alice['id']}", json={'content': 'hi'}, headers=bob['headers'])
        assert still_blocked.status_code == 403


class TestMessagingService:

    @pytest.fixture
    async def users(self, session):
        first = await user_crud.create_user(session, name='First', email='first@example.com', password_hash='x')
        second = await user_crud.create_user(session, name='Second', email='second@example.com', password_hash='x')
        await session.commit()
        return first.id, second.id

    async def test_is_blocked_is_symmetric(self, session, users):
        first, second = users
        service = MessagingService(session)
        await service.block(first, second)

        assert await service.is_blocked(first, second)
        assert await service.is_blocked(second, first)

    async def test_send_message_forbidden_when_blocked(self, session, users):
        first, second = users
        service = MessagingService(session)
        await block_crud.create_block(session, second, first)

        with pytest.raises(Forbidden):
            await service.send_message(first, second, 'hi')
