"""
Tests for direct messaging and conversation listings
"""
from uuid import uuid4

from httpx import AsyncClient


async def send_message(client: AsyncClient, sender: dict, receiver: dict, content: str):
    return await client.post(f"/message/{receiver['id']}", json={'content': content}, headers=sender['headers'])


class TestSendMessage:

    async def test_send_message(self, client: AsyncClient, alice: dict, bob: dict):
        response = await send_message(client, alice, bob, 'Are you free to study tonight?')

        assert response.status_code == 200
        data = response.json()
        assert data['sender_id'] == alice['id']
        assert data['receiver_id'] == bob['id']
        assert data['content'] == 'Are you free to study tonight?'
        assert data['created_at']

    async def test_no_friendship_required(self, client: AsyncClient, alice: dict, carol: dict):
        response = await send_message(client, alice, carol, 'hello stranger')

        assert response.status_code == 200

    async def test_unknown_receiver(self, client: AsyncClient, alice: dict):
        response = await client.post(f'/message/{uuid4()}', json={'content': 'hi'}, headers=alice['headers'])

        assert response.status_code == 404
        assert response.json()['code'] == 'not_found'

    async def test_empty_content_rejected(self, client: AsyncClient, alice: dict, bob: dict):
        response = await send_message(client, alice, bob, '')

        assert response.status_code == 400
        assert response.json()['code'] == 'invalid_request'

    async def test_missing_body_rejected(self, client: AsyncClient, alice: dict, bob: dict):
        response = await client.post(f"/message/{bob['id']}", headers=alice['headers'])

        assert response.status_code == 400

    async def test_malformed_user_id(self, client: AsyncClient, alice: dict):
        response = await client.post('/message/not-a-uuid', json={'content': 'hi'}, headers=alice['headers'])

        assert response.status_code == 400
        assert response.json()['code'] == 'invalid_request'


class TestConversation:

    async def test_conversation_in_creation_order(self, client: AsyncClient, alice: dict, bob: dict):
        for sender, receiver, content in (
            (alice, bob, 'one'),
            (bob, alice, 'two'),
            (alice, bob, 'three'),
        ):
            await send_message(client, sender, receiver, content)

        alice_view = await client.get(f"/chat/{bob['id']}", headers=alice['headers'])
        bob_view = await client.get(f"/chat/{alice['id']}", headers=bob['headers'])

        assert [m['content'] for m in alice_view.json()] == ['one', 'two', 'three']
        assert alice_view.json() == bob_view.json()

    async def test_conversation_excludes_other_pairs(self, client: AsyncClient, alice: dict, bob: dict, carol: dict):
        await send_message(client, alice, bob, 'for bob')
        await send_message(client, alice, carol, 'for carol')

        response = await client.get(f"/chat/{bob['id']}", headers=alice['headers'])

        assert [m['content'] for m in response.json()] == ['for bob']

    async def test_empty_conversation(self, client: AsyncClient, alice: dict, bob: dict):
        response = await client.get(f"/chat/{bob['id']}", headers=alice['headers'])

        assert response.status_code == 200
        assert response.json() == []

    async def test_conversation_peers(self, client: AsyncClient, alice: dict, bob: dict, carol: dict):
        await send_message(client, alice, bob, 'a to b')
        await send_message(client, bob, alice, 'b to a')
        await send_message(client, carol, alice, 'c to a')

        alice_peers = await client.get('/chats', headers=alice['headers'])
        bob_peers = await client.get('/chats', headers=bob['headers'])

        assert sorted(peer['id'] for peer in alice_peers.json()) == sorted([bob['id'], carol['id']])
        assert [peer['id'] for peer in bob_peers.json()] == [alice['id']]

    async def test_chat_requires_authentication(self, client: AsyncClient, bob: dict):
        response = await client.get(f"/chat/{bob['id']}")

        assert response.status_code == 401
