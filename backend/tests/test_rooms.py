"""
Tests for chat rooms
"""
from httpx import AsyncClient


async def create_room(client: AsyncClient, owner: dict, name: str = 'Linear Algebra', **extra):
    return await client.post('/rooms', json={'name': name, **extra}, headers=owner['headers'])


class TestRoomLifecycle:

    async def test_create_room(self, client: AsyncClient, alice: dict):
        response = await create_room(client, alice, description='Weekly problem sets')

        assert response.status_code == 201
        data = response.json()
        assert data['name'] == 'Linear Algebra'
        assert data['description'] == 'Weekly problem sets'
        assert data['created_by'] == alice['id']

    async def test_creator_is_member(self, client: AsyncClient, alice: dict):
        room = (await create_room(client, alice)).json()

        response = await client.get(f"/rooms/{room['id']}/members", headers=alice['headers'])

        assert [member['id'] for member in response.json()] == [alice['id']]

    async def test_duplicate_name(self, client: AsyncClient, alice: dict, bob: dict):
        await create_room(client, alice)

        response = await create_room(client, bob)

        assert response.status_code == 400
        assert response.json()['code'] == 'conflict'

    async def test_list_rooms(self, client: AsyncClient, alice: dict):
        await create_room(client, alice, 'Physics')
        await create_room(client, alice, 'Chemistry')

        response = await client.get('/rooms', headers=alice['headers'])

        assert {room['name'] for room in response.json()} == {'Physics', 'Chemistry'}

    async def test_join_is_idempotent(self, client: AsyncClient, alice: dict, bob: dict):
        room = (await create_room(client, alice)).json()

        first = await client.post(f"/rooms/{room['id']}/join", headers=bob['headers'])
        second = await client.post(f"/rooms/{room['id']}/join", headers=bob['headers'])

        assert first.status_code == 200
        assert second.status_code == 200
        members = await client.get(f"/rooms/{room['id']}/members", headers=alice['headers'])
        assert {member['id'] for member in members.json()} == {alice['id'], bob['id']}

    async def test_leave_room(self, client: AsyncClient, alice: dict, bob: dict):
        room = (await create_room(client, alice)).json()
        await client.post(f"/rooms/{room['id']}/join", headers=bob['headers'])

        response = await client.delete(f"/rooms/{room['id']}/leave", headers=bob['headers'])

        assert response.status_code == 200
        members = await client.get(f"/rooms/{room['id']}/members", headers=alice['headers'])
        assert [member['id'] for member in members.json()] == [alice['id']]

    async def test_unknown_room(self, client: AsyncClient, alice: dict):
        response = await client.post('/rooms/9999/join', headers=alice['headers'])

        assert response.status_code == 404
        assert response.json()['code'] == 'not_found'


class TestRoomMessages:

    async def test_member_posts_and_reads(self, client: AsyncClient, alice: dict, bob: dict):
        room = (await create_room(client, alice)).json()
        await client.post(f"/rooms/{room['id']}/join", headers=bob['headers'])

        await client.post(f"/rooms/{room['id']}/messages", json={'content': 'first'}, headers=alice['headers'])
        posted = await client.post(f"/rooms/{room['id']}/messages", json={'content': 'second'}, headers=bob['headers'])
        history = await client.get(f"/rooms/{room['id']}/messages", headers=alice['headers'])

        assert posted.status_code == 201
        assert posted.json()['sender_id'] == bob['id']
        assert [message['content'] for message in history.json()] == ['first', 'second']

    async def test_non_member_cannot_post(self, client: AsyncClient, alice: dict, bob: dict):
        room = (await create_room(client, alice)).json()

        response = await client.post(f"/rooms/{room['id']}/messages", json={'content': 'hi'}, headers=bob['headers'])

        assert response.status_code == 403
        assert response.json()['code'] == 'forbidden'

    async def test_non_member_cannot_read(self, client: AsyncClient, alice: dict, bob: dict):
        room = (await create_room(client, alice)).json()

        response = await client.get(f"/rooms/{room['id']}/messages", headers=bob['headers'])

        assert response.status_code == 403

    async def test_former_member_loses_access(self, client: AsyncClient, alice: dict, bob: dict):
        room = (await create_room(client, alice)).json()
        await client.post(f"/rooms/{room['id']}/join", headers=bob['headers'])
        await client.delete(f"/rooms/{room['id']}/leave", headers=bob['headers'])

        response = await client.post(f"/rooms/{room['id']}/messages", json={'content': 'hi'}, headers=bob['headers'])

        assert response.status_code == 403

    async def test_post_to_unknown_room(self, client: AsyncClient, alice: dict):
        response = await client.post('/rooms/9999/messages', json={'content': 'hi'}, headers=alice['headers'])

        assert response.status_code == 404
