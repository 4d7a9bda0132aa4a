"""
Tests for the WebSocket connection manager, event fan-out and endpoint
"""
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from httpx import AsyncClient
from starlette.websockets import WebSocketDisconnect

from main import app
from studybridge.core.security import create_access_token
from studybridge.ws.connection_manager import ConnectionManager
from studybridge.ws.events import WebSocketEventHandler
from studybridge.ws.message_types import MessageType


class FakeWebSocket:
    """Records sent frames; optionally fails every send"""

    def __init__(self, broken: bool = False):
        self.sent = []
        self.broken = broken

    async def send_json(self, message):
        if self.broken:
            raise RuntimeError('socket closed')
        self.sent.append(message)


@pytest.fixture
def manager():
    return ConnectionManager()


class TestConnectionManager:

    async def test_connect_and_disconnect(self, manager):
        socket = FakeWebSocket()

        await manager.connect(socket, 'user-1')
        assert manager.is_user_connected('user-1')
        assert manager.get_total_connections() == 1

        await manager.disconnect(socket, 'user-1')
        assert not manager.is_user_connected('user-1')
        assert manager.active_connections == {}

    async def test_connect_requires_user(self, manager):
        with pytest.raises(ValueError):
            await manager.connect(FakeWebSocket(), '')

    async def test_every_socket_of_a_user_receives(self, manager):
        tab, phone = FakeWebSocket(), FakeWebSocket()
        await manager.connect(tab, 'user-1')
        await manager.connect(phone, 'user-1')

        await manager.send_to_user({'type': 'pong'}, 'user-1')

        assert tab.sent == [{'type': 'pong'}]
        assert phone.sent == [{'type': 'pong'}]

    async def test_failing_socket_is_dropped(self, manager):
        healthy, broken = FakeWebSocket(), FakeWebSocket(broken=True)
        await manager.connect(healthy, 'user-1')
        await manager.connect(broken, 'user-1')

        await manager.send_to_user({'type': 'pong'}, 'user-1')

        assert healthy.sent == [{'type': 'pong'}]
        assert manager.get_total_connections() == 1

    async def test_send_to_offline_user_is_silent(self, manager):
        await manager.send_to_user({'type': 'pong'}, 'nobody')

        assert manager.get_total_connections() == 0

    async def test_send_to_users_deduplicates(self, manager):
        socket = FakeWebSocket()
        await manager.connect(socket, 'user-1')

        await manager.send_to_users({'type': 'pong'}, ['user-1', 'user-1'])

        assert len(socket.sent) == 1


class TestEventHandler:

    async def test_new_message_reaches_both_participants(self, manager):
        sender, receiver, bystander = FakeWebSocket(), FakeWebSocket(), FakeWebSocket()
        await manager.connect(sender, 'a')
        await manager.connect(receiver, 'b')
        await manager.connect(bystander, 'c')
        handler = WebSocketEventHandler(manager)

        await handler.notify_new_message({'id': 1, 'sender_id': 'a', 'receiver_id': 'b', 'content': 'hi'})

        assert sender.sent[0]['type'] == MessageType.NEW_MESSAGE.value
        assert receiver.sent[0]['data']['content'] == 'hi'
        assert bystander.sent == []

    async def test_connection_events_target_one_side(self, manager):
        sender, receiver = FakeWebSocket(), FakeWebSocket()
        await manager.connect(sender, 'a')
        await manager.connect(receiver, 'b')
        handler = WebSocketEventHandler(manager)
        request = {'id': 7, 'sender_id': 'a', 'receiver_id': 'b', 'status': 'pending'}

        await handler.notify_connection_request(request)
        await handler.notify_connection_accepted(request)

        assert [frame['type'] for frame in receiver.sent] == ['connection_request']
        assert [frame['type'] for frame in sender.sent] == ['connection_accepted']


class TestHttpTriggeredEvents:

    @pytest.fixture
    def live_manager(self):
        manager = app.state.ws_event_handler.connection_manager
        yield manager
        manager.active_connections.clear()

    async def test_direct_message_pushed_to_receiver(self, client: AsyncClient, alice: dict, bob: dict, live_manager):
        socket = FakeWebSocket()
        await live_manager.connect(socket, bob['id'])

        await client.post(f"/message/{bob['id']}", json={'content': 'ping me'}, headers=alice['headers'])

        assert len(socket.sent) == 1
        assert socket.sent[0]['type'] == 'new_message'
        assert socket.sent[0]['data']['content'] == 'ping me'

    async def test_blocked_message_is_not_pushed(self, client: AsyncClient, alice: dict, bob: dict, live_manager):
        socket = FakeWebSocket()
        await live_manager.connect(socket, bob['id'])
        await client.post(f"/block/{alice['id']}", headers=bob['headers'])

        await client.post(f"/message/{bob['id']}", json={'content': 'hi'}, headers=alice['headers'])

        assert socket.sent == []

    async def test_connection_request_pushed_to_receiver(self, client: AsyncClient, alice: dict, bob: dict, live_manager):
        socket = FakeWebSocket()
        await live_manager.connect(socket, bob['id'])

        await client.post(f"/connect/{bob['id']}", headers=alice['headers'])

        assert [frame['type'] for frame in socket.sent] == ['connection_request']
        assert socket.sent[0]['data']['sender_id'] == alice['id']

    async def test_ws_status(self, client: AsyncClient, alice: dict, live_manager):
        await live_manager.connect(FakeWebSocket(), alice['id'])

        response = await client.get('/ws/status', headers=alice['headers'])

        assert response.json() == {'connected': True, 'connections': 1}


class TestWebSocketEndpoint:

    def test_rejects_missing_token(self):
        client = TestClient(app)

        with pytest.raises(WebSocketDisconnect) as excinfo:
            with client.websocket_connect('/ws'):
                pass

        assert excinfo.value.code == 1008

    def test_rejects_invalid_token(self):
        client = TestClient(app)

        with pytest.raises(WebSocketDisconnect):
            with client.websocket_connect('/ws?token=garbage'):
                pass

    def test_connect_and_ping(self):
        user_id = uuid4()
        token, _ = create_access_token(user_id)
        client = TestClient(app)

        with client.websocket_connect(f'/ws?token={token}') as websocket:
            assert websocket.receive_json() == {'type': 'connected', 'user_id': str(user_id)}

            websocket.send_json({'type': 'ping'})
            assert websocket.receive_json() == {'type': 'pong'}

            websocket.send_json({'type': 'bogus'})
            error = websocket.receive_json()
            assert error['type'] == 'error'
            assert 'bogus' in error['message']
