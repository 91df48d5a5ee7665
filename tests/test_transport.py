import asyncio
import json

from schemas.rooms import LeaveRoomNotice
from transport import ConnectionManager, encode_message


class FakeWebSocket:
    def __init__(self, fail=False):
        self.accepted = False
        self.sent = []
        self.fail = fail

    async def accept(self):
        self.accepted = True

    async def send_text(self, text):
        if self.fail:
            raise RuntimeError("connection reset")
        self.sent.append(json.loads(text))


async def drain():
    for _ in range(5):
        await asyncio.sleep(0)


def test_encode_message_serializes_wire_models() -> None:
    assert json.loads(encode_message("LEAVE_ROOM", LeaveRoomNotice(room_id="r1"))) == {
        "event": "LEAVE_ROOM",
        "data": {"roomId": "r1"},
    }


def test_emit_and_broadcast_are_delivered_in_order() -> None:
    async def scenario():
        manager = ConnectionManager()
        first, second = FakeWebSocket(), FakeWebSocket()
        c1 = await manager.connect(first)
        c2 = await manager.connect(second)
        assert first.accepted and second.accepted
        assert c1 != c2

        assert manager.emit(c1, "DISPLAY_NAME", {"userId": c1})
        assert manager.broadcast("USERS", {}) == 2
        await drain()

        assert first.sent == [{"event": "DISPLAY_NAME", "data": {"userId": c1}}, {"event": "USERS", "data": {}}]
        assert second.sent == [{"event": "USERS", "data": {}}]

        manager.disconnect(c1)
        manager.disconnect(c2)
        assert len(manager) == 0

    asyncio.run(scenario())


def test_full_queue_drops_instead_of_blocking() -> None:
    async def scenario():
        manager = ConnectionManager(queue_size=1)
        ws = FakeWebSocket()
        connection_id = await manager.connect(ws)

        # Writer has not started, so "A" still occupies the only slot
        assert manager.emit(connection_id, "A") is True
        assert manager.emit(connection_id, "B") is False
        assert manager.broadcast("C") == 0
        await drain()

        assert ws.sent == [{"event": "A", "data": None}]
        manager.disconnect(connection_id)

    asyncio.run(scenario())


def test_emit_to_unknown_connection_is_dropped() -> None:
    manager = ConnectionManager()
    assert manager.emit("nobody", "USERS", {}) is False
    assert manager.broadcast("USERS", {}) == 0


def test_failed_send_stops_only_that_writer() -> None:
    async def scenario():
        manager = ConnectionManager()
        broken, healthy = FakeWebSocket(fail=True), FakeWebSocket()
        bad_id = await manager.connect(broken)
        good_id = await manager.connect(healthy)

        manager.broadcast("USERS", {})
        await drain()

        assert manager.connections[bad_id].writer.done()
        assert healthy.sent == [{"event": "USERS", "data": {}}]

        manager.disconnect(bad_id)
        manager.disconnect(good_id)
        manager.disconnect(good_id)

    asyncio.run(scenario())
