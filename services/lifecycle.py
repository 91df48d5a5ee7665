from typing import Dict, List

import events
from logging_config import get_logger
from schemas.users import Identity
from services.identities import IdentityDirectory
from services.rooms import LeaveOutcome, RoomRegistry
from transport import Emitter

logger = get_logger(__name__)


class ConnectionRoomIndex:
    """Which rooms each connection belongs to, for unwinding on disconnect."""

    def __init__(self):
        # Format: {connection_id: [room_id, ...]}
        self._rooms: Dict[str, List[str]] = {}

    def __contains__(self, connection_id: str) -> bool:
        return connection_id in self._rooms

    def add(self, connection_id: str, room_id: str) -> None:
        rooms = self._rooms.setdefault(connection_id, [])
        if room_id not in rooms:
            rooms.append(room_id)

    def discard(self, connection_id: str, room_id: str) -> None:
        rooms = self._rooms.get(connection_id)
        if not rooms:
            return
        if room_id in rooms:
            rooms.remove(room_id)
        if not rooms:
            del self._rooms[connection_id]

    def get(self, connection_id: str) -> List[str]:
        return list(self._rooms.get(connection_id, ()))

    def pop(self, connection_id: str) -> List[str]:
        return self._rooms.pop(connection_id, [])


class ConnectionLifecycle:
    def __init__(self, identities: IdentityDirectory, rooms: RoomRegistry, transport: Emitter):
        self.identities = identities
        self.rooms = rooms
        self.transport = transport
        self.index = ConnectionRoomIndex()

    def on_connect(self, connection_id: str) -> Identity:
        identity = self.identities.create_identity(connection_id)
        self.transport.emit(connection_id, events.DISPLAY_NAME, identity)
        self.broadcast_users()
        logger.info(f"{identity.display_name} ({connection_id}) connected")
        return identity

    def on_disconnect(self, connection_id: str) -> None:
        room_ids = self.index.get(connection_id)
        for room_id in room_ids:
            try:
                self.leave_room(connection_id, room_id)
            except Exception as e:
                logger.error(f"Error removing {connection_id} from room {room_id}: {e}", exc_info=True)
        self.index.pop(connection_id)

        identity = self.identities.get(connection_id)
        self.identities.retract(connection_id)
        self.broadcast_users()
        name = identity.display_name if identity else "unknown"
        logger.info(f"{name} ({connection_id}) disconnected after leaving {len(room_ids)} rooms")

    def track(self, connection_id: str, room_id: str) -> None:
        self.index.add(connection_id, room_id)

    def rooms_for(self, connection_id: str) -> List[str]:
        return self.index.get(connection_id)

    def leave_room(self, connection_id: str, room_id: str) -> LeaveOutcome:
        # Untrack first so the index never points at a room the user has left
        self.index.discard(connection_id, room_id)
        outcome = self.rooms.leave_room(room_id, connection_id)
        if outcome.closed:
            for user_id in outcome.remaining:
                self.index.discard(user_id, room_id)
        return outcome

    def broadcast_users(self) -> int:
        snapshot = {user_id: identity.to_wire() for user_id, identity in self.identities.snapshot().items()}
        return self.transport.broadcast(events.USERS, snapshot)
