from typing import Any, Optional

from logging_config import get_logger
from schemas.base import WireModel
from schemas.signals import FileMessage
from schemas.users import Identity
from services.rooms import RoomRegistry
from transport import Emitter

logger = get_logger(__name__)


class SignalRelay:
    """Best-effort forwarding of handshake messages between room members.

    Holds no state; the room registry is consulted on every message so a
    member who left stops receiving immediately.
    """

    def __init__(self, rooms: RoomRegistry, transport: Emitter):
        self.rooms = rooms
        self.transport = transport

    def relay(self, room_id: str, message_type: str, payload: Any, sender_id: str) -> int:
        room = self.rooms.get_room(room_id)
        if room is None:
            logger.debug(f"Dropping {message_type} from {sender_id}: room {room_id} no longer exists")
            return 0

        if isinstance(payload, WireModel):
            payload = payload.to_wire()
        recipients = [user_id for user_id in room.accepted_ids() if user_id != sender_id]
        delivered = 0
        for user_id in recipients:
            if self._forward(user_id, message_type, payload):
                delivered += 1
        logger.debug(f"Relayed {message_type} from {sender_id} in room {room_id} to {delivered}/{len(recipients)} members")
        return delivered

    def route_file_message(self, room_id: str, message_type: str, message: FileMessage, sender: Optional[Identity]) -> int:
        """Forward a file negotiation message.

        The sender field is always replaced with the sending connection's
        identity. A message naming an accepted member in ``recipientId`` goes
        to that member only; anything else falls back to the room relay.
        """
        sender_id = sender.user_id if sender is not None else None
        message = message.model_copy(update={"sender": sender.to_wire() if sender is not None else None})
        payload = message.to_wire()

        room = self.rooms.get_room(room_id)
        if room is None:
            logger.debug(f"Dropping {message_type} from {sender_id}: room {room_id} no longer exists")
            return 0

        recipient_id = message.recipient_id
        if recipient_id and recipient_id != sender_id:
            state = room.invited.get(recipient_id)
            if state is not None and state.accepted:
                logger.debug(f"Routing {message_type} for file {message.file_id} from {sender_id} to {recipient_id}")
                return 1 if self._forward(recipient_id, message_type, payload) else 0
            logger.debug(f"Recipient {recipient_id} not accepted in room {room_id}, relaying {message_type} to room")

        return self.relay(room_id, message_type, payload, sender_id)

    def _forward(self, user_id: str, message_type: str, payload: Any) -> bool:
        try:
            return bool(self.transport.emit(user_id, message_type, payload))
        except Exception as e:
            logger.error(f"Failed to relay {message_type} to {user_id}: {e}", exc_info=True)
            return False
