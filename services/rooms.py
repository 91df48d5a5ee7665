"""Room lifecycle and membership state machine.

Per member: INVITED (accepted=False) -> ACCEPTED (accepted=True) -> removed.
Per room: OPEN (some member pending) <-> FULL (all accepted) -> CLOSED (deleted).

Status updates go only to accepted members. Every fan-out works on a
snapshot of the recipients taken before the first send.
"""

import itertools
import secrets
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import events
from errors import AlreadyInRoom, NotInvited, RoomFull, RoomNotFound
from logging_config import get_logger
from schemas.rooms import InviteState, LeaveRoomNotice, RoomDetailsResponse, RoomInviteNotice, RoomStatus
from schemas.users import Identity
from transport import Emitter

logger = get_logger(__name__)


class RoomIdGenerator:
    """Room ids unique for the life of the process.

    A random token keeps ids unguessable; the sequence suffix makes two ids
    from the same generator distinct regardless of the token.
    """

    def __init__(self, token_bytes: int = 8):
        self.token_bytes = token_bytes
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            seq = next(self._counter)
        return f"{secrets.token_hex(self.token_bytes)}{seq:x}"


@dataclass
class Room:
    room_id: str
    owner_id: str
    invited: Dict[str, InviteState] = field(default_factory=dict)

    @property
    def full(self) -> bool:
        return all(state.accepted for state in self.invited.values())

    def accepted_ids(self) -> List[str]:
        return [user_id for user_id, state in self.invited.items() if state.accepted]

    def invited_snapshot(self) -> Dict[str, InviteState]:
        return {user_id: state.model_copy() for user_id, state in self.invited.items()}

    def details(self) -> RoomDetailsResponse:
        return RoomDetailsResponse(
            room_id=self.room_id,
            owner=self.owner_id,
            invited=self.invited_snapshot(),
            invited_count=len(self.invited),
            accepted_count=len(self.accepted_ids()),
            full=self.full,
        )


@dataclass
class LeaveOutcome:
    room_id: str
    user_id: str
    removed: bool = False
    closed: bool = False
    remaining: List[str] = field(default_factory=list)


class RoomRegistry:
    def __init__(self, transport: Emitter, id_generator: Optional[RoomIdGenerator] = None):
        self.transport = transport
        self.id_generator = id_generator or RoomIdGenerator()
        self._rooms: Dict[str, Room] = {}

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, room_id: str) -> bool:
        return room_id in self._rooms

    def get_room(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    def rooms_for_user(self, user_id: str) -> List[str]:
        return [room_id for room_id, room in self._rooms.items() if user_id in room.invited]

    def create_room(self, owner_id: str, invited: Dict[str, InviteState], owner: Optional[Identity] = None) -> str:
        members = {user_id: state.model_copy() for user_id, state in invited.items()}
        if owner_id not in members:
            if owner is None:
                raise ValueError(f"owner {owner_id} is not in the invite list")
            members[owner_id] = InviteState(accepted=True, display_name=owner)
        members[owner_id].accepted = True

        room_id = self.id_generator.next_id()
        if room_id in self._rooms:
            raise RuntimeError(f"room id {room_id} already in use")
        self._rooms[room_id] = Room(room_id=room_id, owner_id=owner_id, invited=members)
        logger.info(f"{owner_id} has created room {room_id} with {len(members)} invited")
        return room_id

    def connect_to_room(self, user_id: str, room_id: str) -> Room:
        room = self._require_room(room_id)
        state = room.invited.get(user_id)
        if state is None:
            if room.full:
                logger.warning(f"{user_id} tried to connect to full room {room_id}")
                raise RoomFull(room_id=room_id)
            logger.warning(f"{user_id} tried to connect to room {room_id} without an invite")
            raise NotInvited(room_id=room_id)
        if user_id == room.owner_id:
            # Owner joins right after creating; its slot is accepted already
            logger.info(f"Owner {user_id} connected to room {room_id}")
        elif state.accepted:
            logger.warning(f"{user_id} is already connected to room {room_id}")
            raise AlreadyInRoom(room_id=room_id)
        else:
            state.accepted = True
            logger.info(f"{user_id} connected to room {room_id}")
        self._broadcast_status(room, events.USER_CONNECT, user_id, include_invited=False)
        return room

    def send_invites(self, room_id: str, sender: Identity) -> int:
        room = self._require_room(room_id)
        notice = RoomInviteNotice(sender=sender, room_id=room_id)
        recipients = [user_id for user_id in room.invited if user_id != sender.user_id]
        for user_id in recipients:
            self._emit(user_id, events.SEND_ROOM_INVITES, notice)
        logger.info(f"{sender.user_id} sent invites for room {room_id} to {len(recipients)} users")
        return len(recipients)

    def accept_transfer_request(self, room_id: str, user_id: str) -> Room:
        room = self._require_room(room_id)
        state = self._require_invite(room, user_id)
        state.accepted = True
        logger.info(f"{user_id} accepted transfer request for room {room_id}")
        self._broadcast_status(room, events.USER_CONNECT, user_id, include_invited=True)
        return room

    def reject_transfer_request(self, room_id: str, user_id: str) -> Room:
        # Broadcast only; removing the user is a separate leave_room call
        room = self._require_room(room_id)
        self._require_invite(room, user_id)
        logger.info(f"{user_id} rejected transfer request for room {room_id}")
        self._broadcast_status(room, events.USER_DISCONNECT, user_id, include_invited=True)
        return room

    def leave_room(self, room_id: str, user_id: str) -> LeaveOutcome:
        outcome = LeaveOutcome(room_id=room_id, user_id=user_id)
        room = self._rooms.get(room_id)
        if room is None:
            logger.debug(f"{user_id} left unknown room {room_id}, ignoring")
            return outcome
        if room.invited.pop(user_id, None) is None:
            logger.debug(f"{user_id} is not a member of room {room_id}, ignoring")
            return outcome

        outcome.removed = True
        outcome.remaining = list(room.invited)
        logger.info(f"{user_id} disconnected from room {room_id}")

        # Counts every remaining invitee, accepted or not
        if len(room.invited) == 1:
            last_user_id = outcome.remaining[0]
            self.close_room(room_id)
            self._emit(last_user_id, events.LEAVE_ROOM, LeaveRoomNotice(room_id=room_id))
            outcome.closed = True
            logger.info(f"Everyone left room {room_id} and it has been closed")
        elif not room.invited:
            self.close_room(room_id)
            outcome.closed = True
            logger.info(f"Room {room_id} is empty and has been closed")
        else:
            self._broadcast_status(room, events.USER_DISCONNECT, user_id, include_invited=True)
        return outcome

    def close_room(self, room_id: str) -> Optional[Room]:
        return self._rooms.pop(room_id, None)

    def _require_room(self, room_id: str) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            logger.warning(f"Operation on inexistent room: {room_id}")
            raise RoomNotFound(room_id=room_id)
        return room

    def _require_invite(self, room: Room, user_id: str) -> InviteState:
        state = room.invited.get(user_id)
        if state is None:
            logger.warning(f"{user_id} is not invited to room {room.room_id}")
            raise NotInvited(room_id=room.room_id)
        return state

    def _broadcast_status(self, room: Room, status_type: str, user_id: str, include_invited: bool) -> int:
        status = RoomStatus(
            type=status_type,
            room_id=room.room_id,
            invited=room.invited_snapshot() if include_invited else None,
            full=room.full,
            owner=room.owner_id,
            user_id=user_id,
        )
        recipients = room.accepted_ids()
        for recipient in recipients:
            self._emit(recipient, events.ROOM_STATUS, status)
        logger.debug(f"ROOM_STATUS {status_type} for room {room.room_id} sent to {len(recipients)} members")
        return len(recipients)

    def _emit(self, connection_id: str, event: str, data) -> None:
        try:
            self.transport.emit(connection_id, event, data)
        except Exception as e:
            logger.error(f"Failed to emit {event} to {connection_id}: {e}", exc_info=True)
