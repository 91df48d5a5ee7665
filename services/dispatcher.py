from typing import Dict, assert_never

import events
from constants import RANDOM_USERS_COUNT, REMOVE_ON_REJECT
from logging_config import get_logger
from schemas.events import (
    AcceptTransferRequestEvent,
    ClientEvent,
    ConnectToRoomEvent,
    CreateRoomEvent,
    FileMessageEvent,
    GetUsersEvent,
    IceCandidateEvent,
    LeaveRoomEvent,
    LoginEvent,
    RejectTransferRequestEvent,
    SearchUsersEvent,
    SendRoomInvitesEvent,
    SessionDescriptionEvent,
)
from schemas.rooms import CreateRoomRequest, CreateRoomResponse, InviteState
from schemas.users import Identity
from services.identities import IdentityDirectory
from services.lifecycle import ConnectionLifecycle
from services.relay import SignalRelay
from services.rooms import RoomRegistry
from transport import Emitter

logger = get_logger(__name__)


class EventDispatcher:
    """Routes one validated client event to the room, identity and relay services.

    Raises SignalingError subclasses for rejected requests; the caller reports
    them to the requesting connection.
    """

    def __init__(
        self,
        identities: IdentityDirectory,
        rooms: RoomRegistry,
        relay: SignalRelay,
        lifecycle: ConnectionLifecycle,
        transport: Emitter,
        random_users_count: int = RANDOM_USERS_COUNT,
        remove_on_reject: bool = REMOVE_ON_REJECT,
    ):
        self.identities = identities
        self.rooms = rooms
        self.relay = relay
        self.lifecycle = lifecycle
        self.transport = transport
        self.random_users_count = random_users_count
        self.remove_on_reject = remove_on_reject

    def dispatch(self, connection_id: str, message: ClientEvent) -> None:
        logger.debug(f"Dispatching {message.event} from {connection_id}")
        match message:
            case LoginEvent():
                self.login(connection_id)
            case GetUsersEvent():
                users = {identity.user_id: identity.to_wire() for identity in self.identities.sample(self.random_users_count)}
                self.transport.emit(connection_id, events.USERS, users)
            case SearchUsersEvent(data=term):
                matches = [identity.to_wire() for identity in self.identities.search(term)]
                self.transport.emit(connection_id, events.SEARCH_USERS, matches)
            case CreateRoomEvent(data=request):
                self.create_room(connection_id, request)
            case ConnectToRoomEvent(data=request):
                self.rooms.connect_to_room(connection_id, request.room_id)
                self.lifecycle.track(connection_id, request.room_id)
            case LeaveRoomEvent(data=request):
                self.lifecycle.leave_room(connection_id, request.room_id)
            case SendRoomInvitesEvent(data=request):
                self.rooms.send_invites(request.room_id, self.identity_of(connection_id))
            case AcceptTransferRequestEvent(data=request):
                self.rooms.accept_transfer_request(request.room_id, connection_id)
                self.lifecycle.track(connection_id, request.room_id)
            case RejectTransferRequestEvent(data=request):
                self.rooms.reject_transfer_request(request.room_id, connection_id)
                if self.remove_on_reject:
                    self.lifecycle.leave_room(connection_id, request.room_id)
            case FileMessageEvent(event=name, data=file_message):
                self.relay.route_file_message(file_message.room_id, name, file_message, self.identities.get(connection_id))
            case SessionDescriptionEvent(event=name, data=description):
                self.relay.relay(description.room_id, name, description, connection_id)
            case IceCandidateEvent(event=name, data=candidate):
                self.relay.relay(candidate.room_id, name, candidate, connection_id)
            case _:
                assert_never(message)

    def login(self, connection_id: str) -> Identity:
        identity = self.identities.get(connection_id)
        if identity is None:
            return self.lifecycle.on_connect(connection_id)
        self.transport.emit(connection_id, events.DISPLAY_NAME, identity)
        return identity

    def identity_of(self, connection_id: str) -> Identity:
        identity = self.identities.get(connection_id)
        if identity is None:
            identity = self.login(connection_id)
        return identity

    def create_room(self, connection_id: str, request: CreateRoomRequest) -> str:
        owner = self.identity_of(connection_id)
        invited: Dict[str, InviteState] = {}
        for user_id, invite in request.invited.items():
            identity = self.identities.get(user_id)
            if identity is None:
                logger.warning(f"{connection_id} invited unknown user {user_id}, skipping")
                continue
            invited[user_id] = InviteState(accepted=invite.accepted, display_name=identity)

        room_id = self.rooms.create_room(connection_id, invited, owner=owner)
        room = self.rooms.get_room(room_id)
        for user_id in room.invited:
            self.lifecycle.track(user_id, room_id)
        self.transport.emit(connection_id, events.CREATE_ROOM_SUCCESS, CreateRoomResponse(room_id=room_id))
        return room_id
