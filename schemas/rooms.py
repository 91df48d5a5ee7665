from typing import Dict, Optional

from schemas.base import WireModel
from schemas.users import Identity


class InviteState(WireModel):
    accepted: bool = False
    display_name: Identity


class InviteRequest(WireModel):
    """Invite entry as sent by a client; the server fills in the identity."""

    accepted: bool = False
    display_name: Optional[Identity] = None


class CreateRoomRequest(WireModel):
    invited: Dict[str, InviteRequest]


class CreateRoomResponse(WireModel):
    room_id: str


class RoomRequest(WireModel):
    room_id: str


class LeaveRoomNotice(WireModel):
    room_id: str


class RoomInviteNotice(WireModel):
    sender: Identity
    room_id: str


class RoomStatus(WireModel):
    type: str
    room_id: str
    invited: Optional[Dict[str, InviteState]] = None
    full: bool
    owner: str
    user_id: str


class RoomDetailsResponse(WireModel):
    room_id: str
    owner: str
    invited: Dict[str, InviteState]
    invited_count: int
    accepted_count: int
    full: bool
