"""Closed set of client-to-server socket events.

Every frame is ``{"event": NAME, "data": {...}}``. Parsing goes through a
pydantic discriminated union on ``event`` so an unknown name or a malformed
payload fails validation instead of reaching a handler.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from schemas.rooms import CreateRoomRequest, RoomRequest
from schemas.signals import FileMessage, IceCandidate, SessionDescription


class LoginEvent(BaseModel):
    event: Literal["LOGIN"]
    data: Optional[Any] = None


class GetUsersEvent(BaseModel):
    event: Literal["GET_USERS"]
    data: Optional[Any] = None


class SearchUsersEvent(BaseModel):
    event: Literal["SEARCH_USERS"]
    data: Optional[str] = ""


class CreateRoomEvent(BaseModel):
    event: Literal["CREATE_ROOM"]
    data: CreateRoomRequest


class ConnectToRoomEvent(BaseModel):
    event: Literal["CONNECT_TO_ROOM"]
    data: RoomRequest


class LeaveRoomEvent(BaseModel):
    event: Literal["LEAVE_ROOM"]
    data: RoomRequest


class SendRoomInvitesEvent(BaseModel):
    event: Literal["SEND_ROOM_INVITES"]
    data: RoomRequest


class AcceptTransferRequestEvent(BaseModel):
    event: Literal["ACCEPT_TRANSFER_REQUEST"]
    data: RoomRequest


class RejectTransferRequestEvent(BaseModel):
    event: Literal["REJECT_TRANSFER_REQUEST"]
    data: RoomRequest


class FileMessageEvent(BaseModel):
    event: Literal["SEND_FILE_REQUEST", "FILE_ACCEPT", "FILE_REJECT"]
    data: FileMessage


class SessionDescriptionEvent(BaseModel):
    event: Literal["RTC_DESCRIPTION_OFFER", "RTC_DESCRIPTION_ANSWER"]
    data: SessionDescription


class IceCandidateEvent(BaseModel):
    event: Literal["ICE_CANDIDATE"]
    data: IceCandidate


ClientEvent = Annotated[
    Union[
        LoginEvent,
        GetUsersEvent,
        SearchUsersEvent,
        CreateRoomEvent,
        ConnectToRoomEvent,
        LeaveRoomEvent,
        SendRoomInvitesEvent,
        AcceptTransferRequestEvent,
        RejectTransferRequestEvent,
        FileMessageEvent,
        SessionDescriptionEvent,
        IceCandidateEvent,
    ],
    Field(discriminator="event"),
]

_client_event_adapter = TypeAdapter(ClientEvent)


def parse_client_event(raw: str) -> ClientEvent:
    """Validate a raw text frame. Raises pydantic.ValidationError on bad input."""
    return _client_event_adapter.validate_json(raw)
