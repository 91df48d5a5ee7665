from typing import Optional

from schemas.signals import ErrorNotice


class SignalingError(Exception):
    """Non-fatal failure reported back to the requesting connection only."""

    code = "SignalingError"
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None, room_id: Optional[str] = None):
        self.message = message or self.default_message
        self.room_id = room_id
        super().__init__(self.message)

    def to_payload(self, event: Optional[str] = None) -> dict:
        return ErrorNotice(code=self.code, message=self.message, event=event, room_id=self.room_id).to_wire()


class RoomNotFound(SignalingError):
    code = "RoomNotFound"
    default_message = "Invalid Room"


class RoomFull(SignalingError):
    code = "RoomFull"
    default_message = "Room Full"


class NotInvited(SignalingError):
    code = "NotInvited"
    default_message = "You were not invited to this room"


class AlreadyInRoom(SignalingError):
    code = "AlreadyInRoom"
    default_message = "Already connected to this room"


class InvalidMessage(SignalingError):
    code = "InvalidMessage"
    default_message = "Malformed message"


class InternalError(SignalingError):
    code = "InternalError"
    default_message = "Unexpected server error"
