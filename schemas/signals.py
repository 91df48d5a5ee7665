from typing import Any, Optional

from pydantic import ConfigDict

from schemas.base import WireModel


class RelayedModel(WireModel):
    """Payload forwarded between peers as the client sent it.

    Unknown keys are kept, and explicit nulls survive serialization; only
    fields the client never sent are left out.
    """

    model_config = ConfigDict(extra="allow")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


class SessionDescription(RelayedModel):
    # The relay never inspects sdp
    sdp: Any
    room_id: str


class IceCandidate(RelayedModel):
    # null marks end-of-candidates
    candidate: Any
    room_id: str


class FileMessage(RelayedModel):
    room_id: str
    file_id: str
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    recipient_id: Optional[str] = None
    # Overwritten by the server with the sending connection's identity
    sender: Optional[Any] = None


class ErrorNotice(WireModel):
    code: str
    message: str
    event: Optional[str] = None
    room_id: Optional[str] = None
