from fastapi import APIRouter, HTTPException, Request

from logging_config import get_logger
from schemas.rooms import RoomDetailsResponse

logger = get_logger(__name__)

rooms_router = APIRouter(prefix="/rooms", tags=["rooms"])


@rooms_router.get("/{room_id}", response_model=RoomDetailsResponse, response_model_by_alias=True)
async def get_room_details(room_id: str, request: Request):
    """
    Current state of a live room.

    Returns:
    - roomId: Room identifier
    - owner: User id of the creator
    - invited: Invite state per user id
    - invitedCount / acceptedCount: Membership counts
    - full: Whether every invited user has accepted
    """
    client_host = request.client.host if request.client else "unknown"
    logger.info(f"Room details request for {room_id} from {client_host}")

    room = request.app.state.hub.rooms.get_room(room_id)
    if room is None:
        logger.warning(f"Room details failed: Room {room_id} not found")
        raise HTTPException(status_code=404, detail="Room not found")

    return room.details()
