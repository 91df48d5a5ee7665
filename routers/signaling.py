from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

import events
from errors import InternalError, InvalidMessage, SignalingError
from logging_config import get_logger
from schemas.events import parse_client_event
from services.hub import SignalingHub

logger = get_logger(__name__)

signaling_router = APIRouter(tags=["signaling"])


def handle_frame(hub: SignalingHub, connection_id: str, raw: str) -> None:
    """Parse and dispatch one text frame; failures go back to the sender only."""
    event_name = None
    try:
        message = parse_client_event(raw)
        event_name = message.event
        hub.dispatcher.dispatch(connection_id, message)
    except ValidationError as e:
        logger.warning(f"Invalid message from {connection_id}: {e.error_count()} validation errors")
        error = InvalidMessage(f"Malformed message ({e.error_count()} validation errors)")
        hub.transport.emit(connection_id, events.ERROR, error.to_payload())
    except SignalingError as e:
        logger.info(f"{event_name} from {connection_id} rejected: {e.code}")
        hub.transport.emit(connection_id, events.ERROR, e.to_payload(event_name))
    except Exception as e:
        logger.error(f"Error handling {event_name} from {connection_id}: {e}", exc_info=True)
        hub.transport.emit(connection_id, events.ERROR, InternalError().to_payload(event_name))


@signaling_router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Signaling socket. One connection is one ephemeral user.

    Frames in both directions are JSON text: {"event": NAME, "data": {...}}.
    """
    hub: SignalingHub = websocket.app.state.hub
    connection_id = None

    try:
        connection_id = await hub.transport.connect(websocket)
        hub.lifecycle.on_connect(connection_id)

        message_count = 0
        while True:
            try:
                raw = await websocket.receive_text()
            except WebSocketDisconnect:
                logger.info(f"WebSocket disconnected normally for connection {connection_id}")
                break
            except Exception as e:
                logger.error(f"Error receiving message from connection {connection_id}: {e}", exc_info=True)
                break
            message_count += 1
            logger.debug(f"Received message #{message_count} from connection {connection_id}")
            handle_frame(hub, connection_id, raw)

    except Exception as e:
        logger.error(f"WebSocket error for connection {connection_id}: {e}", exc_info=True)
    finally:
        if connection_id:
            # Cleanup must not await: the task may already be cancelled here
            hub.transport.disconnect(connection_id)
            try:
                hub.lifecycle.on_disconnect(connection_id)
            except Exception as e:
                logger.error(f"Error cleaning up connection {connection_id}: {e}", exc_info=True)
        try:
            await websocket.close()
        except Exception as e:
            logger.debug(f"Error closing WebSocket: {e}")
