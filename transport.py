import asyncio
import json
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

from fastapi import WebSocket

from constants import OUTBOUND_QUEUE_SIZE
from logging_config import get_logger
from schemas.base import WireModel

logger = get_logger(__name__)


class Emitter(Protocol):
    """What room and identity services need from the transport."""

    def emit(self, connection_id: str, event: str, data: Any = None) -> bool: ...

    def broadcast(self, event: str, data: Any = None) -> int: ...


def encode_message(event: str, data: Any = None) -> str:
    if isinstance(data, WireModel):
        data = data.to_wire()
    return json.dumps({"event": event, "data": data})


@dataclass
class _Outbound:
    websocket: WebSocket
    queue: asyncio.Queue
    writer: Optional[asyncio.Task] = None


class ConnectionManager:
    """Tracks live WebSocket connections and delivers messages to them.

    Sending never awaits: messages are queued per connection and written by a
    background task, so a slow or dead peer cannot stall room processing.
    When a connection's queue is full, new messages to it are dropped.
    """

    def __init__(self, queue_size: int = OUTBOUND_QUEUE_SIZE):
        self.queue_size = queue_size
        # Format: {connection_id: _Outbound}
        self.connections: Dict[str, _Outbound] = {}

    def __len__(self) -> int:
        return len(self.connections)

    def __contains__(self, connection_id: str) -> bool:
        return connection_id in self.connections

    async def connect(self, websocket: WebSocket) -> str:
        await websocket.accept()
        connection_id = str(uuid.uuid4())
        outbound = _Outbound(websocket=websocket, queue=asyncio.Queue(maxsize=self.queue_size))
        outbound.writer = asyncio.create_task(self._write_loop(connection_id, outbound))
        self.connections[connection_id] = outbound
        logger.info(f"WebSocket connection accepted: {connection_id} (live connections: {len(self.connections)})")
        return connection_id

    def disconnect(self, connection_id: str) -> None:
        """Stop delivery to a connection. Queued messages are discarded."""
        outbound = self.connections.pop(connection_id, None)
        if outbound is None:
            return
        if outbound.writer is not None and not outbound.writer.done():
            outbound.writer.cancel()
        logger.debug(f"Removed connection {connection_id} (live connections: {len(self.connections)})")

    def emit(self, connection_id: str, event: str, data: Any = None) -> bool:
        outbound = self.connections.get(connection_id)
        if outbound is None:
            logger.debug(f"Dropping {event} for unknown connection {connection_id}")
            return False
        try:
            outbound.queue.put_nowait(encode_message(event, data))
        except asyncio.QueueFull:
            logger.warning(f"Outbound queue full for connection {connection_id}, dropping {event}")
            return False
        return True

    def broadcast(self, event: str, data: Any = None) -> int:
        message = encode_message(event, data)
        delivered = 0
        for connection_id, outbound in list(self.connections.items()):
            try:
                outbound.queue.put_nowait(message)
                delivered += 1
            except asyncio.QueueFull:
                logger.warning(f"Outbound queue full for connection {connection_id}, dropping {event}")
        logger.debug(f"Broadcast {event} to {delivered} connections")
        return delivered

    async def _write_loop(self, connection_id: str, outbound: _Outbound) -> None:
        try:
            while True:
                message = await outbound.queue.get()
                await outbound.websocket.send_text(message)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"Send failed for connection {connection_id}, stopping writer: {e}")
