import random
from dataclasses import dataclass
from typing import Optional

from constants import OUTBOUND_QUEUE_SIZE, RANDOM_USERS_COUNT, REMOVE_ON_REJECT
from services.dispatcher import EventDispatcher
from services.identities import IdentityDirectory
from services.lifecycle import ConnectionLifecycle
from services.relay import SignalRelay
from services.rooms import RoomRegistry
from transport import ConnectionManager


@dataclass
class SignalingHub:
    """The server's components, wired together once per app."""

    transport: ConnectionManager
    identities: IdentityDirectory
    rooms: RoomRegistry
    relay: SignalRelay
    lifecycle: ConnectionLifecycle
    dispatcher: EventDispatcher


def build_hub(
    queue_size: int = OUTBOUND_QUEUE_SIZE,
    random_users_count: int = RANDOM_USERS_COUNT,
    remove_on_reject: bool = REMOVE_ON_REJECT,
    rng: Optional[random.Random] = None,
) -> SignalingHub:
    transport = ConnectionManager(queue_size=queue_size)
    identities = IdentityDirectory(rng=rng)
    rooms = RoomRegistry(transport)
    relay = SignalRelay(rooms, transport)
    lifecycle = ConnectionLifecycle(identities, rooms, transport)
    dispatcher = EventDispatcher(
        identities,
        rooms,
        relay,
        lifecycle,
        transport,
        random_users_count=random_users_count,
        remove_on_reject=remove_on_reject,
    )
    return SignalingHub(
        transport=transport,
        identities=identities,
        rooms=rooms,
        relay=relay,
        lifecycle=lifecycle,
        dispatcher=dispatcher,
    )
