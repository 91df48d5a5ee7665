import itertools
import random

import pytest

from schemas.base import WireModel
from schemas.rooms import InviteState
from services.identities import IdentityDirectory
from services.lifecycle import ConnectionLifecycle
from services.relay import SignalRelay
from services.rooms import RoomRegistry


def _plain(data):
    if isinstance(data, WireModel):
        return data.to_wire()
    return data


class RecordingTransport:
    """Stands in for ConnectionManager; records every emit and broadcast."""

    def __init__(self):
        self.sent = []
        self.broadcasts = []

    def emit(self, connection_id, event, data=None):
        self.sent.append((connection_id, event, _plain(data)))
        return True

    def broadcast(self, event, data=None):
        self.broadcasts.append((event, _plain(data)))
        return 0

    def to(self, connection_id, event=None):
        return [d for c, e, d in self.sent if c == connection_id and (event is None or e == event)]

    def events_for(self, connection_id):
        return [e for c, e, _ in self.sent if c == connection_id]

    def clear(self):
        self.sent.clear()
        self.broadcasts.clear()


def fixed_names(*names):
    it = itertools.cycle(names)
    return lambda rng: next(it)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def identities():
    return IdentityDirectory(rng=random.Random(7), name_generator=fixed_names("Alice", "Bob", "Carol", "Dave"))


@pytest.fixture
def rooms(transport):
    return RoomRegistry(transport)


@pytest.fixture
def relay(rooms, transport):
    return SignalRelay(rooms, transport)


@pytest.fixture
def lifecycle(identities, rooms, transport):
    return ConnectionLifecycle(identities, rooms, transport)


@pytest.fixture
def invite(identities):
    """Build an invite map for connection ids, creating identities as needed."""

    def build(*user_ids, accepted=False):
        invited = {}
        for user_id in user_ids:
            identity = identities.get(user_id) or identities.create_identity(user_id)
            invited[user_id] = InviteState(accepted=accepted, display_name=identity)
        return invited

    return build
