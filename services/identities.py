"""Ephemeral identities bound to live connections.

An identity exists only while its connection does; a reconnect gets a fresh
connection id and therefore a fresh identity.
"""

import bisect
import random
from typing import Callable, Dict, Iterable, List, Optional

from constants import COLOR_PALETTE, DISPLAY_NAME_WORDS, SEARCH_RESULTS_LIMIT
from logging_config import get_logger
from schemas.users import Identity
from wordlist import WORDS

logger = get_logger(__name__)


def generate_display_name(rng: random.Random, words: int = DISPLAY_NAME_WORDS) -> str:
    return "".join(word.capitalize() for word in rng.choices(WORDS, k=words))


def generate_color(rng: random.Random) -> str:
    return rng.choice(COLOR_PALETTE)


class PrefixIndex:
    """Sorted (folded name, user id) pairs; a prefix query is one bisect plus a scan.

    Only live connections are indexed, so the whole index is small enough to
    rebuild on every change and a sorted list does the job of a trie.
    """

    def __init__(self, identities: Iterable[Identity] = ()):
        self._keys = sorted((identity.display_name.casefold(), identity.user_id) for identity in identities)

    def __len__(self) -> int:
        return len(self._keys)

    def lookup(self, prefix: str, limit: Optional[int] = None) -> List[str]:
        folded = prefix.casefold()
        start = bisect.bisect_left(self._keys, (folded, ""))
        matches = []
        for name, user_id in self._keys[start:]:
            if not name.startswith(folded):
                break
            matches.append(user_id)
            if limit is not None and len(matches) >= limit:
                break
        return matches


class IdentityDirectory:
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        search_limit: int = SEARCH_RESULTS_LIMIT,
        name_generator: Optional[Callable[[random.Random], str]] = None,
    ):
        self.rng = rng or random.Random()
        self.name_generator = name_generator or generate_display_name
        self.search_limit = search_limit
        self._identities: Dict[str, Identity] = {}
        self._index = PrefixIndex()

    def __len__(self) -> int:
        return len(self._identities)

    def __contains__(self, connection_id: str) -> bool:
        return connection_id in self._identities

    def create_identity(self, connection_id: str) -> Identity:
        identity = Identity(
            user_id=connection_id,
            display_name=self.name_generator(self.rng),
            color=generate_color(self.rng),
        )
        replaced = connection_id in self._identities
        self._identities[connection_id] = identity
        self._rebuild_index()
        logger.info(f"Issued identity {identity.display_name} to {connection_id}" + (" (replaced)" if replaced else ""))
        return identity

    def get(self, connection_id: str) -> Optional[Identity]:
        return self._identities.get(connection_id)

    def snapshot(self) -> Dict[str, Identity]:
        return dict(self._identities)

    def search(self, prefix: str) -> List[Identity]:
        """Case-insensitive prefix search over display names.

        An empty prefix matches nothing; use sample() for a browsing list.
        """
        if not prefix or not prefix.strip():
            return []
        user_ids = self._index.lookup(prefix.strip(), limit=self.search_limit)
        return [self._identities[user_id] for user_id in user_ids]

    def sample(self, n: int) -> List[Identity]:
        """Up to n distinct identities, drawn without replacement."""
        if n <= 0 or not self._identities:
            return []
        population = list(self._identities.values())
        return self.rng.sample(population, min(n, len(population)))

    def retract(self, connection_id: str) -> None:
        identity = self._identities.pop(connection_id, None)
        if identity is None:
            return
        self._rebuild_index()
        logger.info(f"Retracted identity {identity.display_name} from {connection_id}")

    def _rebuild_index(self) -> None:
        self._index = PrefixIndex(self._identities.values())
