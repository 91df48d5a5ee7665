import random

from conftest import fixed_names

from constants import COLOR_PALETTE
from services.identities import IdentityDirectory, PrefixIndex, generate_display_name
from wordlist import WORDS


def test_create_identity_is_keyed_by_connection() -> None:
    directory = IdentityDirectory(rng=random.Random(1))
    identity = directory.create_identity("conn-1")

    assert identity.user_id == "conn-1"
    assert identity.color in COLOR_PALETTE
    assert identity.display_name
    assert directory.get("conn-1") == identity
    assert "conn-1" in directory


def test_create_identity_twice_overwrites() -> None:
    directory = IdentityDirectory(name_generator=fixed_names("Alice", "Bob"))
    directory.create_identity("conn-1")
    second = directory.create_identity("conn-1")

    assert len(directory) == 1
    assert directory.get("conn-1").display_name == "Bob"
    assert directory.get("conn-1") == second
    assert directory.search("ali") == []


def test_generated_names_are_two_capitalised_words() -> None:
    rng = random.Random(42)
    folded = {w.lower() for w in WORDS}
    assert all(2 <= len(w) <= 6 for w in WORDS)
    for _ in range(50):
        name = generate_display_name(rng)
        assert name[0].isupper()
        assert name.isalpha()
        capitals = [i for i, ch in enumerate(name) if ch.isupper()]
        assert len(capitals) == 2
        first, second = name[: capitals[1]], name[capitals[1]:]
        assert first.lower() in folded
        assert second.lower() in folded


def test_search_matches_prefix_case_insensitively() -> None:
    directory = IdentityDirectory(name_generator=fixed_names("Alice", "Bob", "Alfred"))
    for conn in ("c1", "c2", "c3"):
        directory.create_identity(conn)

    names = [i.display_name for i in directory.search("al")]
    assert names == ["Alfred", "Alice"]
    assert [i.display_name for i in directory.search("AL")] == names
    assert [i.display_name for i in directory.search("bo")] == ["Bob"]
    assert directory.search("z") == []


def test_search_empty_prefix_returns_nothing() -> None:
    directory = IdentityDirectory(name_generator=fixed_names("Alice"))
    directory.create_identity("c1")
    assert directory.search("") == []
    assert directory.search("   ") == []
    assert directory.search(None) == []


def test_search_respects_limit() -> None:
    directory = IdentityDirectory(search_limit=2, name_generator=fixed_names("Ann"))
    for n in range(5):
        directory.create_identity(f"c{n}")
    assert len(directory.search("an")) == 2


def test_prefix_index_orders_duplicates_by_user_id(identities) -> None:
    index = PrefixIndex()
    assert index.lookup("a") == []
    a = identities.create_identity("b-conn")
    b = identities.create_identity("a-conn")
    index = PrefixIndex([a.model_copy(update={"display_name": "Same"}), b.model_copy(update={"display_name": "same"})])
    assert index.lookup("sa") == ["a-conn", "b-conn"]


def test_sample_returns_distinct_identities() -> None:
    directory = IdentityDirectory(rng=random.Random(3))
    for n in range(3):
        directory.create_identity(f"c{n}")

    everyone = directory.sample(5)
    assert len(everyone) == 3
    assert len({i.user_id for i in everyone}) == 3

    two = directory.sample(2)
    assert len(two) == 2
    assert len({i.user_id for i in two}) == 2

    assert directory.sample(0) == []
    assert IdentityDirectory().sample(5) == []


def test_retract_removes_identity_and_index_entry() -> None:
    directory = IdentityDirectory(name_generator=fixed_names("Alice", "Bob"))
    directory.create_identity("c1")
    directory.create_identity("c2")

    directory.retract("c1")

    assert directory.get("c1") is None
    assert directory.search("al") == []
    assert set(directory.snapshot()) == {"c2"}


def test_retract_unknown_is_noop() -> None:
    directory = IdentityDirectory()
    directory.retract("nobody")
    assert len(directory) == 0
