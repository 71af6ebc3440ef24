from concurrent.futures import ThreadPoolExecutor

import pytest

from user_service.domain.outcome import Deleted, Found, NotFound, Updated
from user_service.domain.user import User
from user_service.entrypoints.schemas.user import MAX_USER_ID
from user_service.services.user_store import IdSpaceExhausted, UserStore


def test_fetch_unknown_id_is_not_found(store):
    for user_id in (0, 123, 124, 10**6, -1):
        assert store.fetch(user_id) == NotFound(user_id)


@pytest.mark.parametrize("user_id", ["124", None, 1.5, True, 2**63, -(2**63) - 1])
def test_fetch_invalid_id_is_not_found(store, user_id):
    store.create(User(user_name="alice"))
    assert isinstance(store.fetch(user_id), NotFound)


def test_create_assigns_increasing_ids_and_ignores_candidate_id(store):
    first = store.create(User(user_name="alice", id=999))
    second = store.create(User(user_name="bob"))

    assert first.id == 124
    assert second.id == 125
    assert store.fetch(999) == NotFound(999)
    assert store.fetch(first.id) == Found(first)
    assert store.current_id == 125


def test_create_keeps_profile_fields(store):
    created = store.create(User(user_name="carol", first_name="Carol", email="carol@example.com", user_status=1))

    outcome = store.fetch(created.id)
    assert isinstance(outcome, Found)
    assert outcome.user.first_name == "Carol"
    assert outcome.user.email == "carol@example.com"
    assert outcome.user.user_status == 1


def test_returned_users_are_copies(store):
    created = store.create(User(user_name="alice"))
    created.user_name = "mallory"

    fetched = store.fetch(created.id).user
    fetched.email = "mallory@example.com"

    assert store.fetch(created.id).user == User(user_name="alice", id=created.id)


def test_replace_unknown_id_changes_nothing(store):
    store.create(User(user_name="alice"))
    before = store.list()

    assert store.replace(User(user_name="ghost", id=500)) == NotFound(500)
    assert store.replace(User(user_name="ghost")) == NotFound(None)
    assert store.list() == before
    assert store.fetch(500) == NotFound(500)


def test_replace_overwrites_whole_record(store):
    created = store.create(User(user_name="alice", first_name="Alice", phone="555"))
    candidate = User(user_name="alice2", id=created.id, email="a2@example.com")

    assert store.replace(candidate) == Updated(created.id)
    assert store.fetch(created.id) == Found(candidate)
    assert store.fetch(created.id).user.phone is None


def test_delete_twice(store):
    created = store.create(User(user_name="alice"))

    assert store.delete(created.id) == Deleted(created.id)
    assert store.fetch(created.id) == NotFound(created.id)
    assert store.delete(created.id) == NotFound(created.id)


def test_delete_unknown_id_changes_nothing(store):
    store.create(User(user_name="alice"))
    before = store.list()

    assert store.delete(42) == NotFound(42)
    assert store.delete("42") == NotFound("42")
    assert store.list() == before


def test_deleted_ids_are_not_reused(store):
    first = store.create(User(user_name="alice"))
    store.delete(first.id)

    assert store.create(User(user_name="bob")).id == first.id + 1


def test_alice_scenario(store):
    created = store.create(User(user_name="alice"))
    assert created.id == 124
    assert store.fetch(124) == Found(User(user_name="alice", id=124))

    assert store.replace(User(user_name="alice2", id=124)) == Updated(124)
    assert store.fetch(124).user.user_name == "alice2"

    assert store.delete(124) == Deleted(124)
    assert store.fetch(124) == NotFound(124)


def test_concurrent_creates_get_distinct_gap_free_ids():
    seed, count = 123, 500
    store = UserStore(id_seed=seed)

    with ThreadPoolExecutor(max_workers=16) as executor:
        created = list(executor.map(lambda index: store.create(User(user_name=f"user{index}")), range(count)))

    ids = sorted(user.id for user in created)
    assert ids == list(range(seed + 1, seed + count + 1))
    assert store.current_id == seed + count
    assert len(store) == count


def test_seed_keeps_explicit_ids_and_raises_counter():
    store = UserStore(id_seed=123)
    store.seed([User(user_name="root", id=200), User(user_name="guest")])

    assert store.fetch(200) == Found(User(user_name="root", id=200))
    assert store.fetch(201) == Found(User(user_name="guest", id=201))
    assert store.create(User(user_name="next")).id == 202


def test_seed_rejects_out_of_range_id():
    store = UserStore()
    with pytest.raises(ValueError):
        store.seed([User(user_name="huge", id=2**63)])


def test_create_refuses_ids_past_the_64_bit_range():
    store = UserStore(id_seed=MAX_USER_ID - 1)
    last = store.create(User(user_name="last"))
    assert last.id == MAX_USER_ID
    assert store.fetch(last.id) == Found(last)

    with pytest.raises(IdSpaceExhausted):
        store.create(User(user_name="overflow"))
    assert store.current_id == MAX_USER_ID
    assert store.list() == [last]


def test_create_after_seeding_the_largest_id_stores_nothing():
    store = UserStore()
    store.seed([User(user_name="top", id=MAX_USER_ID)])

    with pytest.raises(IdSpaceExhausted):
        store.create(User(user_name="overflow"))
    assert len(store) == 1


@pytest.mark.parametrize("id_seed", [MAX_USER_ID + 1, -(2**63) - 1, "123"])
def test_store_rejects_invalid_id_seed(id_seed):
    with pytest.raises(ValueError):
        UserStore(id_seed=id_seed)


@pytest.mark.parametrize(
    "users",
    [
        [User(user_name="ok", id=300), User(user_name="huge", id=2**63)],
        [User(user_name="ok"), User(user_name="top", id=MAX_USER_ID), User(user_name="overflow")],
    ],
)
def test_failed_seed_leaves_store_untouched(users):
    store = UserStore(id_seed=123)
    existing = store.create(User(user_name="alice"))

    with pytest.raises((ValueError, IdSpaceExhausted)):
        store.seed(users)
    assert store.list() == [existing]
    assert store.current_id == existing.id
