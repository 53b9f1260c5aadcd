from concurrent.futures import ThreadPoolExecutor

import pytest

from dmchat.application.realtime import IdentityDirectory
from dmchat.domain.value_objects.user_id import UserId

from fakes import RecordingHandle

ALICE = UserId(1)
BOB = UserId(2)


@pytest.fixture
def directory():
    return IdentityDirectory(stripes=4)


def test_unknown_identity_has_no_handles(directory):
    assert directory.active_handles(ALICE) == frozenset()


def test_register_supports_multiple_devices(directory):
    phone, laptop = RecordingHandle("phone"), RecordingHandle("laptop")
    directory.register(ALICE, phone)
    directory.register(ALICE, laptop)

    assert directory.active_handles(ALICE) == {phone, laptop}
    assert directory.active_handles(BOB) == frozenset()
    assert directory.connection_count() == 2
    assert directory.online_identities() == {ALICE}


def test_register_same_handle_twice_is_a_set(directory):
    handle = RecordingHandle()
    directory.register(ALICE, handle)
    directory.register(ALICE, handle)
    assert directory.connection_count() == 1


def test_unregister_removes_only_that_handle(directory):
    phone, laptop = RecordingHandle("phone"), RecordingHandle("laptop")
    directory.register(ALICE, phone)
    directory.register(ALICE, laptop)

    directory.unregister(ALICE, phone)

    assert directory.active_handles(ALICE) == {laptop}


def test_last_unregister_takes_identity_offline(directory):
    handle = RecordingHandle()
    directory.register(ALICE, handle)
    directory.unregister(ALICE, handle)

    assert directory.active_handles(ALICE) == frozenset()
    assert directory.online_identities() == frozenset()


def test_unregister_unknown_is_noop(directory):
    directory.unregister(ALICE, RecordingHandle())

    handle = RecordingHandle()
    directory.register(BOB, handle)
    directory.unregister(BOB, RecordingHandle())
    directory.unregister(ALICE, handle)

    assert directory.active_handles(BOB) == {handle}


def test_active_handles_is_a_snapshot(directory):
    first = RecordingHandle("first")
    directory.register(ALICE, first)
    snapshot = directory.active_handles(ALICE)

    directory.register(ALICE, RecordingHandle("second"))
    directory.unregister(ALICE, first)

    assert snapshot == {first}


def test_rejects_zero_stripes():
    with pytest.raises(ValueError):
        IdentityDirectory(stripes=0)


def test_concurrent_register_and_unregister_from_threads():
    directory = IdentityDirectory(stripes=8)
    identities = [UserId(i) for i in range(1, 51)]
    handles = {uid: [RecordingHandle(f"{uid}-{n}") for n in range(10)] for uid in identities}

    def churn(uid):
        for handle in handles[uid]:
            directory.register(uid, handle)
        # keep the first handle, drop the rest
        for handle in handles[uid][1:]:
            directory.unregister(uid, handle)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(churn, identities))

    assert directory.connection_count() == len(identities)
    for uid in identities:
        assert directory.active_handles(uid) == {handles[uid][0]}
