from datetime import timedelta

import pytest
from pydantic import ValidationError

from chatdesk.models import ADMIN_STATUS_ID
from chatdesk.storage.memory import MemStorage
from chatdesk.utils.exceptions import PasswordTakenError, StorageError


def test_seeds_single_admin():
    store = MemStorage()
    users = store.get_all_users()
    assert len(users) == 1
    admin = users[0]
    assert admin.is_admin is True
    assert admin.name == "Orhan"
    assert admin.password == "4499"


def test_seed_admin_is_configurable():
    store = MemStorage(admin_name="Root", admin_password="s3cret")
    admin = store.get_user_by_password("s3cret")
    assert admin is not None
    assert admin.name == "Root"
    assert admin.is_admin
    assert store.get_user_by_password("4499") is None


def test_create_user_round_trip(storage):
    created = storage.create_user("Ayşe", "7777")
    found = storage.get_user_by_password("7777")
    assert found is not None
    assert found.id == created.id
    assert found.name == "Ayşe"
    assert found.is_admin is False
    assert storage.get_user(created.id) == created


def test_lookups_return_none_when_absent(storage):
    assert storage.get_user("missing") is None
    assert storage.get_user_by_password("nope") is None


def test_create_user_does_not_enforce_unique_password(storage):
    first = storage.create_user("A", "1111")
    second = storage.create_user("B", "1111")
    assert first.id != second.id
    # First match in insertion order wins
    assert storage.get_user_by_password("1111").id == first.id


def test_create_user_if_password_free(storage):
    storage.create_user("A", "1111")
    with pytest.raises(PasswordTakenError):
        storage.create_user_if_password_free("B", "1111")
    with pytest.raises(PasswordTakenError):
        storage.create_user_if_password_free("B", "4499")
    user = storage.create_user_if_password_free("B", "2222")
    assert user.password == "2222"
    assert len(storage.get_all_users()) == 3


def test_get_all_users_keeps_insertion_order(storage):
    names = ["c", "a", "b"]
    for i, name in enumerate(names):
        storage.create_user(name, f"pw{i}")
    assert [u.name for u in storage.get_all_users()[1:]] == names


def test_create_message_accepts_unknown_users(storage):
    message = storage.create_message("ghost-1", "ghost-2", "hello")
    assert message.sender_id == "ghost-1"
    assert message.receiver_id == "ghost-2"
    assert storage.get_messages_between_users("ghost-1", "ghost-2") == [message]


def test_conversation_is_symmetric_and_ordered(storage):
    storage.create_message("u1", "u2", "one")
    storage.create_message("u2", "u1", "two")
    storage.create_message("u1", "u3", "other")
    storage.create_message("u1", "u2", "three")

    forward = storage.get_messages_between_users("u1", "u2")
    backward = storage.get_messages_between_users("u2", "u1")
    assert forward == backward
    assert [m.content for m in forward] == ["one", "two", "three"]
    for earlier, later in zip(forward, forward[1:]):
        assert earlier.created_at <= later.created_at


def test_conversation_sorts_by_created_at(storage):
    late = storage.create_message("u1", "u2", "late")
    early = storage.create_message("u2", "u1", "early")
    # Push the first message after the second one
    storage._messages[late.id] = late.model_copy(
        update={"created_at": early.created_at + timedelta(seconds=5)}
    )
    assert [m.content for m in storage.get_messages_between_users("u1", "u2")] == ["early", "late"]


def test_user_messages_include_sent_and_received(storage):
    storage.create_message("u1", "u2", "a")
    storage.create_message("u3", "u1", "b")
    storage.create_message("u2", "u3", "c")
    assert [m.content for m in storage.get_user_messages("u1")] == ["a", "b"]
    assert storage.get_user_messages("nobody") == []


def test_admin_status_defaults(storage):
    status = storage.get_admin_status()
    assert status.id == ADMIN_STATUS_ID
    assert status.status == "available"


def test_update_admin_status_merges_and_refreshes(storage):
    before = storage.get_admin_status()
    updated = storage.update_admin_status(status="busy")
    assert updated.status == "busy"
    assert updated.id == ADMIN_STATUS_ID
    assert updated.updated_at > before.updated_at
    assert storage.get_admin_status() == updated

    touched = storage.update_admin_status()
    assert touched.status == "busy"
    assert touched.updated_at > updated.updated_at


def test_update_admin_status_cannot_change_id(storage):
    updated = storage.update_admin_status(id="other", status="busy")
    assert updated.id == ADMIN_STATUS_ID


def test_update_admin_status_rejects_unknown_state(storage):
    with pytest.raises(ValidationError):
        storage.update_admin_status(status="away")
    assert storage.get_admin_status().status == "available"


def test_closed_store_raises(storage):
    storage.close()
    with pytest.raises(StorageError):
        storage.get_all_users()
    with pytest.raises(StorageError):
        storage.create_message("a", "b", "c")
