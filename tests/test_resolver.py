import pytest

from taskhub.schemas.directory import DirectoryUser
from taskhub.services.resolver import (
    UserDirectorySnapshot,
    resolve_label,
    resolve_username,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def snapshot():
    return UserDirectorySnapshot.from_users([
        {"id": 1, "username": "alice", "email": "alice@example.com", "role": {"id": 3, "name": "DEVELOPER"}},
        {"id": 4, "username": "zed", "email": "zed@example.com", "role": None},
    ])


def test_no_reference_is_unassigned(snapshot):
    assert resolve_label(None, snapshot) == "Unassigned"
    assert resolve_label(None, UserDirectorySnapshot()) == "Unassigned"


def test_reference_missing_from_directory_is_unknown():
    assert resolve_label(999, UserDirectorySnapshot()) == "Unknown"


def test_known_user_is_labelled_with_role(snapshot):
    assert resolve_label(1, snapshot) == "alice (DEVELOPER)"


def test_user_without_role(snapshot):
    assert resolve_label(4, snapshot) == "zed (No Role)"


def test_resolve_username(snapshot):
    assert resolve_username(1, snapshot) == "alice"
    assert resolve_username(42, snapshot) == "Unknown"
    assert resolve_username(None, snapshot) == "Unknown"


def test_snapshot_lookup(snapshot):
    assert 1 in snapshot
    assert 2 not in snapshot
    assert len(snapshot) == 2
    assert snapshot.role_of(1) == "DEVELOPER"
    assert snapshot.role_of(4) is None
    assert snapshot.role_of(None) is None


def test_snapshot_accepts_models():
    user = DirectoryUser(id=9, username="ivy", role={"id": 2, "name": "MANAGER"})
    assert resolve_label(9, UserDirectorySnapshot.from_users([user])) == "ivy (MANAGER)"
