from unittest.mock import Mock

import pytest

from app.domain.exceptions import ConflictError
from app.services.application.auth_service import UserAuthManager


@pytest.fixture()
def manager(db_handler, mock_audit_logger):
    return UserAuthManager(database_handler=db_handler, audit_logger=mock_audit_logger)


def test_register_then_authenticate(manager):
    user_id = manager.register_user("alice", "correct horse", "Alice@Example.com")

    assert user_id is not None
    assert manager.authenticate_user("alice", "correct horse") == {
        "id": user_id,
        "username": "alice",
        "email": "alice@example.com",
    }
    assert manager.authenticate_user("alice", "wrong horse") is None
    assert manager.authenticate_user("nobody", "correct horse") is None


def test_duplicate_username_is_a_conflict(manager, mock_audit_logger):
    manager.register_user("alice", "correct horse")

    with pytest.raises(ConflictError):
        manager.register_user("alice", "another password")

    mock_audit_logger.log_event.assert_any_call(
        actor="alice",
        action="register",
        resource="user",
        outcome="conflict",
    )


def test_passwords_are_stored_hashed(manager, auth_repo):
    manager.register_user("alice", "correct horse")

    stored = auth_repo.get_user_auth_by_username("alice")["password_hash"]
    assert stored != "correct horse"
    assert manager.check_password(stored, "correct horse") is True


def test_non_bcrypt_hash_never_matches(manager):
    assert manager.check_password("plain-text", "plain-text") is False


def test_register_returns_none_when_repository_fails(mock_audit_logger):
    repo = Mock()
    repo.username_exists.return_value = False
    repo.create_user.return_value = None
    manager = UserAuthManager(database_handler=Mock(), audit_logger=mock_audit_logger, auth_repo=repo)
    manager.hash_password = Mock(return_value="hashed")

    assert manager.register_user("alice", "correct horse") is None
    repo.create_user.assert_called_once_with("alice", "hashed", None)
    mock_audit_logger.log_event.assert_called_once_with(
        actor="alice",
        action="register",
        resource="user",
        outcome="error",
        error="create_failed",
    )


def test_get_user_hides_the_hash(manager):
    user_id = manager.register_user("alice", "correct horse")

    user = manager.get_user(user_id)
    assert user["username"] == "alice"
    assert "password_hash" not in user
