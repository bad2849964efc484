from __future__ import annotations

import pytest

from verdict.infrastructure.container import Container
from verdict.infrastructure.db import ENGINE, Base, SessionLocal
from verdict.infrastructure.db.models import User
from verdict.scripts.seed_users import SAMPLE_USERS, seed_users
from verdict.shared.logging.sensitive_filter import sanitize_message


@pytest.mark.parametrize(
    ("message", "secret"),
    [
        ("Authorization: Bearer " + "a" * 64, "a" * 64),
        ("sessionToken=" + "b" * 64, "b" * 64),
        ("password=secret1 for login", "secret1"),
        ("postgresql://app:hunter2@db/verdict", "hunter2"),
    ],
)
def test_sanitize_message_redacts_secrets(message: str, secret: str) -> None:
    sanitized = sanitize_message(message)

    assert secret not in sanitized
    assert "REDACTED" in sanitized


def test_sanitize_message_masks_email_local_part() -> None:
    assert sanitize_message("login for alice@example.com") == "login for ***@example.com"


@pytest.fixture()
def fresh_database() -> None:
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    SessionLocal.remove()
    Base.metadata.drop_all(bind=ENGINE)


def test_seed_users_is_repeatable(fresh_database) -> None:
    container = Container()

    assert seed_users(container, "password123") == len(SAMPLE_USERS)
    assert seed_users(container, "password123") == 0

    session = SessionLocal()
    try:
        assert session.query(User).count() == len(SAMPLE_USERS)
    finally:
        session.close()

    result = container.login_user_use_case.execute("john.smith@email.com", "password123")
    assert result.user.name == "John Smith"
