import itertools
from contextlib import contextmanager
from datetime import datetime

import pytest
from sqlalchemy import event
from sqlalchemy.pool import StaticPool

from database import PlatformDB
from models import Base, Challenge, User, UserChallengeStats

_ids = itertools.count(1)


@pytest.fixture
def db():
    """PlatformDB backed by a throwaway in-memory SQLite database."""
    platform_db = PlatformDB(
        "sqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(platform_db.engine)
    yield platform_db
    platform_db.dispose()


@pytest.fixture
def session(db):
    with db.session() as s:
        yield s


def make_user(session, name=None, active=True, tokens=None):
    n = next(_ids)
    user = User(name=name or f"user{n}", email=f"user{n}@example.com", active=active, perfil="user")
    session.add(user)
    session.flush()
    if tokens is not None:
        session.add(UserChallengeStats(user_id=user.id, tokens=tokens))
        session.flush()
    return user


def make_challenge(session, challenger, challenged, end_date, end_time="18:00", status="active", **kwargs):
    challenge = Challenge(
        title=kwargs.pop("title", "Weekly duel"),
        challenger_id=challenger.id,
        challenged_id=challenged.id,
        status=status,
        end_date=end_date,
        end_time=end_time,
        initial_balance=kwargs.pop("initial_balance", 10000),
        created_at=datetime(2024, 1, 1),
        updated_at=datetime(2024, 1, 1),
        **kwargs,
    )
    session.add(challenge)
    session.flush()
    return challenge


@contextmanager
def failing_update(engine, row_id):
    """Make any UPDATE touching `row_id` raise, as a locked or broken row would."""
    def _fail(conn, cursor, statement, parameters, context, executemany):
        if statement.startswith("UPDATE") and row_id in parameters:
            raise RuntimeError(f"update of {row_id} failed")

    event.listen(engine, "before_cursor_execute", _fail)
    try:
        yield
    finally:
        event.remove(engine, "before_cursor_execute", _fail)
