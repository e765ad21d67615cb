"""Tests for the server-side session store and its expiry."""

from datetime import datetime, timedelta, timezone

from sqlalchemy import select, update

from conftest import login
from movie_catalog.core.dependencies import SESSION_COOKIE_NAME
from movie_catalog.core.security import SessionSigner
from movie_catalog.models import SessionRecord
from movie_catalog.services import scheduler
from movie_catalog.services.sessions import (
    create_session,
    destroy_session,
    get_active_session,
    purge_expired_sessions,
)


async def test_create_and_lookup(db_session, add_user):
    alice = await add_user("alice", "alice@x.com")

    record = await create_session(db_session, alice)
    await db_session.commit()

    found = await get_active_session(db_session, record.token)
    assert found is not None
    assert found.user_id == alice.id
    assert found.username == "alice"


async def test_expired_session_is_ignored(db_session, add_user):
    alice = await add_user("alice", "alice@x.com")

    record = await create_session(db_session, alice, ttl_seconds=-1)
    await db_session.commit()

    assert await get_active_session(db_session, record.token) is None


async def test_destroy_session(db_session, add_user):
    alice = await add_user("alice", "alice@x.com")
    record = await create_session(db_session, alice)
    await db_session.commit()

    await destroy_session(db_session, record.token)
    await db_session.commit()

    assert await get_active_session(db_session, record.token) is None


async def test_purge_removes_only_expired(db_session, add_user):
    alice = await add_user("alice", "alice@x.com")
    live = await create_session(db_session, alice)
    await create_session(db_session, alice, ttl_seconds=-60)
    await create_session(db_session, alice, ttl_seconds=-1)
    await db_session.commit()

    removed = await purge_expired_sessions(db_session)
    await db_session.commit()

    assert removed == 2
    tokens = (await db_session.execute(select(SessionRecord.token))).scalars().all()
    assert tokens == [live.token]


async def test_expired_record_does_not_authenticate(client, add_user, session_factory):
    await add_user("alice", "alice@x.com")
    await login(client, "alice@x.com")

    async with session_factory() as session:
        await session.execute(
            update(SessionRecord).values(expires_at=datetime.now(timezone.utc) - timedelta(minutes=1))
        )
        await session.commit()

    response = await client.get("/movies/add")
    assert response.status_code == 303
    assert response.headers["location"] == "/login"


async def test_tampered_cookie_is_anonymous(client):
    forged = SessionSigner(salt="some-other-app").dumps({"sid": "whatever"})
    response = await client.get("/movies/add", headers={"Cookie": f"{SESSION_COOKIE_NAME}={forged}"})
    assert response.status_code == 303
    assert response.headers["location"] == "/login"


async def test_signed_cookie_for_unknown_session_is_anonymous(client):
    cookie = SessionSigner().dumps({"sid": "no-such-session"})
    response = await client.get("/", headers={"Cookie": f"{SESSION_COOKIE_NAME}={cookie}"})
    assert response.status_code == 200
    assert "Logout" not in response.text


async def test_purge_job_uses_session_factory(monkeypatch, session_factory, add_user):
    alice = await add_user("alice", "alice@x.com")
    async with session_factory() as session:
        await create_session(session, alice, ttl_seconds=-5)
        await session.commit()

    monkeypatch.setattr(scheduler, "get_session", session_factory)
    await scheduler._purge_sessions()

    async with session_factory() as session:
        remaining = (await session.execute(select(SessionRecord))).scalars().all()
    assert remaining == []


def test_schedule_purge_job_registers_interval(monkeypatch):
    monkeypatch.setattr(scheduler, "_scheduler", None)
    scheduler.schedule_session_purge_job()

    job = scheduler.get_scheduler().get_job(scheduler.PURGE_JOB_ID)
    assert job is not None
    assert job.trigger.interval == timedelta(hours=1)
