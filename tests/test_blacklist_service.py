"""Tests for the token blacklist service."""
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select

from app.core.config import settings
from app.models.blacklist import BlacklistedToken
from app.service import blacklist_service
from app.service.blacklist_service import blacklist_token, is_token_blacklisted, purge_expired_tokens
from app.utils.jwt_handler import ROLE_USER, create_access_token, decode_token


def _expired_entry(token):
    past = datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(days=2)
    return BlacklistedToken(token=token, created_at=past, expires_at=past + timedelta(days=1))


def test_blacklisted_token_is_detected(db_session):
    blacklist_token(db_session, "token-a")

    assert is_token_blacklisted(db_session, "token-a")
    assert not is_token_blacklisted(db_session, "token-b")


def test_entry_expires_after_ttl(db_session):
    entry = blacklist_token(db_session, "token-a")

    assert entry.expires_at - entry.created_at == timedelta(seconds=settings.BLACKLIST_TTL_SECONDS)


def test_blacklisting_twice_returns_existing_row(db_session):
    first = blacklist_token(db_session, "token-a")
    second = blacklist_token(db_session, "token-a")

    assert first.id == second.id


def test_expired_entry_is_ignored(db_session):
    db_session.add(_expired_entry("old-token"))
    db_session.commit()

    assert not is_token_blacklisted(db_session, "old-token")


def test_purge_removes_only_expired_entries(db_session):
    db_session.add(_expired_entry("old-token"))
    db_session.commit()
    blacklist_token(db_session, "fresh-token")

    assert purge_expired_tokens(db_session) == 1

    remaining = db_session.scalars(select(BlacklistedToken.token)).all()
    assert remaining == ["fresh-token"]


def test_purge_with_nothing_expired(db_session):
    blacklist_token(db_session, "fresh-token")

    assert purge_expired_tokens(db_session) == 0
    assert db_session.scalar(select(func.count()).select_from(BlacklistedToken)) == 1


def test_entry_lives_until_token_expiry(db_session, monkeypatch):
    monkeypatch.setattr(settings, "ACCESS_TOKEN_EXPIRE_MINUTES", 48 * 60)
    token = create_access_token(sub=1, role=ROLE_USER)

    entry = blacklist_token(db_session, token)

    token_exp = datetime.fromtimestamp(decode_token(token)["exp"], tz=timezone.utc)
    assert entry.expires_at == token_exp.replace(tzinfo=None)
    assert entry.expires_at - entry.created_at > timedelta(seconds=settings.BLACKLIST_TTL_SECONDS)


def test_blacklisting_lapsed_entry_renews_it(db_session):
    db_session.add(_expired_entry("token-a"))
    db_session.commit()

    entry = blacklist_token(db_session, "token-a")

    assert is_token_blacklisted(db_session, "token-a")
    assert purge_expired_tokens(db_session) == 0
    assert entry.expires_at > datetime.now(timezone.utc).replace(tzinfo=None)


def test_concurrent_insert_returns_existing_row(db_session, monkeypatch):
    first = blacklist_token(db_session, "token-a")
    real_find = blacklist_service._find_entry
    calls = []

    # the first lookup misses, as it would for a logout racing another one
    def find_after_miss(db, token):
        calls.append(token)
        if len(calls) == 1:
            return None
        return real_find(db, token)

    monkeypatch.setattr(blacklist_service, "_find_entry", find_after_miss)

    second = blacklist_token(db_session, "token-a")

    assert second.id == first.id
    assert db_session.scalar(select(func.count()).select_from(BlacklistedToken)) == 1
