"""Tests for password hashing and token helpers."""
import jwt
import pytest

from app.core.config import settings
from app.utils import jwt_handler
from app.utils.password import hash_cost, hash_password, needs_rehash, verify_password


class TestPassword:
    def test_hash_and_verify(self):
        hashed = hash_password("secret123")

        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)

    def test_same_password_gets_different_salts(self):
        assert hash_password("secret123") != hash_password("secret123")

    def test_empty_password_rejected(self):
        with pytest.raises(ValueError):
            hash_password("   ")

    def test_password_over_72_bytes_rejected(self):
        with pytest.raises(ValueError):
            hash_password("x" * 73)

    def test_verify_against_malformed_hash(self):
        assert not verify_password("secret123", "not-a-bcrypt-hash")

    def test_verify_with_empty_values(self):
        assert not verify_password("", "whatever")
        assert not verify_password("secret123", "")


class TestJwtHandler:
    def test_token_claims(self):
        token = jwt_handler.create_access_token(sub=7, role=jwt_handler.ROLE_USER)

        claims = jwt_handler.decode_and_validate(token, expected_role=jwt_handler.ROLE_USER)

        assert claims["sub"] == "7"
        assert claims["exp"] - claims["iat"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    def test_each_token_is_unique(self):
        first = jwt_handler.create_access_token(sub=7, role=jwt_handler.ROLE_USER)
        second = jwt_handler.create_access_token(sub=7, role=jwt_handler.ROLE_USER)

        assert first != second

    def test_role_mismatch(self):
        token = jwt_handler.create_access_token(sub=7, role=jwt_handler.ROLE_DRIVER)

        with pytest.raises(ValueError):
            jwt_handler.decode_and_validate(token, expected_role=jwt_handler.ROLE_USER)

    def test_expired_token(self, monkeypatch):
        monkeypatch.setattr(settings, "ACCESS_TOKEN_EXPIRE_MINUTES", -5)
        token = jwt_handler.create_access_token(sub=7, role=jwt_handler.ROLE_USER)

        with pytest.raises(ValueError):
            jwt_handler.decode_token(token)

    def test_wrong_secret(self, monkeypatch):
        token = jwt_handler.create_access_token(sub=7, role=jwt_handler.ROLE_USER)
        monkeypatch.setattr(settings, "JWT_SECRET_KEY", "another-secret")

        with pytest.raises(ValueError):
            jwt_handler.decode_token(token)


class TestRehash:
    def test_hash_cost_follows_settings(self):
        assert hash_cost(hash_password("secret123")) == settings.BCRYPT_ROUNDS

    def test_explicit_rounds(self):
        hashed = hash_password("secret123", rounds=settings.BCRYPT_ROUNDS + 1)

        assert hash_cost(hashed) == settings.BCRYPT_ROUNDS + 1
        assert needs_rehash(hashed)

    def test_current_cost_needs_no_rehash(self):
        assert not needs_rehash(hash_password("secret123"))

    def test_unparseable_hash(self):
        assert hash_cost("not-a-bcrypt-hash") is None
        assert needs_rehash("not-a-bcrypt-hash")

    def test_verify_password_over_72_bytes(self):
        hashed = hash_password("x" * 72)

        assert not verify_password("x" * 73, hashed)


class TestTokenExpiry:
    def test_expiry_of_expired_token(self, monkeypatch):
        monkeypatch.setattr(settings, "ACCESS_TOKEN_EXPIRE_MINUTES", -5)
        token = jwt_handler.create_access_token(sub=7, role=jwt_handler.ROLE_USER)

        exp = jwt_handler.get_expiry(token)

        assert exp is not None
        assert exp.timestamp() == jwt.decode(token, options={"verify_signature": False})["exp"]

    def test_expiry_of_foreign_token(self):
        assert jwt_handler.get_expiry("not-a-jwt") is None
