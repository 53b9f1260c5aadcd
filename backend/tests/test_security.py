from datetime import datetime, timedelta, timezone

import jwt
import pytest

from dmchat.domain.entities.user import User
from dmchat.domain.exceptions import AuthError
from dmchat.domain.value_objects.user_id import UserId
from dmchat.infrastructure.security import JwtCredentialService, ScryptPasswordHasher

SECRET = "test-secret"
ISS = "dmchat"
AUD = "dmchat-clients"


def _user(id=5, username="alice"):
    return User(
        id=UserId(id),
        username=username,
        password_hash="unused",
        created_at=datetime.now(timezone.utc),
    )


def _raw_token(**overrides):
    now = datetime.now(timezone.utc)
    claims = {
        "sub": "5",
        "iat": now,
        "exp": now + timedelta(minutes=5),
        "iss": ISS,
        "aud": AUD,
    }
    claims.update(overrides)
    return jwt.encode(claims, SECRET, algorithm="HS256")


@pytest.fixture
def credentials():
    return JwtCredentialService(SECRET, ISS, AUD)


# ==================== PASSWORDS ====================


@pytest.fixture
def hasher():
    # cheap work factor keeps the suite fast
    return ScryptPasswordHasher(n=2**10)


def test_password_hash_verifies(hasher):
    stored = hasher.hash("secret123")

    assert stored.startswith("scrypt$1024$8$1$")
    assert "secret123" not in stored
    assert hasher.verify("secret123", stored)
    assert not hasher.verify("secret124", stored)


def test_password_hash_is_salted(hasher):
    assert hasher.hash("same") != hasher.hash("same")


def test_hash_with_other_work_factor_still_verifies(hasher):
    stored = ScryptPasswordHasher(n=2**11).hash("secret123")
    assert hasher.verify("secret123", stored)


@pytest.mark.parametrize("stored", ["", "plain", "bcrypt$1$2$3$4$5", "scrypt$x$8$1$aa$bb"])
def test_malformed_hash_never_verifies(hasher, stored):
    assert not hasher.verify("secret123", stored)


# ==================== TOKENS ====================


def test_issued_token_verifies_to_user_id(credentials):
    token = credentials.issue(_user(id=5))

    assert credentials.verify(token) == UserId(5)
    assert credentials.decode(token)["username"] == "alice"


def test_expired_token_is_rejected(credentials):
    past = datetime.now(timezone.utc) - timedelta(days=8)
    token = _raw_token(iat=past, exp=past + timedelta(days=7))

    with pytest.raises(AuthError, match="expired"):
        credentials.verify(token)


@pytest.mark.parametrize(
    "token",
    [
        "not-a-jwt",
        _raw_token(aud="someone-else"),
        _raw_token(iss="someone-else"),
        jwt.encode({"sub": "5"}, SECRET, algorithm="HS256"),
    ],
)
def test_invalid_tokens_are_rejected(credentials, token):
    with pytest.raises(AuthError):
        credentials.verify(token)


def test_token_signed_with_other_secret_is_rejected(credentials):
    other = JwtCredentialService("another-secret", ISS, AUD)
    with pytest.raises(AuthError):
        credentials.verify(other.issue(_user()))


@pytest.mark.parametrize("sub", ["abc", "0", "-3"])
def test_token_with_bad_subject_is_rejected(credentials, sub):
    with pytest.raises(AuthError, match="claims"):
        credentials.verify(_raw_token(sub=sub))


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        JwtCredentialService("", ISS, AUD)
