from datetime import datetime, timedelta, timezone

import pytest

from personal_manager.core.security import decode_token, verify_password
from personal_manager.entities import User
from personal_manager.services.auth import AuthService


@pytest.fixture()
def users(factory):
    return factory.get(User)


@pytest.fixture()
def auth(users, settings):
    return AuthService(users, settings)


@pytest.mark.asyncio
async def test_register_alice_scenario(auth, users, settings):
    first = await auth.register("alice", "alice@example.com", "Secret123", "Alice A")
    assert first.user_id == 1
    assert first.role == "User"
    assert first.full_name == "Alice A"

    assert await auth.register("alice", "other@example.com", "Secret123") is None
    assert len(await users.get_all()) == 1

    login = await auth.login("alice", "Secret123")
    assert login is not None
    claims = decode_token(login.token, settings)
    assert claims["sub"] == "1"
    assert claims["name"] == "alice"
    assert claims["email"] == "alice@example.com"
    assert claims["role"] == "User"
    assert claims["iss"] == settings.JWT_ISSUER
    assert claims["aud"] == settings.JWT_AUDIENCE


@pytest.mark.asyncio
async def test_register_rejects_taken_email(auth, users):
    await auth.register("alice", "alice@example.com", "Secret123")
    before = (users.file_path).read_text(encoding="utf-8")

    assert await auth.register("alicia", "alice@example.com", "Secret123") is None
    assert users.file_path.read_text(encoding="utf-8") == before


@pytest.mark.asyncio
async def test_register_stores_bcrypt_hash(auth, users):
    await auth.register("bob", "bob@example.com", "hunter22")
    stored = (await users.get_all())[0]
    assert stored.password_hash != "hunter22"
    assert stored.password_hash.startswith("$2")
    assert verify_password("hunter22", stored.password_hash)


@pytest.mark.asyncio
async def test_login_failures_return_none(auth, users):
    await auth.register("alice", "alice@example.com", "Secret123")

    assert await auth.login("alice", "wrong-password") is None
    assert await auth.login("nobody", "Secret123") is None

    alice = (await users.get_all())[0]
    alice.is_active = False
    await users.update(alice)
    assert await auth.login("alice", "Secret123") is None


@pytest.mark.asyncio
async def test_token_expiry_follows_settings(auth, settings):
    result = await auth.register("alice", "alice@example.com", "Secret123")
    expected = datetime.now(tz=timezone.utc) + timedelta(hours=settings.JWT_EXPIRY_HOURS)
    assert abs((result.expires_at - expected).total_seconds()) < 60

    claims = decode_token(result.token, settings)
    assert abs(claims["exp"] - int(result.expires_at.timestamp())) <= 1


@pytest.mark.asyncio
async def test_current_user_is_public_view(auth):
    registered = await auth.register("alice", "alice@example.com", "Secret123")
    me = await auth.get_current_user(registered.user_id)
    assert me.username == "alice"
    assert "password_hash" not in me.model_dump()
    assert await auth.get_current_user(404) is None


@pytest.mark.parametrize(
    "claims, expected",
    [({"sub": "7"}, 7), ({"sub": "abc"}, None), ({}, None), ({"sub": None}, None)],
)
def test_user_id_from_claims(claims, expected):
    assert AuthService.get_user_id_from_claims(claims) == expected


def test_tampered_token_is_rejected(settings):
    from jose import JWTError

    from personal_manager.core.security import create_access_token

    token, _ = create_access_token("1", settings=settings)
    other = settings.model_copy(update={"JWT_SECRET_KEY": "a-completely-different-secret-key-value"})
    with pytest.raises(JWTError):
        decode_token(token, other)

    wrong_audience = settings.model_copy(update={"JWT_AUDIENCE": "SomeoneElse"})
    with pytest.raises(JWTError):
        decode_token(token, wrong_audience)
