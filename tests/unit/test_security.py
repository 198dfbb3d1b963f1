import jwt

from inventory_api.config import settings
from inventory_api.core.security import (
    JWT_ALG,
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


def test_password_hash_round_trip():
    hashed = get_password_hash("s3cret!")
    assert hashed != "s3cret!"
    assert verify_password("s3cret!", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_against_garbage_hash():
    assert verify_password("s3cret!", "not-a-hash") is False


def test_token_carries_claims():
    token = create_access_token({"sub": "user-1", "role": "admin"})
    claims = decode_access_token(token)
    assert claims["sub"] == "user-1"
    assert claims["role"] == "admin"
    assert "exp" in claims


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "user-1"}, expires_minutes=-1)
    assert decode_access_token(token) is None


def test_forged_token_is_rejected():
    forged = jwt.encode({"sub": "user-1"}, settings.SECRET_KEY + "x", algorithm=JWT_ALG)
    assert decode_access_token(forged) is None
    assert decode_access_token("not.a.token") is None
