"""
Credential hashing and bearer tokens.

- Passwords: passlib pbkdf2_sha256
- Tokens: PyJWT, HS256 only, signed with settings.SECRET_KEY
"""
import time
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from inventory_api.config import settings

JWT_ALG = "HS256"

_pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
)


def get_password_hash(password: str) -> str:
    return _pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return _pwd_context.verify(plain_password, password_hash)
    except (ValueError, TypeError):
        return False


def create_access_token(data: Dict[str, Any], expires_minutes: Optional[int] = None) -> str:
    payload = dict(data)
    payload["exp"] = int(time.time()) + 60 * (expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=JWT_ALG)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Claims of a valid token, None if it is malformed, forged or expired."""
    try:
        out = jwt.decode(token, settings.SECRET_KEY, algorithms=[JWT_ALG])
    except jwt.PyJWTError:
        return None
    return out if isinstance(out, dict) else None
