"""
contacts_api/core/security.py

Purpose: Password and bearer-token primitives

- bcrypt password hashing via passlib
- JWT signing and verification via PyJWT
"""

from datetime import timedelta
from typing import Any, Dict

import jwt
from passlib.context import CryptContext

from contacts_api.core.config import Settings
from contacts_api.core.exceptions import AuthenticationError
from utils.time_utils import utcnow

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: str, version: int, config: Settings) -> str:
    """
    Signs a session token for a user.

    Args:
        user_id: String form of the user's ObjectId (``sub`` claim)
        version: Token version the token is issued for (``ver`` claim)
        config: Settings holding the secret, algorithm and lifetime

    Returns:
        Encoded JWT
    """
    now = utcnow()
    payload: Dict[str, Any] = {
        "sub": user_id,
        "ver": version,
        "iat": now,
        "exp": now + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, config.SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str, config: Settings) -> Dict[str, Any]:
    """
    Verifies signature and expiry of a session token.

    Raises:
        AuthenticationError: If the token is expired, tampered with or malformed
    """
    try:
        payload = jwt.decode(
            token,
            config.SECRET_KEY,
            algorithms=[config.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError(details="Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError()
    return payload
