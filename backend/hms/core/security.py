import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional

import jwt
from passlib.context import CryptContext

from hms.core.config import get_jwt_settings, is_production, WEAK_SECRETS

# Password hashing configuration
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password to hash

    Returns:
        Hashed password string
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a password against its hash.

    Returns:
        True if password matches, False otherwise (including unusable hashes)
    """
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


# JWT configuration
def get_jwt_secret_key():
    """Get JWT secret key with production validation.

    Raises:
        ValueError: If production deployment uses weak or missing JWT secret

    Returns:
        JWT secret key from environment or development default
    """
    secret = os.getenv("JWT_SECRET_KEY", "dev-jwt-secret-change-me")

    if is_production() and (secret in WEAK_SECRETS or len(secret) < 32):
        raise ValueError(
            "Production deployment requires strong JWT_SECRET_KEY (min 32 chars). "
            "Set JWT_SECRET_KEY environment variable."
        )

    return secret


JWT_ALGORITHM = "HS256"


def create_access_token(
    data: Dict[str, Any], expires_delta: Optional[timedelta] = None
) -> str:
    """Create a signed JWT access token.

    ``iss``, ``aud`` and ``exp`` are added from configuration.

    Args:
        data: Payload data to encode in the token
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    settings = get_jwt_settings()
    to_encode = data.copy()

    if expires_delta is None:
        expires_delta = timedelta(hours=settings["expiration_hours"])

    to_encode.update(
        {
            "exp": datetime.now(timezone.utc) + expires_delta,
            "iss": settings["issuer"],
            "aud": settings["audience"],
        }
    )

    return jwt.encode(to_encode, get_jwt_secret_key(), algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and validate a JWT access token.

    Returns:
        Decoded payload if valid, None if invalid, expired or issued for
        another issuer/audience
    """
    settings = get_jwt_settings()
    try:
        return jwt.decode(
            token,
            get_jwt_secret_key(),
            algorithms=[JWT_ALGORITHM],
            audience=settings["audience"],
            issuer=settings["issuer"],
        )
    except jwt.PyJWTError:
        return None


def create_user_token(
    user_id: int, name: str, email: str, permissions: Iterable[str]
) -> str:
    """Create a JWT token carrying the user's permission route names as claims."""
    token_data = {
        "sub": str(user_id),
        "name": name,
        "email": email,
        "permissions": sorted(set(permissions)),
        "type": "access",
    }
    return create_access_token(token_data)


def get_user_from_token(token: str) -> Optional[Dict[str, Any]]:
    """Extract user information from a JWT token.

    Returns:
        Dict with ``user_id``, ``name``, ``email`` and ``permissions`` if the
        token is valid, None otherwise
    """
    payload = decode_access_token(token)
    if payload is None:
        return None

    user_id = payload.get("sub")
    if user_id is None:
        return None

    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        return None

    return {
        "user_id": user_id,
        "name": payload.get("name", ""),
        "email": payload.get("email", ""),
        "permissions": list(payload.get("permissions") or []),
    }
