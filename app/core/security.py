"""
Security utilities for locally issued tokens.
Tokens are HS256 JWTs signed with the configured secret.
"""

import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

import jwt

from app.config import Settings
from app.utils.exceptions import TokenVerificationError


def create_access_token(
    data: Dict[str, Any],
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed access token carrying ``data`` as claims."""
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode.update({"iat": now, "exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_token(token: str, settings: Settings) -> Dict[str, Any]:
    """Decode and verify an access token."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except jwt.ExpiredSignatureError as e:
        raise TokenVerificationError("Token expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenVerificationError(f"Token decode failed: {e}") from e


def hash_password(password: str, salt: Optional[str] = None) -> Tuple[str, str]:
    """Hash a password with a per-user salt. Returns ``(salt, digest)``."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), 100_000).hex()
    return salt, digest


def verify_password(password: str, salt: str, digest: str) -> bool:
    return secrets.compare_digest(hash_password(password, salt)[1], digest)
