"""
Local identity service for development without Firebase.
Accounts live in the LocalStore, tokens are locally signed JWTs.
"""

import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.config import Settings
from app.core.security import create_access_token, decode_token, hash_password, verify_password
from app.services.local_store import LocalStore
from app.utils.exceptions import (
    AuthServiceError,
    EmailAlreadyRegisteredError,
    IdentityError,
    TokenVerificationError,
)
from app.utils.logger import get_logger

logger = get_logger(__name__)

ACCOUNTS_COLLECTION = "authAccounts"


class LocalIdentityService:
    """Implements both IdentityService and CredentialExchange."""

    def __init__(self, store: LocalStore, settings: Settings):
        self._store = store
        self._settings = settings
        self._lock = threading.Lock()

    def _accounts(self):
        return self._store.collection(ACCOUNTS_COLLECTION)

    def _find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        docs = self._accounts().where("email", "==", email.lower()).limit(1).get()
        if not docs:
            return None
        data = docs[0].to_dict()
        data["uid"] = docs[0].id
        return data

    async def create_user(self, email: str, password: str, display_name: Optional[str] = None) -> str:
        if not email or "@" not in email:
            raise IdentityError("Invalid email address")
        if not password or len(password) < 6:
            raise IdentityError("Password must be at least 6 characters")

        with self._lock:
            if self._find_by_email(email) is not None:
                raise EmailAlreadyRegisteredError(email)

            uid = uuid.uuid4().hex[:28]
            salt, digest = hash_password(password)
            self._accounts().document(uid).set({
                "email": email.lower(),
                "displayName": display_name,
                "passwordSalt": salt,
                "passwordHash": digest,
                "createdAt": datetime.now(timezone.utc),
            })

        logger.info(f"Local user created: {uid}")
        return uid

    async def delete_user(self, uid: str) -> None:
        self._accounts().document(uid).delete()
        logger.info(f"Local user deleted: {uid}")

    async def verify_token(self, token: str) -> Dict[str, Any]:
        if not token:
            raise TokenVerificationError("Token cannot be empty")
        claims = decode_token(token, self._settings)
        uid = claims.get("uid")
        if not uid or not self._accounts().document(uid).get().exists:
            raise TokenVerificationError("Unknown user")
        return claims

    async def exchange(self, email: str, password: str) -> str:
        account = self._find_by_email(email or "")
        if account is None or not verify_password(
            password or "", account["passwordSalt"], account["passwordHash"]
        ):
            # Same wording as the Identity Toolkit for either case
            raise AuthServiceError(
                message="INVALID_LOGIN_CREDENTIALS",
                upstream_status=400,
                upstream_message="INVALID_LOGIN_CREDENTIALS",
            )

        return create_access_token(
            {"uid": account["uid"], "sub": account["uid"], "email": account["email"]},
            self._settings,
        )
