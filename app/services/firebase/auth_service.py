"""Firebase Admin authentication service."""

import os
from typing import Any, Dict, Optional

import firebase_admin
from firebase_admin import auth, credentials, firestore
from firebase_admin.exceptions import FirebaseError
from starlette.concurrency import run_in_threadpool

from app.config import Settings
from app.utils.exceptions import EmailAlreadyRegisteredError, IdentityError, TokenVerificationError
from app.utils.logger import get_logger

logger = get_logger(__name__)


def initialize_firebase(settings: Settings) -> firebase_admin.App:
    """Initialize (or reuse) the default Firebase Admin app.

    Args:
        settings: Application settings. ``firebase_credentials_path`` is used
                  when it points at a file, otherwise application default
                  credentials are used (also the case against the emulator).

    Returns:
        The Firebase app instance
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    options = {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None
    credentials_path = settings.firebase_credentials_path

    if credentials_path and os.path.exists(credentials_path):
        cred = credentials.Certificate(credentials_path)
        app = firebase_admin.initialize_app(cred, options)
        logger.info(f"Firebase initialized with credentials: {credentials_path}")
    else:
        app = firebase_admin.initialize_app(options=options)
        logger.info("Firebase initialized with default credentials")

    return app


def get_firestore_client(app: firebase_admin.App):
    """Get the Firestore client bound to ``app``."""
    return firestore.client(app=app)


class FirebaseService:
    """Firebase Auth user management and ID token verification."""

    def __init__(self, app: firebase_admin.App, clock_skew_seconds: int = 0):
        self._app = app
        self._clock_skew_seconds = clock_skew_seconds

    async def create_user(self, email: str, password: str,
                          display_name: Optional[str] = None) -> str:
        """Create a new Firebase user.

        Args:
            email: User email address
            password: User password (minimum 6 characters)
            display_name: Optional display name for user

        Returns:
            User ID (uid)

        Raises:
            EmailAlreadyRegisteredError: If the email already has an account
            IdentityError: If Firebase rejects the request for any other reason
        """
        try:
            user = await run_in_threadpool(
                auth.create_user,
                email=email,
                password=password,
                display_name=display_name,
                app=self._app,
            )
        except auth.EmailAlreadyExistsError as e:
            logger.info(f"Email already registered: {email}")
            raise EmailAlreadyRegisteredError(email) from e
        except (FirebaseError, ValueError) as e:
            logger.error(f"Error creating user: {e}")
            raise IdentityError(str(e)) from e

        logger.info(f"User created successfully: {user.uid}")
        return user.uid

    async def delete_user(self, uid: str) -> None:
        """Delete a Firebase user.

        Raises:
            IdentityError: If deletion fails
        """
        try:
            await run_in_threadpool(auth.delete_user, uid, app=self._app)
        except (FirebaseError, ValueError) as e:
            logger.error(f"Error deleting user {uid}: {e}")
            raise IdentityError(str(e)) from e
        logger.info(f"User deleted: {uid}")

    async def verify_token(self, token: str) -> Dict[str, Any]:
        """Verify Firebase ID token.

        Args:
            token: Firebase ID token

        Returns:
            Decoded token claims including ``uid`` and ``email``

        Raises:
            TokenVerificationError: If the token is empty, malformed, expired
                                    or revoked
        """
        if not token:
            raise TokenVerificationError("Token cannot be empty")

        try:
            decoded_token = await run_in_threadpool(
                auth.verify_id_token,
                token,
                app=self._app,
                clock_skew_seconds=self._clock_skew_seconds,
            )
        except (FirebaseError, ValueError) as e:
            logger.warning(f"Token verification failed: {e}")
            raise TokenVerificationError() from e

        logger.debug(f"Token verified for user: {decoded_token.get('uid')}")
        return decoded_token
