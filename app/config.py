"""
Configuration module for FitZone backend.
Loads settings from .env file and environment variables.
"""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv(Path(__file__).parent.parent / ".env")


def _as_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


class Settings:
    """Application configuration loaded from environment variables."""

    def __init__(self):
        self.app_name: str = os.getenv("APP_NAME", "FitZone")
        self.api_version: str = os.getenv("API_VERSION", "v1")
        self.debug: bool = _as_bool(os.getenv("DEBUG", "false"))
        self.environment: str = os.getenv("ENVIRONMENT", "development")

        # Firebase
        self.firebase_credentials_path: str = os.getenv("FIREBASE_CREDENTIALS_PATH", "")
        self.firebase_project_id: str = os.getenv("FIREBASE_PROJECT_ID", "")
        self.web_api_key: str = os.getenv("WEB_API_KEY", "")

        # The admin SDK only reads FIREBASE_AUTH_EMULATOR_HOST
        auth_emulator_host = os.getenv("AUTH_EMULATOR_HOST", "")
        if auth_emulator_host and not os.getenv("FIREBASE_AUTH_EMULATOR_HOST"):
            os.environ["FIREBASE_AUTH_EMULATOR_HOST"] = auth_emulator_host
        self.auth_emulator_host: str = auth_emulator_host or os.getenv("FIREBASE_AUTH_EMULATOR_HOST", "")

        self.identity_toolkit_url: str = os.getenv(
            "IDENTITY_TOOLKIT_URL", "https://identitytoolkit.googleapis.com"
        )
        self.identity_timeout_seconds: float = float(os.getenv("IDENTITY_TIMEOUT_SECONDS", "10"))

        # CORS
        cors_raw = os.getenv("CORS_ORIGINS", "*")
        self.cors_origins: List[str] = [s.strip() for s in cors_raw.split(",")]

        # Local mode (no Firebase)
        self.local_mode: Optional[bool] = (
            _as_bool(os.environ["LOCAL_MODE"]) if "LOCAL_MODE" in os.environ else None
        )
        self.local_data_dir: str = os.getenv("LOCAL_DATA_DIR", "./data")

        # Local token signing
        self.secret_key: str = os.getenv("SECRET_KEY", "fitzone-dev-secret")
        self.algorithm: str = os.getenv("ALGORITHM", "HS256")
        self.access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

    @property
    def use_local_services(self) -> bool:
        """Whether to run on LocalStore and the local identity service."""
        if self.local_mode is not None:
            return self.local_mode
        if self.auth_emulator_host:
            return False
        cred_path = self.firebase_credentials_path
        return not cred_path or not os.path.exists(cred_path)


_settings = None


def get_settings() -> Settings:
    """Get application settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
