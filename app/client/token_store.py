"""Bearer token persistence for the API client."""

import json
from pathlib import Path
from typing import Optional, Protocol


class TokenStore(Protocol):
    def load(self) -> Optional[str]:
        ...

    def save(self, token: str) -> None:
        ...

    def clear(self) -> None:
        ...


class MemoryTokenStore:
    """Keeps the token for the lifetime of the process."""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def load(self) -> Optional[str]:
        return self._token

    def save(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStore:
    """Keeps the token in a small JSON file so it survives restarts."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            with open(self.path) as f:
                return json.load(f).get("token")
        except (OSError, ValueError):
            return None

    def save(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump({"token": token}, f)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
