"""JSON-file persistence for Spotify OAuth tokens."""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


class SpotifyTokens(BaseModel):
    """Stored OAuth tokens.

    Attributes:
        access_token: Bearer token for the Web API.
        refresh_token: Long-lived refresh token.
        expires_at: Access token expiry (unix seconds).
    """

    access_token: str
    refresh_token: str
    expires_at: float


class SpotifyTokenStore:
    """Read and write the tokens file."""

    def __init__(self, path: Path) -> None:
        """Initialize store.

        Args:
            path: JSON file holding the tokens.
        """
        self._path = path

    @property
    def path(self) -> Path:
        """Return tokens file path."""
        return self._path

    def load(self) -> SpotifyTokens | None:
        """Load tokens, None when absent or unreadable."""
        if not self._path.exists():
            return None
        try:
            with self._path.open("r", encoding="utf-8") as f:
                return SpotifyTokens.model_validate(json.load(f))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Invalid Spotify tokens file: {e}")
            return None

    def save(self, tokens: SpotifyTokens) -> None:
        """Persist tokens."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as f:
            json.dump(tokens.model_dump(), f, indent=2)

    def clear(self) -> bool:
        """Delete the tokens file.

        Returns:
            True if deleted, False if not found.
        """
        if not self._path.exists():
            return False
        self._path.unlink()
        return True
