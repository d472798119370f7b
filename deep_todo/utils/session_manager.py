"""Session management utilities."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from ..core.constants import SESSION_FILE_NAME, TOKEN_KEY

logger = logging.getLogger(__name__)


class SessionManager:
    """Owns the bearer credential of the current user.

    The token is persisted across runs in a small JSON file under the data
    directory. Everything that needs the credential receives this object
    instead of reading the file directly.
    """

    def __init__(self, data_dir: Path):
        """Initialize session manager."""
        self.data_dir = data_dir
        self.session_file = data_dir / SESSION_FILE_NAME

    def get_token(self) -> Optional[str]:
        """Return the stored token, or None when logged out."""
        if not self.session_file.exists():
            return None
        try:
            data = json.loads(self.session_file.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable session file {self.session_file}: {e}")
            return None
        if not isinstance(data, dict):
            return None
        token = data.get(TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    def set_token(self, token: str) -> None:
        """Persist a new token, replacing any previous one."""
        token = token.strip()
        if not token:
            raise ValueError("Token cannot be empty")
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.session_file.write_text(json.dumps({TOKEN_KEY: token}, indent=2))
        os.chmod(self.session_file, 0o600)
        logger.info("Stored new session token")

    def clear(self) -> None:
        """Forget the stored token."""
        self.session_file.unlink(missing_ok=True)
        logger.info("Cleared session token")

    @property
    def is_authenticated(self) -> bool:
        """Whether a token is available."""
        return self.get_token() is not None
