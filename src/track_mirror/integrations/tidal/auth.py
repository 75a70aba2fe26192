"""
Tidal authentication for the search executor.

Sessions are stored as JSON under the configured tokens directory and
reused until they stop validating; a refresh is attempted before falling
back to the OAuth device login flow.
"""
import json
import logging
import os
import stat
import tempfile
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import tidalapi

from ...core.config import Config
from ...core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

SESSION_FILENAME = "tidal_session.json"
REQUIRED_TOKEN_FIELDS = ("token_type", "access_token")


class TidalAuth:
    """Tidal authentication with a persisted OAuth session."""

    def __init__(self, config: Config):
        self.config = config
        self.auth_timeout = 300  # seconds
        self.poll_interval = 2.0
        self.login_callback: Optional[Callable[[str], None]] = None

    def get_token_path(self) -> Path:
        """Get the session file path, creating an owner-only tokens directory."""
        tokens_dir = self.config.tokens_dir
        tokens_dir.mkdir(exist_ok=True)
        if os.name == "posix":
            os.chmod(tokens_dir, stat.S_IRWXU)
        return tokens_dir / SESSION_FILENAME

    def save_session(self, tokens: Dict[str, Any]) -> bool:
        """Write session tokens atomically; returns False if the write failed."""
        token_path = self.get_token_path()
        fd, temp_path = tempfile.mkstemp(dir=token_path.parent, suffix=".tmp")

        try:
            with os.fdopen(fd, "w") as temp_file:
                json.dump({**tokens, "saved_at": time.time()}, temp_file, indent=2)
            if os.name == "posix":
                os.chmod(temp_path, stat.S_IRUSR | stat.S_IWUSR)
            os.replace(temp_path, token_path)
        except OSError as e:
            Path(temp_path).unlink(missing_ok=True)
            logger.error(f"Could not save Tidal session to {token_path}: {e}")
            return False

        logger.info(f"Tidal session saved to {token_path}")
        return True

    def load_session(self) -> Optional[Dict[str, Any]]:
        """Read saved tokens, discarding a file that is unreadable or incomplete."""
        token_path = self.get_token_path()
        if not token_path.exists():
            logger.debug("No saved Tidal session")
            return None

        try:
            tokens = json.loads(token_path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Unreadable Tidal session file: {e}")
            self.clear_session()
            return None

        missing = [name for name in REQUIRED_TOKEN_FIELDS if name not in tokens]
        if missing:
            logger.warning(f"Saved Tidal session lacks {', '.join(missing)}")
            self.clear_session()
            return None

        return tokens

    def clear_session(self) -> bool:
        """Delete the saved session file."""
        token_path = self.get_token_path()
        try:
            token_path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Could not remove Tidal session file: {e}")
            return False

        logger.info("Saved Tidal session cleared")
        return True

    @staticmethod
    def is_logged_in(session: tidalapi.Session) -> bool:
        try:
            return bool(session.check_login())
        except Exception as e:
            logger.debug(f"Tidal login check failed: {e}")
            return False

    def authenticate(self) -> tidalapi.Session:
        """
        Return a logged-in Tidal session.

        The saved session is tried first, then a token refresh, and only then
        the interactive device login.

        Raises:
            AuthenticationError: If no session could be established
        """
        tokens = self.load_session()
        if tokens:
            session = self._restore(tokens)
            if session is not None:
                return session
            self.clear_session()

        return self._device_login()

    def _restore(self, tokens: Dict[str, Any]) -> Optional[tidalapi.Session]:
        """Rebuild a session from saved tokens, refreshing them if stale."""
        session = tidalapi.Session()
        refresh_token = tokens.get("refresh_token")

        try:
            session.load_oauth_session(
                tokens["token_type"], tokens["access_token"], refresh_token
            )
        except Exception as e:
            logger.warning(f"Saved Tidal session rejected: {e}")
            return None

        if self.is_logged_in(session):
            logger.info("Restored saved Tidal session")
            return session

        if not refresh_token:
            return None

        try:
            refreshed = session.token_refresh(refresh_token)
        except Exception as e:
            logger.warning(f"Tidal token refresh failed: {e}")
            return None

        if not refreshed:
            return None

        logger.info("Refreshed Tidal access token")
        self._store(session)
        return session

    def _device_login(self) -> tidalapi.Session:
        """Run the OAuth device flow and wait for the user to approve it."""
        session = tidalapi.Session()

        try:
            link_login, future = session.login_oauth()
        except Exception as e:
            raise AuthenticationError(f"OAuth authentication failed: {e}")

        login_url = link_login.verification_uri_complete
        if not login_url.startswith("http"):
            login_url = f"https://{login_url}"
        self._announce_login(login_url)

        deadline = time.time() + self.auth_timeout
        while not future.done():
            if time.time() >= deadline:
                raise AuthenticationError("Tidal login timed out")
            time.sleep(self.poll_interval)

        error = future.exception()
        if error is not None:
            raise AuthenticationError(f"OAuth authentication failed: {error}")

        if not self.is_logged_in(session):
            raise AuthenticationError("Tidal rejected the new login")

        self._store(session)
        logger.info("Logged in to Tidal")
        return session

    def _announce_login(self, login_url: str) -> None:
        message = f"Please visit {login_url} to authorize Tidal access"
        if self.login_callback:
            self.login_callback(message)
        logger.info(message)

    def _store(self, session: tidalapi.Session) -> None:
        self.save_session(
            {
                "token_type": session.token_type,
                "access_token": session.access_token,
                "refresh_token": session.refresh_token,
            }
        )
