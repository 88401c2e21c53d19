"""Google OAuth2 web flow and per-session credential storage."""
from __future__ import annotations

import logging
import threading
from typing import Dict, Optional, Tuple

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow

from .config import Settings
from .errors import AuthExchangeError

logger = logging.getLogger(__name__)


class GoogleOAuth:
    """Builds consent URLs and exchanges authorization codes for credentials.

    A new :class:`Flow` is created for every step; the OAuth ``state`` and the
    PKCE code verifier produced by :meth:`authorization_url` must be handed
    back to :meth:`exchange_code` by the caller (the web app keeps them in
    the session cookie).
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def _flow(self, state: Optional[str] = None, code_verifier: Optional[str] = None) -> Flow:
        return Flow.from_client_config(
            self.settings.client_config(),
            scopes=self.settings.scopes,
            redirect_uri=self.settings.redirect_uri,
            state=state,
            code_verifier=code_verifier,
        )

    def authorization_url(self) -> Tuple[str, str, Optional[str]]:
        """Return ``(url, state, code_verifier)`` for the consent screen.

        Offline access plus a forced consent prompt make Google hand out a
        refresh token every time.
        """
        flow = self._flow()
        url, state = flow.authorization_url(access_type="offline", prompt="consent")
        return url, state, getattr(flow, "code_verifier", None)

    def exchange_code(
        self,
        code: str,
        state: Optional[str] = None,
        code_verifier: Optional[str] = None,
    ) -> Credentials:
        flow = self._flow(state=state, code_verifier=code_verifier)
        try:
            flow.fetch_token(code=code)
        except Exception as exc:
            raise AuthExchangeError(f"Token exchange failed: {exc}") from exc
        return flow.credentials


class CredentialStore:
    """In-memory map from session id to Google credentials.

    Nothing is persisted; restarting the server signs everybody out.
    """

    def __init__(self) -> None:
        self._credentials: Dict[str, Credentials] = {}
        self._lock = threading.Lock()

    def get(self, session_id: Optional[str]) -> Optional[Credentials]:
        if not session_id:
            return None
        with self._lock:
            return self._credentials.get(session_id)

    def set(self, session_id: str, credentials: Credentials) -> None:
        with self._lock:
            self._credentials[session_id] = credentials
        logger.info("Stored Google credentials for session %s…", session_id[:8])

    def discard(self, session_id: Optional[str]) -> None:
        """Forget the session's credentials (e.g. after Google revoked them)."""
        if not session_id:
            return
        with self._lock:
            self._credentials.pop(session_id, None)

    def is_authenticated(self, session_id: Optional[str]) -> bool:
        credentials = self.get(session_id)
        return bool(credentials is not None and credentials.token)
