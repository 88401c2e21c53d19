"""
Configuration for the web server, loaded from environment variables.
"""
import os
import secrets
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigurationError
from .segmenter import DEFAULT_DELIMITER

SCOPES = [
    "https://www.googleapis.com/auth/presentations",
    "https://www.googleapis.com/auth/drive",
]


@dataclass
class Settings:
    """Server settings. Use :meth:`from_env` to read them from ``.env`` / the environment."""

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect_uri: Optional[str] = None
    host: str = "127.0.0.1"
    port: int = 3000
    session_secret: str = field(default_factory=lambda: secrets.token_urlsafe(32))
    slide_delimiter: str = DEFAULT_DELIMITER
    presentation_title: str = "Presentation Generated from Markdown"
    scopes: List[str] = field(default_factory=lambda: list(SCOPES))

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """Build settings from environment variables, loading *env_file* (or ``./.env``) first."""
        load_dotenv(dotenv_path=env_file or find_dotenv(usecwd=True))
        port = int(os.getenv("PORT", "3000"))
        values = {
            "client_id": os.getenv("GOOGLE_CLIENT_ID"),
            "client_secret": os.getenv("GOOGLE_CLIENT_SECRET") or os.getenv("GOOGLE_ENV_CLIENT_SECRET"),
            "redirect_uri": os.getenv(
                "GOOGLE_REDIRECT_URI", f"http://localhost:{port}/auth/google/callback"
            ),
            "host": os.getenv("HOST", "127.0.0.1"),
            "port": port,
            "slide_delimiter": os.getenv("SLIDE_DELIMITER", DEFAULT_DELIMITER),
            "presentation_title": os.getenv(
                "PRESENTATION_TITLE", "Presentation Generated from Markdown"
            ),
        }
        session_secret = os.getenv("SESSION_SECRET")
        if session_secret:
            values["session_secret"] = session_secret
        return cls(**values)

    def client_config(self) -> Dict:
        """OAuth client config in the ``client_secrets.json`` "web" shape."""
        missing = [
            name
            for name, value in (
                ("GOOGLE_CLIENT_ID", self.client_id),
                ("GOOGLE_CLIENT_SECRET", self.client_secret),
                ("GOOGLE_REDIRECT_URI", self.redirect_uri),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing environment variable(s): {', '.join(missing)}")
        return {
            "web": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                "token_uri": "https://oauth2.googleapis.com/token",
                "redirect_uris": [self.redirect_uri],
            }
        }
