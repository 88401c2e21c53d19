"""Exception types raised around the conversion pipeline.

Each class carries the HTTP status and the user-facing text the web layer
answers with, so route handlers only need to raise.
"""
from typing import Optional


class Md2SlidesError(Exception):
    """Base class for every error this package raises on purpose."""

    status_code = 500

    @property
    def user_message(self) -> str:
        return "An unexpected error occurred."


class ConfigurationError(Md2SlidesError):
    """A required setting (OAuth client id/secret, …) is missing."""

    @property
    def user_message(self) -> str:
        return "The server is missing its Google OAuth configuration."


class NotAuthenticatedError(Md2SlidesError):
    status_code = 401

    @property
    def user_message(self) -> str:
        return "Please sign in with Google first using the login button on the home page."


class AuthorizationDeniedError(Md2SlidesError):
    """The OAuth callback arrived without an authorization code."""

    status_code = 400

    @property
    def user_message(self) -> str:
        return "Google did not grant access to your account."


class AuthExchangeError(Md2SlidesError):
    """Exchanging the OAuth authorization code for tokens failed."""

    @property
    def user_message(self) -> str:
        return "Google authentication failed."


class ConversionError(Md2SlidesError):
    """Creating or filling the presentation failed."""

    def __init__(self, message: str, http_status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.http_status = http_status

    @property
    def user_message(self) -> str:
        return f"An unexpected error occurred while converting the markdown to slides: {self.message}"


class SlidesAPIError(ConversionError):
    """The Slides API rejected a request."""


class LayoutNotFoundError(SlidesAPIError):
    @property
    def user_message(self) -> str:
        return (
            'Error: the "TITLE_AND_BODY" slide layout may not be available or the slide '
            "could not be created. Check the API permissions and try again."
        )


class UpstreamAuthError(SlidesAPIError):
    status_code = 401

    @property
    def user_message(self) -> str:
        return (
            "Authentication error: your credentials may be expired or invalid. "
            "Please sign in with Google again."
        )
