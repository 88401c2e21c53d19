"""Google Slides API access for the converter.

Only two calls are needed: create an empty presentation, then submit every
slide request in a single ``batchUpdate`` so the deck is built all-or-nothing.
Errors are not retried; :class:`HttpError` and google-auth's
:class:`RefreshError` are translated into the :mod:`md2slides.errors`
hierarchy so the web layer can pick a message.
"""
from __future__ import annotations

import logging
from typing import Dict, List

from google.auth.exceptions import RefreshError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .errors import LayoutNotFoundError, SlidesAPIError, UpstreamAuthError

logger = logging.getLogger(__name__)

EDIT_URL_TEMPLATE = "https://docs.google.com/presentation/d/{presentation_id}/edit"


def presentation_url(presentation_id: str) -> str:
    return EDIT_URL_TEMPLATE.format(presentation_id=presentation_id)


def classify_http_error(exc: HttpError) -> SlidesAPIError:
    """Map an API error onto a :class:`SlidesAPIError` subclass."""
    status = getattr(exc.resp, "status", None)
    try:
        status = int(status) if status is not None else None
    except (TypeError, ValueError):
        status = None
    message = str(exc)
    content = exc.content.decode("utf-8", "replace") if isinstance(exc.content, bytes) else str(exc.content or "")
    detail = f"{message} {getattr(exc, 'reason', '')} {content}"

    if status == 400 and "LAYOUT_NOT_FOUND" in detail:
        return LayoutNotFoundError(message, http_status=status)
    if status == 401:
        return UpstreamAuthError(message, http_status=status)
    return SlidesAPIError(message, http_status=status)


class SlidesClient:
    """Wrapper around the ``slides/v1`` discovery client for one user."""

    def __init__(self, service) -> None:
        self.service = service

    @classmethod
    def from_credentials(cls, credentials: Credentials) -> "SlidesClient":
        service = build("slides", "v1", credentials=credentials, cache_discovery=False)
        return cls(service)

    def create_presentation(self, title: str) -> str:
        """Create an empty presentation and return its id."""
        try:
            pres = (
                self.service.presentations()
                .create(body={"title": title})
                .execute()
            )
        except RefreshError as exc:
            raise UpstreamAuthError(str(exc), http_status=401) from exc
        except HttpError as exc:
            raise classify_http_error(exc) from exc
        presentation_id = pres["presentationId"]
        logger.info("Created presentation %s", presentation_id)
        return presentation_id

    def batch_update(self, presentation_id: str, requests: List[Dict]) -> Dict:
        """Apply *requests* to the presentation in one call."""
        if not requests:
            return {}
        try:
            response = (
                self.service.presentations()
                .batchUpdate(presentationId=presentation_id, body={"requests": requests})
                .execute()
            )
        except RefreshError as exc:
            raise UpstreamAuthError(str(exc), http_status=401) from exc
        except HttpError as exc:
            raise classify_http_error(exc) from exc
        logger.info("Applied %d requests to presentation %s", len(requests), presentation_id)
        return response
