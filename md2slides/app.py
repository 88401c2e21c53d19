"""FastAPI application: Google sign-in and the markdown → Slides conversion form."""
from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Callable, Optional

from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from google.auth.exceptions import RefreshError
from google.oauth2.credentials import Credentials
from starlette.middleware.sessions import SessionMiddleware

from .auth import CredentialStore, GoogleOAuth
from .config import Settings
from .errors import (
    AuthorizationDeniedError,
    ConversionError,
    Md2SlidesError,
    NotAuthenticatedError,
    UpstreamAuthError,
)
from .gslides_client import SlidesClient, presentation_url
from .request_builder import SlideRequestBuilder, batch_requests

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent

SESSION_ID_KEY = "sid"
OAUTH_STATE_KEY = "oauth_state"
OAUTH_VERIFIER_KEY = "oauth_code_verifier"

SlidesFactory = Callable[[Credentials], SlidesClient]


def _session_id(request: Request) -> Optional[str]:
    return request.session.get(SESSION_ID_KEY)


def _ensure_session_id(request: Request) -> str:
    session_id = request.session.get(SESSION_ID_KEY)
    if not session_id:
        session_id = uuid.uuid4().hex
        request.session[SESSION_ID_KEY] = session_id
    return session_id


def create_app(
    settings: Optional[Settings] = None,
    *,
    oauth: Optional[GoogleOAuth] = None,
    store: Optional[CredentialStore] = None,
    slides_factory: Optional[SlidesFactory] = None,
    builder: Optional[SlideRequestBuilder] = None,
) -> FastAPI:
    """Build the web application.

    Parameters
    ----------
    settings
        Server settings; read from the environment when omitted.
    oauth
        OAuth flow helper (tests pass a fake).
    store
        Per-session credential store.
    slides_factory
        Callable returning a :class:`SlidesClient` for a set of credentials.
    builder
        Markdown → request translator.
    """
    settings = settings or Settings.from_env()
    oauth = oauth or GoogleOAuth(settings)
    store = store or CredentialStore()
    slides_factory = slides_factory or SlidesClient.from_credentials
    builder = builder or SlideRequestBuilder()

    app = FastAPI(
        title="Markdown to Google Slides",
        description="Convert markdown into a Google Slides presentation",
        version="1.0.0",
    )
    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)
    app.mount("/static", StaticFiles(directory=str(PACKAGE_DIR / "static")), name="static")
    templates = Jinja2Templates(directory=str(PACKAGE_DIR / "templates"))

    app.state.settings = settings
    app.state.credential_store = store

    @app.exception_handler(Md2SlidesError)
    async def handle_known_error(request: Request, exc: Md2SlidesError):
        logger.exception("%s on %s: %s", type(exc).__name__, request.url.path, exc, exc_info=exc)
        return PlainTextResponse(exc.user_message, status_code=exc.status_code)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request):
        is_authenticated = store.is_authenticated(_session_id(request))
        return templates.TemplateResponse(
            request, "index.html", {"is_authenticated": is_authenticated}
        )

    @app.get("/auth/google")
    def auth_start(request: Request):
        url, state, code_verifier = oauth.authorization_url()
        request.session[OAUTH_STATE_KEY] = state
        if code_verifier:
            request.session[OAUTH_VERIFIER_KEY] = code_verifier
        else:
            request.session.pop(OAUTH_VERIFIER_KEY, None)
        return RedirectResponse(url, status_code=302)

    @app.get("/auth/google/callback")
    def auth_callback(
        request: Request,
        code: Optional[str] = None,
        error: Optional[str] = None,
    ):
        if not code:
            raise AuthorizationDeniedError(error or "missing authorization code")

        credentials = oauth.exchange_code(
            code,
            state=request.session.get(OAUTH_STATE_KEY),
            code_verifier=request.session.get(OAUTH_VERIFIER_KEY),
        )
        request.session.pop(OAUTH_STATE_KEY, None)
        request.session.pop(OAUTH_VERIFIER_KEY, None)
        store.set(_ensure_session_id(request), credentials)
        return RedirectResponse("/", status_code=302)

    @app.post("/convert", response_class=HTMLResponse)
    def convert(request: Request, markdownText: str = Form("")):
        session_id = _session_id(request)
        if not store.is_authenticated(session_id):
            raise NotAuthenticatedError("conversion attempted without credentials")
        credentials = store.get(session_id)

        specs, ops = builder.assemble_specs(markdownText, settings.slide_delimiter)
        logger.info("Converting %d slides (%d requests)", len(specs), len(ops))

        try:
            client = slides_factory(credentials)
            presentation_id = client.create_presentation(settings.presentation_title)
            client.batch_update(presentation_id, batch_requests(ops))
        except RefreshError as exc:
            store.discard(session_id)
            raise UpstreamAuthError(str(exc), http_status=401) from exc
        except UpstreamAuthError:
            store.discard(session_id)
            raise
        except Md2SlidesError:
            raise
        except Exception as exc:
            logger.exception("Unexpected failure while converting markdown")
            raise ConversionError(str(exc)) from exc

        return templates.TemplateResponse(
            request,
            "success.html",
            {"presentation_url": presentation_url(presentation_id), "slide_count": len(specs)},
        )

    return app
