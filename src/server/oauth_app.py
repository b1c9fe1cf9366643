"""OAuth redirect service for GitHub login.

Two routes bind the authorization redirect to the browser that started it
without any server-side storage:

- /login sets a signed, short-lived state cookie and redirects to GitHub.
- /callback checks the cookie against the returned state, exchanges the
  code for a token and redirects to the frontend with the token in the
  URL fragment.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from clients.github import OAuthClient
from config import (
    CSRF_SECRET,
    FRONTEND_URL,
    GITHUB_CLIENT_ID,
    GITHUB_CLIENT_SECRET,
    GITHUB_TIMEOUT,
    HTTP_VERIFY,
    LOG_LEVEL,
    OAUTH_HOST,
    OAUTH_PORT,
)
from core.errors import AuthError, ExternalServiceError, ValidationError
from core.state_token import STATE_TTL_MS, new_state, sign_state, verify_state

log = logging.getLogger(__name__)

STATE_COOKIE = "oauth_state"


def _set_state_cookie(response: Response, value: str, *, max_age: int) -> None:
    # SameSite=None: the cookie must survive the cross-site hop GitHub -> /callback.
    response.set_cookie(
        key=STATE_COOKIE,
        value=value,
        max_age=max_age,
        path="/",
        secure=True,
        httponly=True,
        samesite="none",
    )


def create_app(
    *,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    frontend_url: Optional[str] = None,
    csrf_secret: Optional[str] = None,
    oauth_client: Optional[OAuthClient] = None,
    now_ms: Optional[Callable[[], int]] = None,
) -> FastAPI:
    secret = csrf_secret if csrf_secret is not None else CSRF_SECRET
    frontend = (frontend_url if frontend_url is not None else FRONTEND_URL).rstrip("/")
    if not secret:
        raise ValidationError("CSRF_SECRET must be set")

    client = oauth_client or OAuthClient(
        client_id=client_id if client_id is not None else GITHUB_CLIENT_ID,
        client_secret=client_secret if client_secret is not None else GITHUB_CLIENT_SECRET,
        timeout=GITHUB_TIMEOUT,
        verify=HTTP_VERIFY,
    )
    if not client.client_id:
        raise ValidationError("GITHUB_CLIENT_ID must be set")

    clock = now_ms or (lambda: int(time.time() * 1000))

    app = FastAPI(title="gh-dir-diff OAuth", docs_url=None, redoc_url=None, openapi_url=None)

    @app.exception_handler(StarletteHTTPException)
    async def _plain_http_error(_request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
        if exc.status_code == 404:
            return PlainTextResponse("Not found", status_code=404)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    @app.middleware("http")
    async def preflight(request: Request, call_next):
        # Answer CORS preflight on every path; routes only serve GET.
        if request.method == "OPTIONS":
            return Response(
                status_code=200,
                headers={
                    "Access-Control-Allow-Origin": frontend,
                    "Access-Control-Allow-Methods": "GET",
                },
            )
        return await call_next(request)

    @app.get("/", response_class=PlainTextResponse)
    async def index() -> str:
        return "Diff Viewer OAuth Worker. Use /login to authenticate."

    @app.get("/login")
    async def login(request: Request) -> Response:
        state = new_state(clock())
        redirect_uri = f"{str(request.base_url).rstrip('/')}/callback"

        response = RedirectResponse(
            client.authorize_url(redirect_uri=redirect_uri, state=state),
            status_code=302,
        )
        _set_state_cookie(response, sign_state(state, secret), max_age=STATE_TTL_MS // 1000)
        log.info("Issued OAuth state, redirecting to GitHub (redirect_uri=%s)", redirect_uri)
        return response

    @app.get("/callback")
    async def callback(request: Request) -> Response:
        code = request.query_params.get("code")
        state = request.query_params.get("state")
        if not code or not state:
            return PlainTextResponse("Missing code or state parameter", status_code=400)

        signed = request.cookies.get(STATE_COOKIE)
        if not signed:
            return PlainTextResponse("Missing state cookie", status_code=400)

        valid = verify_state(signed, secret, now_ms=clock())
        if valid is None or valid != state:
            log.warning("Rejected OAuth callback with invalid or expired state")
            return PlainTextResponse("Invalid or expired state", status_code=400)

        try:
            token = await client.exchange_code(code)
        except AuthError as e:
            return PlainTextResponse(str(e), status_code=400)
        except ExternalServiceError as e:
            log.error("OAuth code exchange failed: %s", e)
            return PlainTextResponse("Failed to reach GitHub", status_code=502)

        response = RedirectResponse(f"{frontend}/#access_token={token}", status_code=302)
        _set_state_cookie(response, "", max_age=0)
        log.info("OAuth login completed, redirecting to frontend")
        return response

    return app


def main() -> None:
    import uvicorn

    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(create_app(), host=OAUTH_HOST, port=OAUTH_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
