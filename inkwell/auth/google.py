"""Google sign-in for Inkwell.

Flow:
1. GET /auth/google
   Generates state and a PKCE verifier, stores them in a signed, short-lived
   HttpOnly cookie and redirects to Google's consent screen.
2. GET /auth/google/callback
   Checks the state against the cookie, exchanges the code for an access
   token and fetches the profile (email, name).
3. Resolved
   Finds or creates the local user, issues a JWT and redirects to
   <frontend>/auth/google/callback?token=<jwt>.

Any failure redirects to <frontend>/auth/error. Provider error details are
logged and never passed to the client. No server-side session is kept.
"""

import base64
import hashlib
import json
import logging
import secrets
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from flask import Blueprint, Response, redirect, request
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from ..config import settings
from ..db import get_db
from ..exceptions import InkwellError, OAuthError
from . import service, token

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
GOOGLE_TIMEOUT_SECONDS = 15

STATE_COOKIE_NAME = "oauth_state"
STATE_COOKIE_PATH = "/auth/google/callback"

google_bp = Blueprint("google", __name__)


# ============================================================================
# State cookie
# ============================================================================


def _state_serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(secret_key=settings.session_secret_key, salt="inkwell-google-oauth")


def _pkce_pair() -> tuple[str, str]:
    verifier = secrets.token_urlsafe(64)
    digest = hashlib.sha256(verifier.encode("utf-8")).digest()
    challenge = base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
    return verifier, challenge


def _set_state_cookie(resp: Response, payload: dict[str, str]) -> None:
    resp.set_cookie(
        STATE_COOKIE_NAME,
        _state_serializer().dumps(payload),
        max_age=settings.oauth_state_max_age,
        httponly=True,
        secure=settings.production,
        samesite="Lax",
        path=STATE_COOKIE_PATH,
    )


def _load_state_cookie() -> dict[str, str]:
    """
    Read and verify the signed state cookie.

    Raises:
        OAuthError: If the cookie is missing, tampered with or expired
    """
    raw = request.cookies.get(STATE_COOKIE_NAME)
    if not raw:
        raise OAuthError("Missing OAuth state cookie")
    try:
        payload = _state_serializer().loads(raw, max_age=settings.oauth_state_max_age)
    except SignatureExpired:
        raise OAuthError("OAuth state cookie expired")
    except BadSignature:
        raise OAuthError("OAuth state cookie has a bad signature")
    if not isinstance(payload, dict):
        raise OAuthError("OAuth state cookie is malformed")
    return payload


def _clear_state_cookie(resp: Response) -> None:
    resp.delete_cookie(
        STATE_COOKIE_NAME,
        path=STATE_COOKIE_PATH,
        secure=settings.production,
        samesite="Lax",
    )


# ============================================================================
# Google HTTP calls
# ============================================================================


def _google_fetch_json(
    url: str,
    *,
    data: dict[str, str] | None = None,
    access_token: str | None = None
) -> dict:
    """
    Call a Google endpoint and decode its JSON response.

    POSTs form-encoded data when given, otherwise GETs. An access token is
    sent as a bearer Authorization header.

    Raises:
        OAuthError: On HTTP, network or decoding failures
    """
    headers = {"Accept": "application/json"}
    body = None
    if data is not None:
        body = urlencode(data).encode("utf-8")
        headers["Content-Type"] = "application/x-www-form-urlencoded"
    if access_token is not None:
        headers["Authorization"] = f"Bearer {access_token}"

    req = Request(url, data=body, headers=headers, method="POST" if data is not None else "GET")
    try:
        with urlopen(req, timeout=GOOGLE_TIMEOUT_SECONDS) as resp:
            raw = resp.read().decode("utf-8")
    except HTTPError as e:
        detail = e.read().decode("utf-8", errors="replace")
        raise OAuthError(f"Google returned HTTP {e.code}", {"body": detail})
    except URLError as e:
        raise OAuthError("Network error talking to Google", {"reason": str(e.reason)})

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError:
        raise OAuthError("Google returned invalid JSON")
    if not isinstance(payload, dict):
        raise OAuthError("Google returned an unexpected payload")
    return payload


def _exchange_code(code: str, code_verifier: str) -> str:
    """Exchange an authorization code for an access token."""
    payload = _google_fetch_json(
        GOOGLE_TOKEN_URL,
        data={
            "code": code,
            "client_id": settings.google_client_id,
            "client_secret": settings.google_client_secret,
            "redirect_uri": settings.google_callback_url,
            "grant_type": "authorization_code",
            "code_verifier": code_verifier,
        },
    )
    access_token = payload.get("access_token")
    if not isinstance(access_token, str) or not access_token:
        raise OAuthError("Token response has no access_token")
    return access_token


def _fetch_profile(access_token: str) -> tuple[str, str]:
    """Fetch (email, display name) for the signed-in Google account."""
    profile = _google_fetch_json(GOOGLE_USERINFO_URL, access_token=access_token)
    email = profile.get("email")
    if not isinstance(email, str) or not email:
        raise OAuthError("Google profile has no email")
    if profile.get("email_verified") is False:
        raise OAuthError("Google email is not verified", {"email": email})
    name = profile.get("name")
    return email, name if isinstance(name, str) else ""


# ============================================================================
# Redirects
# ============================================================================


def _frontend_redirect(path: str, params: dict[str, str] | None = None) -> Response:
    url = f"{settings.frontend_origin.rstrip('/')}{path}"
    if params:
        url = f"{url}?{urlencode(params)}"
    resp = redirect(url)
    resp.headers["Cache-Control"] = "no-store"
    _clear_state_cookie(resp)
    return resp


def _error_redirect() -> Response:
    return _frontend_redirect("/auth/error")


def _oauth_configured() -> bool:
    return bool(
        settings.google_client_id
        and settings.google_client_secret
        and settings.google_callback_url
    )


# ============================================================================
# Endpoints
# ============================================================================


@google_bp.route("/auth/google", methods=["GET"])
def google_start():
    """Redirect the browser to Google's consent screen."""
    if not _oauth_configured():
        logger.error("Google sign-in requested but GOOGLE_* settings are missing")
        return _error_redirect()

    state = secrets.token_urlsafe(32)
    code_verifier, code_challenge = _pkce_pair()

    params = {
        "client_id": settings.google_client_id,
        "redirect_uri": settings.google_callback_url,
        "response_type": "code",
        "scope": "openid email profile",
        "state": state,
        "access_type": "offline",
        "prompt": "consent",
        "code_challenge": code_challenge,
        "code_challenge_method": "S256",
    }

    logger.info("Initiating Google OAuth")
    resp = redirect(f"{GOOGLE_AUTH_URL}?{urlencode(params)}")
    resp.headers["Cache-Control"] = "no-store"
    _set_state_cookie(resp, {"state": state, "code_verifier": code_verifier})
    return resp


@google_bp.route("/auth/google/callback", methods=["GET"])
def google_callback():
    """
    Complete Google sign-in and hand a JWT to the frontend.

    Success: 302 to <frontend>/auth/google/callback?token=<jwt>
    Failure: 302 to <frontend>/auth/error
    """
    try:
        if not _oauth_configured():
            raise OAuthError("Google sign-in is not configured")

        error = request.args.get("error")
        if error:
            raise OAuthError("Google returned an error", {"error": error})

        state = request.args.get("state", "")
        code = request.args.get("code", "")
        if not state or not code:
            raise OAuthError("Callback is missing state or code")

        cookie = _load_state_cookie()
        expected_state = cookie.get("state")
        if not isinstance(expected_state, str) or not secrets.compare_digest(expected_state, state):
            raise OAuthError("OAuth state mismatch")

        code_verifier = cookie.get("code_verifier")
        if not isinstance(code_verifier, str) or not code_verifier:
            raise OAuthError("OAuth state cookie has no code verifier")

        access_token = _exchange_code(code, code_verifier)
        email, name = _fetch_profile(access_token)

        user = service.find_or_create_google_user(get_db(), email, name)
    except InkwellError as e:
        logger.warning(f"Google sign-in failed: {e.message} {e.details or ''}")
        return _error_redirect()
    except Exception:
        logger.exception("Unexpected error during Google sign-in")
        return _error_redirect()

    logger.info(f"Google sign-in resolved for user {user.email}")
    return _frontend_redirect(
        "/auth/google/callback",
        {"token": token.generate_access_token(user)},
    )
