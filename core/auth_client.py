"""Sign-in against the external API.

Exchanges a username/password pair for a bearer token with one Basic-auth
request and persists the token through a TokenStore.
"""

from __future__ import annotations

import base64
import logging

from core.errors import AuthError
from core.http import ApiEndpoints, Opener, post
from core.token_store import TokenStore

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"
INVALID_TOKEN = "Invalid token received"
SERVICE_UNAVAILABLE = "Unable to reach the sign-in service"


def basic_credentials(username: str, password: str) -> str:
    """Return the base64 `username:password` value for Basic auth."""

    return base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")


def strip_token_quotes(raw: str) -> str:
    """Trim whitespace and remove one pair of surrounding double quotes."""

    token = raw.strip()
    if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
        token = token[1:-1]
    return token


def sign_in(
    username: str,
    password: str,
    *,
    store: TokenStore,
    endpoints: ApiEndpoints,
    opener: Opener | None = None,
) -> str:
    """Exchange credentials for a token and persist it.

    Args:
        username: Login name or email.
        password: Account password (never logged or stored).
        store: TokenStore receiving the token on success.
        endpoints: API endpoint configuration.
        opener: Optional replacement for `urllib.request.urlopen`.

    Returns:
        The validated token.

    Raises:
        AuthError: On a non-2xx response, a transport failure, or a token that
            fails structural validation. Nothing is stored in these cases.
    """

    logger.info("Signing in user %s.", username)
    try:
        result = post(
            endpoints.signin_url,
            headers={"Authorization": f"Basic {basic_credentials(username, password)}"},
            timeout=endpoints.timeout_seconds,
            opener=opener,
        )
    except OSError as exc:
        logger.warning("Sign-in request failed: %s", exc)
        raise AuthError(SERVICE_UNAVAILABLE) from exc

    if not result.ok:
        logger.info("Sign-in rejected with HTTP %s.", result.status)
        raise AuthError(INVALID_CREDENTIALS)

    token = strip_token_quotes(result.text())
    if not store.is_valid(token):
        logger.warning("Sign-in returned a malformed token.")
        raise AuthError(INVALID_TOKEN)

    store.save(token)
    return token
