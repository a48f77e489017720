"""HTTP transport for the external profile API.

Requests go through `urllib.request`. Callers may inject an `opener` with the
same signature as `urllib.request.urlopen` to substitute the network in tests.
"""

from __future__ import annotations

import urllib.error
import urllib.request
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from django.conf import settings

USER_AGENT = "xpdash/1.0 (profile dashboard)"
SIGNIN_PATH = "/api/auth/signin"
GRAPHQL_PATH = "/api/graphql-engine/v1/graphql"

Opener = Callable[..., Any]


@dataclass(frozen=True, slots=True)
class ApiEndpoints:
    """Resolved endpoint URLs and request options for the external API.

    Attributes:
        base_url: Scheme and host of the API, without a trailing slash.
        xp_event_path: Event path used to select curriculum XP transactions.
        timeout_seconds: Socket timeout passed to the opener.
    """

    base_url: str
    xp_event_path: str = "/gritlab/school-curriculum"
    timeout_seconds: int = 30

    @property
    def signin_url(self) -> str:
        """Return the sign-in endpoint URL."""

        return f"{self.base_url}{SIGNIN_PATH}"

    @property
    def graphql_url(self) -> str:
        """Return the GraphQL endpoint URL."""

        return f"{self.base_url}{GRAPHQL_PATH}"

    @classmethod
    def from_settings(cls) -> ApiEndpoints:
        """Build endpoints from the `XPDASH_*` Django settings."""

        return cls(
            base_url=settings.XPDASH_API_BASE_URL.rstrip("/"),
            xp_event_path=settings.XPDASH_XP_EVENT_PATH,
            timeout_seconds=settings.XPDASH_HTTP_TIMEOUT_SECONDS,
        )


@dataclass(frozen=True, slots=True)
class HttpResult:
    """Status code and raw body of a completed HTTP exchange."""

    status: int
    body: bytes
    content_type: str = ""

    @property
    def ok(self) -> bool:
        """Return True for 2xx responses."""

        return 200 <= self.status < 300

    def text(self) -> str:
        """Decode the body using the declared charset (UTF-8 by default)."""

        charset = "utf-8"
        if "charset=" in self.content_type:
            charset = self.content_type.split("charset=", 1)[1].split(";", 1)[0].strip() or "utf-8"
        return self.body.decode(charset, errors="replace")


def post(
    url: str,
    *,
    headers: Mapping[str, str],
    body: bytes | None = None,
    timeout: int = 30,
    opener: Opener | None = None,
) -> HttpResult:
    """Send a POST request and return the response, including error statuses.

    Args:
        url: Target URL.
        headers: Request headers (a User-Agent is added when absent).
        body: Optional request body.
        timeout: Socket timeout in seconds.
        opener: Replacement for `urllib.request.urlopen`.

    Returns:
        HttpResult for any HTTP response, 2xx or not.

    Raises:
        urllib.error.URLError: When no HTTP response was received.
    """

    request_headers = {"User-Agent": USER_AGENT, **headers}
    request = urllib.request.Request(url, data=body, headers=request_headers, method="POST")
    open_url = opener or urllib.request.urlopen
    try:
        with open_url(request, timeout=timeout) as response:
            return HttpResult(
                status=response.status,
                body=response.read(),
                content_type=response.headers.get("Content-Type", ""),
            )
    except urllib.error.HTTPError as exc:
        content_type = exc.headers.get("Content-Type", "") if exc.headers else ""
        return HttpResult(status=exc.code, body=exc.read() or b"", content_type=content_type)
