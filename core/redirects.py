"""Safe redirect helpers.

Redirecting to a user-supplied `next` value is security-sensitive. This
module validates redirect targets with Django's
`url_has_allowed_host_and_scheme` before following them.
"""

from __future__ import annotations

from django.conf import settings
from django.core.exceptions import DisallowedHost
from django.http import HttpRequest, HttpResponseRedirect
from django.shortcuts import redirect
from django.utils.http import url_has_allowed_host_and_scheme


def is_safe_redirect_target(request: HttpRequest, url: str | None) -> bool:
    """Return True when `url` stays on an allowed host and scheme."""

    value = (url or "").strip()
    if not value:
        return False

    allowed_hosts = set(settings.ALLOWED_HOSTS)
    try:
        allowed_hosts.add(request.get_host())
    except DisallowedHost:
        pass
    return url_has_allowed_host_and_scheme(
        url=value,
        allowed_hosts=allowed_hosts,
        require_https=request.is_secure(),
    )


def safe_next_redirect(request: HttpRequest, *, fallback: str) -> HttpResponseRedirect:
    """Redirect to the request's `next` parameter when safe, else to `fallback`.

    Args:
        request: Incoming request; `next` is read from POST, then GET.
        fallback: Safe default URL.

    Returns:
        An HttpResponseRedirect to a safe URL.
    """

    for candidate in (request.POST.get("next"), request.GET.get("next")):
        if is_safe_redirect_target(request, candidate):
            return redirect(candidate.strip())
    return redirect(fallback)
