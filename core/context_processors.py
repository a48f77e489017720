"""Template context processors for xpdash."""

from __future__ import annotations

from django.http import HttpRequest

from core.token_store import TokenStore


def token_state(request: HttpRequest) -> dict[str, bool]:
    """Expose whether the visitor holds a usable token to all templates.

    Args:
        request: Current request object.

    Returns:
        Context dict with a `signed_in` boolean.
    """

    if not hasattr(request, "session"):
        return {"signed_in": False}
    store = TokenStore.for_request(request)
    return {"signed_in": store.is_valid(store.read())}
