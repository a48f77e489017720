"""Views for the sign-in page and the profile dashboard."""

from __future__ import annotations

import logging
from typing import Any

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.urls import reverse

from core.auth_client import sign_in
from core.errors import AuthError, DataError, ValidationError
from core.forms import LoginForm
from core.http import ApiEndpoints
from core.redirects import safe_next_redirect
from core.services import load_profile_summary, profile_display
from core.token_store import TokenStore

logger = logging.getLogger(__name__)


def login_view(request: HttpRequest) -> HttpResponse:
    """Render the sign-in form and exchange credentials for a token.

    Visitors already holding a structurally valid token are sent straight to
    the profile page.
    """

    store = TokenStore.for_request(request)
    next_url = request.POST.get("next") or request.GET.get("next", "")
    error: str | None = None

    if request.method == "POST":
        form = LoginForm(request.POST)
        if form.is_valid():
            username, password = form.credentials
            try:
                sign_in(
                    username,
                    password,
                    store=store,
                    endpoints=ApiEndpoints.from_settings(),
                )
            except AuthError as exc:
                error = exc.message
            else:
                return safe_next_redirect(request, fallback=reverse("core:profile"))
        else:
            error = form.first_error()
    else:
        if store.is_valid(store.read()):
            return redirect("core:profile")
        form = LoginForm()

    return render(
        request,
        "core/login.html",
        {"form": form, "error": error, "next": next_url},
    )


def logout_view(request: HttpRequest) -> HttpResponse:
    """Clear the stored token and return to the sign-in page."""

    if request.method != "POST":
        return redirect("core:profile")

    TokenStore.for_request(request).clear()
    return redirect("core:login")


def profile(request: HttpRequest) -> HttpResponse:
    """Render the profile dashboard for the stored token.

    A missing or malformed token redirects to the sign-in page. Data errors
    are shown in `#error`; when they concern the token, it is cleared and the
    page returns to the sign-in page after a short delay.
    """

    store = TokenStore.for_request(request)
    try:
        token = store.read_valid()
    except ValidationError as exc:
        logger.info("Redirecting to sign-in: %s", exc.message)
        return redirect("core:login")

    context: dict[str, Any] = {
        "error": None,
        "redirect_to_login": False,
        "redirect_delay_seconds": settings.XPDASH_LOGIN_REDIRECT_DELAY_MS // 1000,
        "username": "",
        "xp": "",
        "skills": "",
        "charts": {},
    }
    try:
        summary = load_profile_summary(token)
    except DataError as exc:
        logger.warning("Profile fetch failed: %s", exc.message)
        context["error"] = exc.message
        if exc.mentions_credentials:
            store.clear()
            context["redirect_to_login"] = True
        return render(request, "core/index.html", context)

    context.update(profile_display(summary))
    return render(request, "core/index.html", context)


def profile_api(request: HttpRequest) -> JsonResponse:
    """Return profile text and chart payloads as JSON for in-page refreshes."""

    store = TokenStore.for_request(request)
    try:
        token = store.read_valid()
    except ValidationError as exc:
        return JsonResponse(
            {"error": exc.message, "login_url": reverse("core:login")},
            status=401,
        )

    try:
        summary = load_profile_summary(token)
    except DataError as exc:
        logger.warning("Profile refresh failed: %s", exc.message)
        if exc.mentions_credentials:
            store.clear()
            return JsonResponse(
                {"error": exc.message, "login_url": reverse("core:login")},
                status=401,
            )
        return JsonResponse({"error": exc.message}, status=502)

    return JsonResponse(profile_display(summary))
