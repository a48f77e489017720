"""Regression tests for logout UX and HTTP method correctness."""

from __future__ import annotations

import pytest
from conftest import FakeOpener, graphql_payload
from django.urls import reverse

from core.token_store import TOKEN_KEY

pytestmark = pytest.mark.integration


def test_profile_renders_logout_as_post_form(signed_in_client, patch_api) -> None:
    """Signed-in navigation renders logout as a POST form (not a GET link)."""

    patch_api(graphql=FakeOpener(body=graphql_payload()))

    response = signed_in_client.get(reverse("core:profile"))
    assert response.status_code == 200

    html = response.content.decode("utf-8")
    assert f'action="{reverse("core:logout")}"' in html
    assert 'method="post"' in html
    assert "csrfmiddlewaretoken" in html
    assert f'href="{reverse("core:logout")}"' not in html


def test_logout_post_clears_token(signed_in_client) -> None:
    """POSTing to logout clears the token and redirects to sign-in."""

    response = signed_in_client.post(reverse("core:logout"))
    assert response.status_code == 302
    assert response["Location"] == reverse("core:login")
    assert signed_in_client.session.get(TOKEN_KEY) is None

    after = signed_in_client.get(reverse("core:profile"))
    assert after.status_code == 302
    assert after["Location"] == reverse("core:login")


def test_logout_get_does_not_clear_token(signed_in_client, token) -> None:
    """GET requests to logout are ignored."""

    response = signed_in_client.get(reverse("core:logout"))
    assert response.status_code == 302
    assert signed_in_client.session.get(TOKEN_KEY) == token
