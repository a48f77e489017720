"""Service-layer functions for the core app.

Services in `core` coordinate the external API clients with the pure
analysis and charting modules, so views and management commands share one
code path.
"""

from __future__ import annotations

from typing import Any

from django.conf import settings

from analysis.aggregations import PassRule, summarize_profile
from analysis.dto import ProfileSummary
from analysis.formatting import completed_projects_text, format_xp
from core.charting.render import render_profile_charts
from core.http import ApiEndpoints, Opener
from core.profile_client import fetch_profile


def configured_pass_rule() -> PassRule:
    """Return the pass rule selected by `XPDASH_PASS_RULE`."""

    return PassRule.parse(settings.XPDASH_PASS_RULE)


def load_profile_summary(
    token: str,
    *,
    endpoints: ApiEndpoints | None = None,
    rule: PassRule | None = None,
    opener: Opener | None = None,
) -> ProfileSummary:
    """Fetch the profile for `token` and aggregate it.

    Args:
        token: Validated bearer token.
        endpoints: API endpoints; defaults to the Django settings.
        rule: Pass rule; defaults to the configured rule.
        opener: Optional replacement for `urllib.request.urlopen`.

    Returns:
        ProfileSummary for the signed-in user.

    Raises:
        DataError: Propagated from the profile client.
    """

    profile = fetch_profile(
        token,
        endpoints=endpoints or ApiEndpoints.from_settings(),
        opener=opener,
    )
    return summarize_profile(profile, rule=rule or configured_pass_rule())


def profile_display(summary: ProfileSummary) -> dict[str, Any]:
    """Return the text and chart payloads shown on the profile page.

    Keys match the DOM element ids they fill.
    """

    return {
        "username": summary.login,
        "xp": format_xp(summary.total_xp),
        "skills": completed_projects_text(summary.completed_projects),
        "charts": render_profile_charts(summary),
    }
