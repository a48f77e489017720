"""Minimal smoke tests for the project scaffolding."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.unit


def test_analysis_package_exports_summary() -> None:
    """Import the analysis package and verify the public entry point exists."""

    from analysis import summarize_profile

    assert callable(summarize_profile)


def test_django_project_loads() -> None:
    """Import and initialize Django to verify settings are valid."""

    import os

    import django
    from django.conf import settings

    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "xpdash.settings")
    django.setup()
    assert "core.apps.CoreConfig" in settings.INSTALLED_APPS
    assert settings.SESSION_ENGINE == "django.contrib.sessions.backends.signed_cookies"
    assert settings.XPDASH_PASS_RULE in {"positive", "at_least_one"}
