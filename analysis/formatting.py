"""Display formatting for profile summary values."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

NO_COMPLETED_PROJECTS = "No completed projects yet."


def format_xp(value: int) -> str:
    """Format an XP amount with thousands separators, e.g. "12,345 XP"."""

    return f"{value:,} XP"


def format_count(value: int) -> str:
    """Format an integer with thousands separators."""

    return f"{value:,}"


def format_date(value: datetime) -> str:
    """Format a timestamp as an ISO calendar date."""

    return value.date().isoformat()


def completed_projects_text(names: Sequence[str]) -> str:
    """Render the completed-projects sentence for the skills panel."""

    if not names:
        return NO_COMPLETED_PROJECTS
    return "Completed projects: " + ", ".join(names)
