"""Aggregation helpers for profile records.

This module turns fetched transactions and progress records into the
chart-ready summaries shown on the profile page. Every function is pure: it
never mutates its input and returns fresh DTOs.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from enum import Enum
from itertools import accumulate

from .dto import (
    UNKNOWN_PROJECT_NAME,
    PassFailCount,
    ProfileData,
    ProfileSummary,
    ProgressRecord,
    ProjectXPEntry,
    Transaction,
    XPSeriesPoint,
)


class PassRule(str, Enum):
    """Grade threshold that marks a progress record as passed.

    Two rules are in circulation for the same API: `grade > 0` and
    `grade >= 1`. They only disagree for grades strictly between 0 and 1.
    """

    POSITIVE = "positive"
    AT_LEAST_ONE = "at_least_one"

    def passes(self, grade: float | None) -> bool:
        """Return True when `grade` counts as a pass under this rule."""

        if grade is None:
            return False
        if self is PassRule.AT_LEAST_ONE:
            return grade >= 1
        return grade > 0

    @classmethod
    def parse(cls, value: str | PassRule) -> PassRule:
        """Return the rule named by `value`.

        Raises:
            ValueError: When `value` names no known rule.
        """

        if isinstance(value, PassRule):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            choices = ", ".join(rule.value for rule in cls)
            raise ValueError(f"Unknown pass rule {value!r}; expected one of: {choices}.") from exc


DEFAULT_PASS_RULE = PassRule.POSITIVE


def total_xp(transactions: Iterable[Transaction]) -> int:
    """Sum XP across transactions (0 for no transactions)."""

    return sum(tx.amount for tx in transactions)


def xp_series(transactions: Sequence[Transaction]) -> tuple[XPSeriesPoint, ...]:
    """Build the cumulative XP series in transaction order.

    Args:
        transactions: Transactions in the order returned by the API
            (ascending `created_at`).

    Returns:
        One point per transaction whose `total` is the running sum of amounts
        up to and including that transaction.
    """

    running = accumulate(tx.amount for tx in transactions)
    return tuple(
        XPSeriesPoint(date=tx.created_at, total=total)
        for tx, total in zip(transactions, running)
    )


def project_totals(transactions: Iterable[Transaction]) -> tuple[ProjectXPEntry, ...]:
    """Group transactions by project and sum their XP.

    Args:
        transactions: Transactions to group. Missing names are grouped under
            "Unknown".

    Returns:
        Per-project entries ordered by descending total XP. Ties keep the
        order in which each project was first seen.
    """

    totals: dict[str, int] = {}
    last_dates: dict[str, datetime] = {}
    for tx in transactions:
        name = tx.object_name or UNKNOWN_PROJECT_NAME
        totals[name] = totals.get(name, 0) + tx.amount
        previous = last_dates.get(name)
        if previous is None or tx.created_at > previous:
            last_dates[name] = tx.created_at

    entries = [
        ProjectXPEntry(project_name=name, total_xp=total, last_date=last_dates[name])
        for name, total in totals.items()
    ]
    entries.sort(key=lambda entry: entry.total_xp, reverse=True)
    return tuple(entries)


def pass_fail_counts(
    progress: Iterable[ProgressRecord],
    *,
    rule: PassRule = DEFAULT_PASS_RULE,
) -> PassFailCount:
    """Partition progress records into passes and fails.

    Ungraded records (grade None) count as fails, so the two counts always
    add up to the number of records.
    """

    passed = 0
    failed = 0
    for record in progress:
        if rule.passes(record.grade):
            passed += 1
        else:
            failed += 1
    return PassFailCount(pass_count=passed, fail_count=failed)


def completed_project_names(
    progress: Iterable[ProgressRecord],
    *,
    rule: PassRule = DEFAULT_PASS_RULE,
) -> tuple[str, ...]:
    """Return names of passed projects in record order, duplicates included."""

    return tuple(
        record.object_name
        for record in progress
        if rule.passes(record.grade) and record.object_name
    )


def summarize_profile(
    profile: ProfileData,
    *,
    rule: PassRule = DEFAULT_PASS_RULE,
) -> ProfileSummary:
    """Derive every profile page statistic from one fetch.

    Args:
        profile: Records returned by the profile query.
        rule: Pass threshold applied to progress grades.

    Returns:
        ProfileSummary with totals, series, per-project XP and pass/fail data.
    """

    return ProfileSummary(
        login=profile.user.login,
        total_xp=total_xp(profile.transactions),
        xp_series=xp_series(profile.transactions),
        project_totals=project_totals(profile.transactions),
        pass_fail=pass_fail_counts(profile.progress, rule=rule),
        completed_projects=completed_project_names(profile.progress, rule=rule),
    )
