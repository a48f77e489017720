"""DTO types for profile records and the summaries derived from them.

DTOs are plain data containers used to transport API records and analysis
results to the UI. They intentionally avoid any Django dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

UNKNOWN_PROJECT_NAME = "Unknown"


@dataclass(frozen=True, slots=True)
class UserIdentity:
    """The signed-in user as reported by the GraphQL API.

    Attributes:
        id: Numeric user id.
        login: Login name shown on the profile page.
    """

    id: int
    login: str


@dataclass(frozen=True, slots=True)
class Transaction:
    """One XP-awarding event tied to a project or exercise.

    Attributes:
        amount: XP points awarded.
        created_at: When the XP was awarded.
        object_name: Name of the associated project/exercise, when present.
    """

    amount: int
    created_at: datetime
    object_name: str | None = None


@dataclass(frozen=True, slots=True)
class ProgressRecord:
    """One grading outcome for a project.

    Attributes:
        grade: Grade value, or None while the project is ungraded.
        created_at: When the progress record was created.
        object_name: Name of the graded project, when present.
    """

    grade: float | None
    created_at: datetime
    object_name: str | None = None


@dataclass(frozen=True, slots=True)
class ProfileData:
    """Raw profile records returned by a single GraphQL query."""

    user: UserIdentity
    transactions: tuple[Transaction, ...] = ()
    progress: tuple[ProgressRecord, ...] = ()


@dataclass(frozen=True, slots=True)
class XPSeriesPoint:
    """A cumulative XP point for the XP-over-time chart.

    Attributes:
        date: Timestamp of the transaction.
        total: Running XP total up to and including this transaction.
    """

    date: datetime
    total: int


@dataclass(frozen=True, slots=True)
class ProjectXPEntry:
    """Total XP earned for a single project.

    Attributes:
        project_name: Project/exercise name (or "Unknown").
        total_xp: Sum of transaction amounts for the project.
        last_date: Latest transaction timestamp for the project.
    """

    project_name: str
    total_xp: int
    last_date: datetime


@dataclass(frozen=True, slots=True)
class PassFailCount:
    """Partition of progress records into passes and fails."""

    pass_count: int
    fail_count: int

    @property
    def total(self) -> int:
        """Return the number of records that were counted."""

        return self.pass_count + self.fail_count


@dataclass(frozen=True)
class ProfileSummary:
    """Everything the profile page shows, derived from one fetch.

    Attributes:
        login: User login.
        total_xp: Sum of all XP transactions.
        xp_series: Cumulative XP points in transaction order.
        project_totals: Per-project XP totals, highest first.
        pass_fail: Pass/fail partition of progress records.
        completed_projects: Names of passed projects in record order.
    """

    login: str
    total_xp: int
    xp_series: tuple[XPSeriesPoint, ...]
    project_totals: tuple[ProjectXPEntry, ...]
    pass_fail: PassFailCount
    completed_projects: tuple[str, ...]
