"""Error taxonomy for the dashboard.

Clients raise these errors; views and the management command catch them at
the top level and turn them into user-visible messages.
"""

from __future__ import annotations

_CREDENTIAL_MARKERS = ("jwt", "token")


class DashboardError(Exception):
    """Base class for user-facing dashboard failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def mentions_credentials(self) -> bool:
        """Return True when the message refers to the token/JWT concept.

        Such failures mean the stored token is unusable: the page controller
        clears it and sends the user back to the sign-in page.
        """

        lowered = self.message.lower()
        return any(marker in lowered for marker in _CREDENTIAL_MARKERS)


class AuthError(DashboardError):
    """Sign-in failed (bad credentials or a malformed token from the API)."""


class DataError(DashboardError):
    """The GraphQL API returned errors or an unusable payload."""


class ValidationError(DashboardError):
    """A stored token is missing or structurally malformed."""
