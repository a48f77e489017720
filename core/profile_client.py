"""GraphQL profile query and ingestion of its records.

One POST fetches the user identity, curriculum XP transactions, and project
progress. Records are coerced into typed DTOs at this boundary so the rest of
the code never deals with raw JSON shapes.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from analysis.dto import ProfileData, ProgressRecord, Transaction, UserIdentity
from core.errors import DataError
from core.http import ApiEndpoints, Opener, post

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User data not found"

_PROFILE_QUERY_TEMPLATE = """
query {
    user {
        id
        login
    }
    transaction(
        where: {
            _and: [
                { event: { path: { _eq: "%(event_path)s" } } },
                { type: { _eq: "xp" } }
            ]
        },
        order_by: { createdAt: asc }
    ) {
        amount
        createdAt
        object {
            name
        }
    }
    progress(where: { object: { type: { _eq: "project" } } }) {
        grade
        createdAt
        object {
            name
        }
    }
}
"""


def build_profile_query(event_path: str) -> str:
    """Return the profile query text for an XP event path."""

    return _PROFILE_QUERY_TEMPLATE % {"event_path": json.dumps(event_path)[1:-1]}


PROFILE_QUERY = build_profile_query("/gritlab/school-curriculum")


def fetch_profile(
    token: str,
    *,
    endpoints: ApiEndpoints,
    opener: Opener | None = None,
) -> ProfileData:
    """Fetch and parse the signed-in user's profile records.

    Args:
        token: Bearer token from the TokenStore.
        endpoints: API endpoint configuration.
        opener: Optional replacement for `urllib.request.urlopen`.

    Returns:
        ProfileData with typed user, transaction, and progress records.
        Absent transaction/progress fields yield empty tuples.

    Raises:
        DataError: When the request fails, the response carries GraphQL
            errors, the user record is missing, or a record is malformed.
    """

    body = json.dumps({"query": build_profile_query(endpoints.xp_event_path)}).encode("utf-8")
    try:
        result = post(
            endpoints.graphql_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            body=body,
            timeout=endpoints.timeout_seconds,
            opener=opener,
        )
    except OSError as exc:
        logger.warning("Profile request failed: %s", exc)
        raise DataError("Unable to reach the profile service") from exc

    try:
        payload = json.loads(result.text())
    except json.JSONDecodeError as exc:
        logger.warning("Profile response (HTTP %s) was not JSON.", result.status)
        raise DataError(f"Profile request failed with HTTP {result.status}") from exc

    if not isinstance(payload, Mapping):
        raise DataError("Profile response has an unexpected shape")
    if not result.ok and not payload.get("errors"):
        raise DataError(f"Profile request failed with HTTP {result.status}")
    return parse_profile_payload(payload)


def parse_profile_payload(payload: Mapping[str, Any]) -> ProfileData:
    """Convert a decoded GraphQL response into ProfileData.

    Args:
        payload: Decoded JSON response (`{"data": ..., "errors": ...}`).

    Returns:
        ProfileData built from the response.

    Raises:
        DataError: For GraphQL errors, a missing user, or malformed records.
    """

    errors = payload.get("errors")
    if errors:
        first = errors[0] if isinstance(errors, list) else errors
        message = first.get("message") if isinstance(first, Mapping) else None
        logger.info("GraphQL returned errors: %s", message)
        raise DataError(str(message or "Unknown GraphQL error"))

    data = payload.get("data")
    if not isinstance(data, Mapping):
        data = {}
    users = data.get("user") or []
    if not isinstance(users, list) or not users or not isinstance(users[0], Mapping):
        raise DataError(USER_NOT_FOUND)

    return ProfileData(
        user=_parse_user(users[0]),
        transactions=tuple(_parse_transaction(raw) for raw in data.get("transaction") or []),
        progress=tuple(_parse_progress(raw) for raw in data.get("progress") or []),
    )


def _parse_user(raw: Mapping[str, Any]) -> UserIdentity:
    """Parse the first `user` row."""

    login = raw.get("login")
    if not isinstance(login, str):
        raise DataError("User record is missing a login")
    try:
        user_id = int(raw.get("id") or 0)
    except (TypeError, ValueError) as exc:
        raise DataError("User record has an invalid id") from exc
    return UserIdentity(id=user_id, login=login)


def _parse_transaction(raw: Mapping[str, Any]) -> Transaction:
    """Parse one `transaction` row."""

    if not isinstance(raw, Mapping):
        raise DataError("Transaction record has an unexpected shape")
    amount = raw.get("amount")
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise DataError("Transaction record has an invalid amount")
    return Transaction(
        amount=int(amount),
        created_at=parse_timestamp(raw.get("createdAt"), field="transaction.createdAt"),
        object_name=_object_name(raw),
    )


def _parse_progress(raw: Mapping[str, Any]) -> ProgressRecord:
    """Parse one `progress` row."""

    if not isinstance(raw, Mapping):
        raise DataError("Progress record has an unexpected shape")
    grade = raw.get("grade")
    if grade is not None and (isinstance(grade, bool) or not isinstance(grade, (int, float))):
        raise DataError("Progress record has an invalid grade")
    return ProgressRecord(
        grade=float(grade) if grade is not None else None,
        created_at=parse_timestamp(raw.get("createdAt"), field="progress.createdAt"),
        object_name=_object_name(raw),
    )


def _object_name(raw: Mapping[str, Any]) -> str | None:
    """Return `object.name` when present and non-empty."""

    obj = raw.get("object")
    if not isinstance(obj, Mapping):
        return None
    name = obj.get("name")
    return name if isinstance(name, str) and name else None


def parse_timestamp(value: object, *, field: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime (UTC when naive).

    Args:
        value: Raw timestamp string, e.g. "2024-03-01T10:00:00.123+00:00" or
            with a trailing "Z".
        field: Field name used in the error message.

    Raises:
        DataError: When the value is not a parseable timestamp.
    """

    if not isinstance(value, str) or not value.strip():
        raise DataError(f"Missing timestamp for {field}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise DataError(f"Invalid timestamp for {field}: {value}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
