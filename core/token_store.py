"""Token storage for the API bearer credential.

The token is the only persisted state of the dashboard. Web requests keep it
in the visitor's signed session cookie; the management command keeps it in a
plain dict for the lifetime of the process.
"""

from __future__ import annotations

import base64
import binascii
import logging
from collections.abc import MutableMapping
from typing import Any, Final

from django.http import HttpRequest

from core.errors import ValidationError

logger = logging.getLogger(__name__)

TOKEN_KEY: Final[str] = "jwt"


def is_valid_token(token: object, *, strict: bool = False) -> bool:
    """Return True when `token` looks like a JWT.

    The check is structural only: a non-empty string with exactly three
    non-empty dot-separated segments. With `strict=True` every segment must
    also survive a base64url decode/encode round trip. Signatures and expiry
    are never checked.

    Args:
        token: Candidate token (any type; non-strings are invalid).
        strict: Whether to verify each segment's base64url encoding.

    Returns:
        Whether the token is structurally valid.
    """

    if not isinstance(token, str) or not token:
        return False
    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        return False
    if strict:
        return all(_is_base64url(part) for part in parts)
    return True


def _is_base64url(segment: str) -> bool:
    """Return True when `segment` round-trips through base64url unchanged."""

    unpadded = segment.rstrip("=")
    padded = unpadded + "=" * (-len(unpadded) % 4)
    try:
        decoded = base64.urlsafe_b64decode(padded.encode("ascii"))
    except (binascii.Error, UnicodeEncodeError, ValueError):
        return False
    return base64.urlsafe_b64encode(decoded).decode("ascii").rstrip("=") == unpadded


class TokenStore:
    """Read, write, and clear the bearer token in a key-value storage.

    Args:
        storage: Mapping that persists the token (a session or a dict).
        key: Storage key for the token.
        strict: Whether validation also checks base64url segments.
    """

    def __init__(
        self,
        storage: MutableMapping[str, Any],
        *,
        key: str = TOKEN_KEY,
        strict: bool = False,
    ) -> None:
        self._storage = storage
        self._key = key
        self._strict = strict

    @classmethod
    def for_request(cls, request: HttpRequest) -> TokenStore:
        """Return a store backed by the request session."""

        return cls(request.session)

    def save(self, token: str) -> None:
        """Persist `token`, replacing any previous value."""

        self._storage[self._key] = token

    def read(self) -> str | None:
        """Return the stored token, or None when nothing is stored."""

        value = self._storage.get(self._key)
        return value if isinstance(value, str) else None

    def clear(self) -> None:
        """Remove the stored token (no-op when absent)."""

        if self._key in self._storage:
            del self._storage[self._key]
            logger.info("Cleared stored API token.")

    def is_valid(self, token: object) -> bool:
        """Return True when `token` passes this store's structural check."""

        return is_valid_token(token, strict=self._strict)

    def read_valid(self) -> str:
        """Return the stored token after validating it.

        Returns:
            The stored, structurally valid token.

        Raises:
            ValidationError: When no token is stored or it is malformed. A
                malformed token is cleared before raising.
        """

        token = self.read()
        if token is None:
            raise ValidationError("No stored token; please sign in.")
        if not self.is_valid(token):
            self.clear()
            raise ValidationError("Stored token is malformed; please sign in again.")
        return token
