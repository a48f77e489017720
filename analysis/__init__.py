"""Pure analysis package for xpdash.

This package contains deterministic, testable computations that operate on
in-memory profile records and return DTOs. It must not import Django or
perform any network I/O.
"""

from .aggregations import summarize_profile

__all__ = ["summarize_profile"]
