"""
Application-level exceptions.

Raised only for caller mistakes at construction time (invalid weights,
ambiguous responses, inconsistent snapshots, comparing different subjects).
Malformed upstream analysis data never raises; it degrades to empty values.
"""

from __future__ import annotations


class VendorRiskError(Exception):
    """Base class for engine errors."""

    code = "vendorrisk_error"


class InvalidQuestionError(VendorRiskError, ValueError):
    """Question definition violates the catalog rules (e.g. weight outside 1-10)."""

    code = "invalid_question"


class InvalidResponseError(VendorRiskError, ValueError):
    """Response carries more than one of text, choice and file reference."""

    code = "invalid_response"


class SnapshotInvariantError(VendorRiskError, ValueError):
    """Snapshot tier does not match the tier derived from its score."""

    code = "snapshot_invariant"


class SubjectMismatchError(VendorRiskError, ValueError):
    """Two snapshots from different subjects were passed to the differ."""

    code = "subject_mismatch"
