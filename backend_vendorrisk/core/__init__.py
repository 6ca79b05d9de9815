# Shared primitives: application exceptions.

from backend_vendorrisk.core.exceptions import (
    InvalidQuestionError,
    InvalidResponseError,
    SnapshotInvariantError,
    SubjectMismatchError,
    VendorRiskError,
)

__all__ = [
    "InvalidQuestionError",
    "InvalidResponseError",
    "SnapshotInvariantError",
    "SubjectMismatchError",
    "VendorRiskError",
]
