"""Policy entities package."""

from .submission import (
    PASS_NS,
    SUBMISSION_TYPE,
    SUBMISSION_EVENT_TYPE,
    SubmissionStatus,
    PassEntity,
    Submission,
    SubmissionEvent,
)
from .protocols import ResourceReader

__all__ = [
    "PASS_NS",
    "SUBMISSION_TYPE",
    "SUBMISSION_EVENT_TYPE",
    "SubmissionStatus",
    "PassEntity",
    "Submission",
    "SubmissionEvent",
    "ResourceReader",
]
