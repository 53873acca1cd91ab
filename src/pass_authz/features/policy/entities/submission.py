"""Submission domain models read from the repository.

Models accept the compact JSON-LD the repository serves, so fields are
aliased to their JSON-LD names (``@id``, ``submissionStatus``...).
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


PASS_NS = "http://oapass.org/ns/pass#"
SUBMISSION_TYPE = PASS_NS + "Submission"
SUBMISSION_EVENT_TYPE = PASS_NS + "SubmissionEvent"


class SubmissionStatus(str, Enum):
    """Lifecycle status of a submission."""
    DRAFT = "draft"
    MANUSCRIPT_REQUIRED = "manuscript-required"
    APPROVAL_REQUESTED = "approval-requested"
    CHANGES_REQUESTED = "changes-requested"
    CANCELLED = "cancelled"
    SUBMITTED = "submitted"
    NEEDS_ATTENTION = "needs-attention"
    COMPLETE = "complete"

    @property
    def is_submitted(self) -> bool:
        """Whether the submission has left the hands of its preparers."""
        return self in (
            SubmissionStatus.SUBMITTED,
            SubmissionStatus.NEEDS_ATTENTION,
            SubmissionStatus.COMPLETE,
        )


class PassEntity(BaseModel):
    """Base model for repository entities."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    id: Optional[str] = Field(None, alias="@id", description="Resource URI")
    entity_type: Optional[str] = Field(None, alias="@type", description="Entity type")


class Submission(PassEntity):
    """A submission whose writability depends on its lifecycle state."""

    submitted: Optional[bool] = Field(None, description="Legacy submitted flag")
    submission_status: Optional[SubmissionStatus] = Field(None, alias="submissionStatus")
    submitter: Optional[str] = Field(None, description="URI of the submitting user")
    preparers: List[str] = Field(default_factory=list, description="URIs of preparing users")

    @field_validator("preparers", mode="before")
    @classmethod
    def single_preparer_as_list(cls, v):
        # Compact JSON-LD does not wrap single values in an array
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @property
    def is_submitted(self) -> bool:
        """Submitted according to status if present, else the legacy flag."""
        if self.submission_status is not None:
            return self.submission_status.is_submitted
        return bool(self.submitted)

    @property
    def is_cancelled(self) -> bool:
        return self.submission_status is SubmissionStatus.CANCELLED

    @property
    def is_frozen(self) -> bool:
        """A frozen submission may only be written by the backend."""
        return self.is_cancelled or self.is_submitted


class SubmissionEvent(PassEntity):
    """An immutable record of something that happened to a submission."""

    submission: Optional[str] = None
    event_type: Optional[str] = Field(None, alias="eventType")
    performed_by: Optional[str] = Field(None, alias="performedBy")
    performer_role: Optional[str] = Field(None, alias="performerRole")
    comment: Optional[str] = None
