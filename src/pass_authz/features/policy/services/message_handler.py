"""Routing of repository change events to the policy engine.

Transport is not handled here: whatever consumes the message queue hands the
message body to ``AuthzMessageHandler.handle_json``.
"""

import json
import logging
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

from ....core.exceptions import MessageFormatError
from ..entities.submission import SUBMISSION_EVENT_TYPE, SUBMISSION_TYPE
from .policy_engine import PolicyEngine

logger = logging.getLogger(__name__)


EVENT_NS = "http://fedora.info/definitions/v4/event#"
CREATION = EVENT_NS + "ResourceCreation"
DELETION = EVENT_NS + "ResourceDeletion"
MODIFICATION = EVENT_NS + "ResourceModification"


class RepositoryAction(str, Enum):
    """What happened to a resource."""
    CREATED = "created"
    MODIFIED = "modified"
    DELETED = "deleted"


def _as_list(value) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


class RepositoryEvent(BaseModel):
    """A change notification about one repository resource."""

    resource_uri: str
    resource_types: List[str] = Field(default_factory=list)
    action: Optional[RepositoryAction] = None

    @classmethod
    def from_json(cls, text: str) -> "RepositoryEvent":
        """Parse a repository event message.

        A modification may also carry creation or deletion; those take
        precedence.

        Raises:
            MessageFormatError: if the message is not a usable event
        """
        try:
            root = json.loads(text)
        except json.JSONDecodeError as e:
            raise MessageFormatError(f"Event message is not JSON: {e}") from e

        if not isinstance(root, dict) or not root.get("id"):
            raise MessageFormatError("Event message has no resource id", details={"message": text})

        generated_by = root.get("wasGeneratedBy") or {}
        if not isinstance(generated_by, dict):
            raise MessageFormatError("Event message has a malformed wasGeneratedBy", details={"message": text})
        actions = _as_list(generated_by.get("type"))

        action = None
        if CREATION in actions:
            action = RepositoryAction.CREATED
        elif DELETION in actions:
            action = RepositoryAction.DELETED
        elif MODIFICATION in actions:
            action = RepositoryAction.MODIFIED

        try:
            return cls(
                resource_uri=root["id"],
                resource_types=_as_list(root.get("type")),
                action=action
            )
        except ValidationError as e:
            raise MessageFormatError(
                f"Event message is not a valid event: {e}",
                details={"message": text}
            ) from e

    def __str__(self) -> str:
        return f"{self.action.value if self.action else None} {self.resource_uri}"


class AuthzMessageHandler:
    """Applies the authorization policy to resources named by repository events."""

    def __init__(self, engine: PolicyEngine):
        self.engine = engine

    async def handle_json(self, text: str) -> Optional[str]:
        return await self.handle(RepositoryEvent.from_json(text))

    async def handle(self, event: RepositoryEvent) -> Optional[str]:
        """Update permissions for the event's resource if the policy covers it.

        Returns:
            URI of the updated ACL, or None if the event was ignored
        """
        if event.action not in (RepositoryAction.CREATED, RepositoryAction.MODIFIED):
            logger.debug(f"Ignoring irrelevant action {event.action}")
            return None

        if SUBMISSION_TYPE in event.resource_types:
            name, operation = "update_submission", self.engine.update_submission
        elif SUBMISSION_EVENT_TYPE in event.resource_types:
            name, operation = "update_submission_event", self.engine.update_submission_event
        else:
            logger.debug(f"Ignoring message with irrelevant types {event.resource_types}")
            return None

        logger.debug(f"Handling {name} message for {event}")
        try:
            return await operation(event.resource_uri)
        except Exception as e:
            logger.error(f"Error in {name} for <{event.resource_uri}>: {e}")
            raise
