"""Authorization policy for submissions and submission events.

Desired grants are derived from the current state of the business object on
every update; nothing about previous grants is remembered.

Submission writability:
    OPEN    not cancelled and not submitted; submitter and preparers may write
    FROZEN  cancelled or submitted; only the backend may write
"""

import logging
from typing import Optional, Set

from ...acl.services.acl_manager import AclManager
from ..entities.protocols import ResourceReader
from ..entities.submission import Submission

logger = logging.getLogger(__name__)


def _roles(*roles: Optional[str]) -> Set[str]:
    return {str(r) for r in roles if r}


class PolicyEngine:
    """Computes and applies the permissions of PASS resources.

    Configured with three foundational roles, any of which may be unset;
    an unset role simply receives no grants.
    """

    def __init__(
        self,
        client: ResourceReader,
        acls: AclManager,
        backend_role: Optional[str] = None,
        admin_role: Optional[str] = None,
        submitter_role: Optional[str] = None
    ):
        self.client = client
        self.acls = acls
        self.backend_role = backend_role
        self.admin_role = admin_role
        self.submitter_role = submitter_role

    def foundational_roles(self) -> Set[str]:
        """Roles that may always read."""
        return _roles(self.backend_role, self.admin_role, self.submitter_role)

    async def update_submission(self, uri: str) -> str:
        """Resynchronize the permissions of a submission.

        The backend can always write. The submitter and preparers can write
        only while the submission is open.

        Returns:
            URI of the submission's ACL
        """
        submission = await self.client.read_resource(uri, Submission)

        writers = _roles(self.backend_role)
        if submission.is_frozen:
            logger.debug(f"Submission <{uri}> is frozen, only the backend may write")
        else:
            writers |= _roles(submission.submitter, *submission.preparers)

        return await (
            self.acls.set_permissions(uri)
            .grant_read(self.foundational_roles())
            .grant_write(writers)
            .perform()
        )

    async def update_submission_event(self, uri: str) -> str:
        """Resynchronize the permissions of a submission event.

        Events are immutable, so nobody is granted write.
        """
        return await (
            self.acls.set_permissions(uri)
            .grant_read(self.foundational_roles())
            .perform()
        )
