"""ACL and grant-set domain objects."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Set

from .permission import Permission


class ReconciliationMode(str, Enum):
    """How a permission builder reconciles desired grants with the repository."""
    ADD = "add"  # merge into existing authorizations
    SET = "set"  # overwrite authorizations and prune stale children


@dataclass(frozen=True)
class Acl:
    """An ACL resource, and whether it was created by the current lookup."""

    uri: str
    is_new: bool = False

    def __str__(self) -> str:
        return self.uri


@dataclass
class GrantSet:
    """Accumulated roles per permission for one protected resource."""

    read: Set[str] = field(default_factory=set)
    write: Set[str] = field(default_factory=set)

    def add_read(self, roles: Iterable[str]) -> None:
        self.read.update(str(r) for r in roles)

    def add_write(self, roles: Iterable[str]) -> None:
        """Write implies read."""
        roles = [str(r) for r in roles]
        self.write.update(roles)
        self.read.update(roles)

    def resolved(self) -> Dict[Permission, Set[str]]:
        """Roles each authorization should name.

        The Read authorization omits roles already covered by Write.
        """
        return {
            Permission.READ: self.read - self.write,
            Permission.WRITE: set(self.write),
        }

    def all_roles(self) -> Set[str]:
        return self.read | self.write
