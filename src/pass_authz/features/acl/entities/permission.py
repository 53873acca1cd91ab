"""Grantable permissions and deterministic authorization addressing.

Each permission owns one authorization resource inside an ACL, at
``{acl}/{PermissionName}``. Write implies Read, so the Write authorization
always carries both modes.
"""

from enum import Enum
from typing import Optional, Tuple

from rdflib import URIRef

from .vocabulary import ACL, TOMBSTONE


class Permission(str, Enum):
    """Permissions that may be granted on a protected resource."""
    READ = "Read"
    WRITE = "Write"

    @property
    def modes(self) -> Tuple[URIRef, ...]:
        """WebAC modes stated by this permission's authorization."""
        if self is Permission.WRITE:
            return (ACL.Read, ACL.Write)
        return (ACL.Read,)

    @classmethod
    def from_mode(cls, mode: str) -> Optional["Permission"]:
        """Map a WebAC mode URI to a permission.

        ``acl:Append`` folds into Write. Unknown modes map to ``None``.
        """
        mode = str(mode)
        if mode == str(ACL.Read):
            return cls.READ
        if mode in (str(ACL.Write), str(ACL.Append)):
            return cls.WRITE
        return None

    def __str__(self) -> str:
        return self.value


def _join(base: str, segment: str) -> str:
    if base.endswith("/"):
        return base + segment
    return f"{base}/{segment}"


def authorization_address(acl_uri: str, permission: Permission) -> str:
    """Address of the authorization resource for ``permission`` within an ACL."""
    return _join(str(acl_uri), permission.value)


def canonical_addresses(acl_uri: str) -> Tuple[str, ...]:
    """Addresses of every per-permission authorization within an ACL."""
    return tuple(authorization_address(acl_uri, p) for p in Permission)


def tombstone_address(uri: str) -> str:
    """Address of the tombstone left behind when ``uri`` is deleted."""
    return _join(str(uri), TOMBSTONE)
