"""ACL services package."""

from .acl_manager import AclManager, PermissionBuilder

__all__ = ["AclManager", "PermissionBuilder"]
