"""Repository-specific exceptions for pass-authz.

Protocol errors are raised for any response outside the expected success
range. Consistency errors are raised when repository state violates an
invariant the ACL layer relies on; they are never auto-repaired.
"""

from typing import Iterable, Optional

from .base import PassAuthzError


class RepositoryError(PassAuthzError):
    """Base class for repository errors."""
    pass


class RepositoryProtocolError(RepositoryError):
    """Raised when the repository answers with a status code above 299."""
    
    def __init__(
        self,
        message: str,
        status_code: int,
        body: str = "",
        uri: Optional[str] = None,
        **kwargs
    ):
        super().__init__(f"{message}; {status_code}: {body}", **kwargs)
        self.status_code = status_code
        self.body = body
        self.uri = uri
        self.details.update({"status_code": status_code, "body": body})
        if uri:
            self.details["uri"] = uri


class RepositoryConnectionError(RepositoryError):
    """Raised when the repository cannot be reached."""
    pass


class AclConsistencyError(PassAuthzError):
    """Base class for ACL state that violates a consistency invariant."""
    pass


class MultipleAclsError(AclConsistencyError):
    """Raised when a resource links to more than one ACL."""
    
    def __init__(self, resource: str, acls: Iterable[str]):
        acls = sorted(acls)
        super().__init__(
            f"More than one acl for resource <{resource}>: {{{','.join(acls)}}}",
            details={"resource": resource, "acls": acls}
        )
        self.resource = resource
        self.acls = acls


class MultipleAuthorizationsError(AclConsistencyError):
    """Raised when more than one authorization names the same role."""
    
    def __init__(self, role: str, authorizations: Iterable[str]):
        authorizations = sorted(authorizations)
        super().__init__(
            f"More than one authz resource for role {role}: {', '.join(authorizations)}",
            details={"role": role, "authorizations": authorizations}
        )
        self.role = role
        self.authorizations = authorizations
