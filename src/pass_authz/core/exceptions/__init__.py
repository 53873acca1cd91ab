"""Exception hierarchy for pass-authz."""

from .base import (
    PassAuthzError,
    ConfigurationError,
    BuilderAlreadyPerformedError,
    MessageFormatError,
    InvalidIriError,
)

from .repository import (
    RepositoryError,
    RepositoryProtocolError,
    RepositoryConnectionError,
    AclConsistencyError,
    MultipleAclsError,
    MultipleAuthorizationsError,
)

__all__ = [
    # Base
    "PassAuthzError",
    "ConfigurationError",
    "BuilderAlreadyPerformedError",
    "MessageFormatError",
    "InvalidIriError",
    
    # Repository
    "RepositoryError",
    "RepositoryProtocolError",
    "RepositoryConnectionError",
    "AclConsistencyError",
    "MultipleAclsError",
    "MultipleAuthorizationsError",
]
