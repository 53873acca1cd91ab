"""pass-authz - WebAC permission reconciliation for repository resources.

This library computes and applies the access-control state of protected
resources in a Fedora repository: an additive or resynchronizing permission
builder, the protocol driver and ACL reader beneath it, and the policy that
derives desired grants from the lifecycle of submissions.
"""

from .__version__ import __version__

from .config import (
    AuthzSettings,
    get_settings,
    create_repository_client,
    setup_logging,
)

from .core.exceptions import (
    PassAuthzError,
    ConfigurationError,
    BuilderAlreadyPerformedError,
    MessageFormatError,
    RepositoryError,
    RepositoryProtocolError,
    RepositoryConnectionError,
    AclConsistencyError,
    MultipleAclsError,
    MultipleAuthorizationsError,
    InvalidIriError,
)

from .features.acl import (
    Permission,
    authorization_address,
    Acl,
    ReconciliationMode,
    AclDriver,
    AclReader,
    RepositoryCrawler,
    AclManager,
    PermissionBuilder,
)

from .features.policy import (
    Submission,
    SubmissionEvent,
    SubmissionStatus,
    PassRepositoryClient,
    PolicyEngine,
    AuthzMessageHandler,
    RepositoryEvent,
)

from .features.cache import ExpiringCache

from .factories import (
    create_acl_manager,
    create_policy_engine,
    create_message_handler,
    create_role_cache,
)

__all__ = [
    "__version__",
    
    # Configuration
    "AuthzSettings",
    "get_settings",
    "create_repository_client",
    "setup_logging",
    
    # Exceptions
    "PassAuthzError",
    "ConfigurationError",
    "BuilderAlreadyPerformedError",
    "MessageFormatError",
    "RepositoryError",
    "RepositoryProtocolError",
    "RepositoryConnectionError",
    "AclConsistencyError",
    "MultipleAclsError",
    "MultipleAuthorizationsError",
    "InvalidIriError",
    
    # ACL
    "Permission",
    "authorization_address",
    "Acl",
    "ReconciliationMode",
    "AclDriver",
    "AclReader",
    "RepositoryCrawler",
    "AclManager",
    "PermissionBuilder",
    
    # Policy
    "Submission",
    "SubmissionEvent",
    "SubmissionStatus",
    "PassRepositoryClient",
    "PolicyEngine",
    "AuthzMessageHandler",
    "RepositoryEvent",
    
    # Cache
    "ExpiringCache",
    
    # Factories
    "create_acl_manager",
    "create_policy_engine",
    "create_message_handler",
    "create_role_cache",
]
