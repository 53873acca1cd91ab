"""Policy feature for pass-authz.

Feature-First architecture for lifecycle-driven access policy:
- entities/: Submission models and the resource reader protocol
- repositories/: JSON-LD resource client
- services/: Policy engine and repository event handling
"""

from .entities import (
    Submission,
    SubmissionEvent,
    SubmissionStatus,
    ResourceReader,
    SUBMISSION_TYPE,
    SUBMISSION_EVENT_TYPE,
)

from .repositories import PassRepositoryClient

from .services import PolicyEngine, AuthzMessageHandler, RepositoryAction, RepositoryEvent

__all__ = [
    # Entities
    "Submission",
    "SubmissionEvent",
    "SubmissionStatus",
    "ResourceReader",
    "SUBMISSION_TYPE",
    "SUBMISSION_EVENT_TYPE",
    
    # Repositories
    "PassRepositoryClient",
    
    # Services
    "PolicyEngine",
    "AuthzMessageHandler",
    "RepositoryAction",
    "RepositoryEvent",
]
