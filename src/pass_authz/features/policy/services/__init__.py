"""Policy services package."""

from .policy_engine import PolicyEngine
from .message_handler import AuthzMessageHandler, RepositoryAction, RepositoryEvent

__all__ = [
    "PolicyEngine",
    "AuthzMessageHandler",
    "RepositoryAction",
    "RepositoryEvent",
]
