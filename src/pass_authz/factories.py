"""Factory functions wiring settings into pass-authz components."""

from typing import Optional

import httpx

from .config.settings import AuthzSettings, get_settings
from .features.acl import AclDriver, AclManager
from .features.cache import ExpiringCache
from .features.policy import AuthzMessageHandler, PassRepositoryClient, PolicyEngine


def create_acl_manager(
    client: httpx.AsyncClient,
    settings: Optional[AuthzSettings] = None
) -> AclManager:
    """Create an ACL manager creating new ACLs under the configured base."""
    settings = settings or get_settings()
    return AclManager(AclDriver(settings.acl_base_url, client))


def create_policy_engine(
    client: httpx.AsyncClient,
    settings: Optional[AuthzSettings] = None
) -> PolicyEngine:
    """Create a policy engine with the configured foundational roles."""
    settings = settings or get_settings()
    return PolicyEngine(
        PassRepositoryClient(client),
        create_acl_manager(client, settings),
        backend_role=settings.backend_role,
        admin_role=settings.admin_role,
        submitter_role=settings.submitter_role
    )


def create_message_handler(
    client: httpx.AsyncClient,
    settings: Optional[AuthzSettings] = None
) -> AuthzMessageHandler:
    return AuthzMessageHandler(create_policy_engine(client, settings))


def create_role_cache(settings: Optional[AuthzSettings] = None) -> ExpiringCache:
    """Create a cache sized for role lookups."""
    settings = settings or get_settings()
    return ExpiringCache(settings.role_cache_capacity, settings.role_cache_ttl_seconds)
