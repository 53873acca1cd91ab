"""ACL feature for pass-authz.

Feature-First architecture for WebAC permission reconciliation:
- entities/: Permission model, ACL domain objects, vocabularies and protocols
- repositories/: Repository protocol driver, ACL reader and container crawler
- services/: ACL manager and the declarative permission builder
"""

from .entities import (
    Permission,
    authorization_address,
    canonical_addresses,
    tombstone_address,
    Acl,
    GrantSet,
    ReconciliationMode,
    ResourceCrawler,
)

from .repositories import AclDriver, AclReader, RepositoryCrawler

from .services import AclManager, PermissionBuilder

__all__ = [
    # Entities
    "Permission",
    "authorization_address",
    "canonical_addresses",
    "tombstone_address",
    "Acl",
    "GrantSet",
    "ReconciliationMode",
    "ResourceCrawler",
    
    # Repositories
    "AclDriver",
    "AclReader",
    "RepositoryCrawler",
    
    # Services
    "AclManager",
    "PermissionBuilder",
]
