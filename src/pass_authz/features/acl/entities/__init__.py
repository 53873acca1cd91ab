"""ACL entities package.

Permission model, vocabularies, ACL domain objects and collaborator protocols.
"""

from .permission import (
    Permission,
    authorization_address,
    canonical_addresses,
    tombstone_address,
)
from .acl import Acl, GrantSet, ReconciliationMode
from .protocols import ResourceCrawler, ChildLister, Visitor, IgnoreRule, DepthRule
from . import vocabulary

__all__ = [
    # Permission model
    "Permission",
    "authorization_address",
    "canonical_addresses",
    "tombstone_address",
    
    # Domain objects
    "Acl",
    "GrantSet",
    "ReconciliationMode",
    
    # Protocols
    "ResourceCrawler",
    "ChildLister",
    "Visitor",
    "IgnoreRule",
    "DepthRule",
    
    "vocabulary",
]
