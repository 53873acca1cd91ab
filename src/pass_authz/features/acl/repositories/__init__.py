"""ACL repositories package.

Repository access for ACLs: the protocol driver, the ACL state reader and
the container crawler.
"""

from .acl_reader import AclReader, parse_graph
from .acl_driver import (
    AclDriver,
    ACL_TEMPLATE,
    authorization_body,
    authorization_patch,
    prefer_representation,
)
from .crawler import RepositoryCrawler, ignoring, one_level

__all__ = [
    "AclReader",
    "parse_graph",
    "AclDriver",
    "ACL_TEMPLATE",
    "authorization_body",
    "authorization_patch",
    "prefer_representation",
    "RepositoryCrawler",
    "ignoring",
    "one_level",
]
