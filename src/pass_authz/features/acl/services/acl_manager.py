"""ACL manager and declarative permission builder.

Usage:
    manager = AclManager(AclDriver(acl_base, client))

    # Merge grants into whatever the ACL already holds
    await manager.add_permissions(resource).grant_read([role]).perform()

    # Declare the complete grant set, pruning anything else
    await (
        manager.set_permissions(resource)
        .grant_read(readers)
        .grant_write(writers)
        .perform()
    )
"""

import asyncio
import logging
from typing import Iterable, Optional, Set
from weakref import WeakValueDictionary

from ....core.exceptions import BuilderAlreadyPerformedError
from ..entities.acl import Acl, GrantSet, ReconciliationMode
from ..entities.permission import Permission, authorization_address, canonical_addresses
from ..entities.protocols import ResourceCrawler
from ..entities.vocabulary import require_iri
from ..repositories.acl_driver import AclDriver, authorization_body, authorization_patch
from ..repositories.acl_reader import AclReader
from ..repositories.crawler import RepositoryCrawler, ignoring, one_level

logger = logging.getLogger(__name__)


class PermissionBuilder:
    """Accumulates grants for one protected resource, then reconciles them once."""

    def __init__(self, manager: "AclManager", resource: str, mode: ReconciliationMode):
        self.resource = str(resource)
        self.mode = mode
        self.grants = GrantSet()
        self._manager = manager
        self._performed = False

    def grant_read(self, roles: Iterable[str]) -> "PermissionBuilder":
        self.grants.add_read(roles)
        return self

    def grant_write(self, roles: Iterable[str]) -> "PermissionBuilder":
        """Grant write, which implies read."""
        self.grants.add_write(roles)
        return self

    def grant_append(self, roles: Iterable[str]) -> "PermissionBuilder":
        """Append is folded into write."""
        self.grants.add_write(roles)
        return self

    async def perform(self) -> str:
        """Apply the accumulated grants to the repository.

        Returns:
            URI of the resource's ACL

        Raises:
            BuilderAlreadyPerformedError: if called a second time
        """
        if self._performed:
            raise BuilderAlreadyPerformedError(
                f"Permissions for <{self.resource}> have already been performed",
                details={"resource": self.resource, "mode": self.mode.value}
            )
        self._performed = True
        return await self._manager.reconcile(self.resource, self.mode, self.grants)

    def __repr__(self) -> str:
        return (
            f"PermissionBuilder({self.resource}, mode={self.mode.value}, "
            f"read={sorted(self.grants.read)}, write={sorted(self.grants.write)})"
        )


class AclManager:
    """Creates, modifies or prunes ACLs to reflect desired permissions.

    Reconciliations of the same resource are serialised within this manager;
    reconciliations of different resources may run concurrently.
    """

    def __init__(self, driver: AclDriver, crawler: Optional[ResourceCrawler] = None):
        self.driver = driver
        self.crawler = crawler or RepositoryCrawler(driver)
        self._locks: "WeakValueDictionary[str, asyncio.Lock]" = WeakValueDictionary()

    def add_permissions(self, resource: str) -> PermissionBuilder:
        """Builder that merges grants into existing authorizations."""
        return PermissionBuilder(self, resource, ReconciliationMode.ADD)

    def set_permissions(self, resource: str) -> PermissionBuilder:
        """Builder that replaces all authorizations of the resource's ACL."""
        return PermissionBuilder(self, resource, ReconciliationMode.SET)

    def _lock_for(self, resource: str) -> asyncio.Lock:
        lock = self._locks.get(resource)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[resource] = lock
        return lock

    async def reconcile(self, resource: str, mode: ReconciliationMode, grants: GrantSet) -> str:
        """Make the ACL of ``resource`` reflect ``grants``.

        Raises:
            InvalidIriError: before any request, if the resource or a role
                is not an absolute IRI
        """
        require_iri(resource, "resource")
        for role in grants.all_roles():
            require_iri(role, "role")

        async with self._lock_for(resource):
            acl = await self.driver.find_or_create_acl(resource)
            logger.debug(f"Reconciling ({mode.value}) permissions of <{resource}> in ACL <{acl.uri}>")

            if mode is ReconciliationMode.SET:
                await self._set(resource, acl, grants)
            else:
                await self._add(resource, acl, grants)

            logger.info(f"Updated permissions ({mode.value}) of <{resource}> in ACL <{acl.uri}>")
            return acl.uri

    async def _add(self, resource: str, acl: Acl, grants: GrantSet) -> None:
        for permission, roles in grants.resolved().items():
            if not roles:
                continue

            authz = authorization_address(acl.uri, permission)
            if await self.driver.exists(authz):
                await self.driver.patch_authz_body(authz, authorization_patch(resource, roles, permission))
            else:
                await self.driver.put_authz_body(authz, authorization_body(resource, roles, permission))

        if acl.is_new:
            await self.driver.link_acl(acl.uri, resource)

    async def _set(self, resource: str, acl: Acl, grants: GrantSet) -> None:
        # Empty role sets are written too, revoking stale grants
        for permission, roles in grants.resolved().items():
            authz = authorization_address(acl.uri, permission)
            await self.driver.put_authz_body(authz, authorization_body(resource, roles, permission))

        if acl.is_new:
            await self.driver.link_acl(acl.uri, resource)

        canonical = set(canonical_addresses(acl.uri))

        async def prune(uri: str) -> None:
            if uri not in canonical:
                logger.info(f"Deleting stale authorization <{uri}> from ACL <{acl.uri}>")
                await self.driver.delete_completely(uri)

        visited = await self.crawler.visit(acl.uri, prune, ignoring(acl.uri), one_level)
        logger.debug(f"Examined {visited} resources in ACL <{acl.uri}>")

    async def read_acl(self, resource: str) -> Optional[AclReader]:
        """Reader over the ACL of ``resource``, or None if it has no ACL."""
        acl = await self.driver.find_acl(resource)
        if acl is None:
            return None
        return await self.driver.read_acl(acl)

    async def get_permissions(self, resource: str, role: str) -> Set[Permission]:
        """Permissions ``role`` currently holds on ``resource``."""
        reader = await self.read_acl(resource)
        if reader is None:
            return set()
        return reader.permissions_for_role(role)
