"""Repository protocol driver for ACLs and their authorizations.

Owns every request made against the repository on behalf of the ACL feature:
resolving or creating a resource's ACL, writing authorization bodies, probing
for existence, and the two-phase delete required by tombstones.

Any response with a status above 299 becomes a RepositoryProtocolError and
any transport failure a RepositoryConnectionError. Nothing is retried here.
"""

import logging
from typing import Collection, Iterable, List, Optional, Sequence

import httpx
from rdflib import URIRef

from ....core.exceptions import MultipleAclsError, RepositoryError
from ....core.http import send
from ..entities.acl import Acl
from ..entities.permission import Permission, tombstone_address
from ..entities.vocabulary import (
    ACL,
    LDP,
    N_TRIPLES,
    PREFER_CONTAINMENT,
    PREFER_EMBED,
    PREFER_SERVER_MANAGED,
    SPARQL_UPDATE,
    TURTLE,
    require_iri,
)
from .acl_reader import AclReader, parse_graph

logger = logging.getLogger(__name__)


ACL_TEMPLATE = (
    "@prefix webac: <http://fedora.info/definitions/v4/webac#> .\n\n"
    "<> a webac:Acl .\n"
)

TEMPLATE_ADD_ACL_TRIPLE = (
    "INSERT {<> <http://www.w3.org/ns/auth/acl#accessControl> <%s>} WHERE {}"
)

PREFER_LENIENT = 'handling=lenient; received="minimal"'


def prefer_representation(include: Sequence[str] = (), omit: Sequence[str] = ()) -> str:
    """Build a ``Prefer`` header value selecting representation contents."""
    parts = ["return=representation"]
    if include:
        parts.append('include="%s"' % " ".join(str(u) for u in include))
    if omit:
        parts.append('omit="%s"' % " ".join(str(u) for u in omit))
    return "; ".join(parts)


def _iris(values: Iterable[str], role: str = "role") -> List[str]:
    return [f"<{v}>" for v in sorted(require_iri(v, role) for v in values)]


def authorization_body(resource: str, roles: Collection[str], permission: Permission) -> str:
    """Full Turtle body of an authorization granting ``permission`` to ``roles``.

    An empty role set yields an authorization that names no agents.

    Raises:
        InvalidIriError: if the resource or any role is not an absolute IRI
    """
    resource = require_iri(resource, "resource")
    lines = [
        f"@prefix acl: <{ACL}> .",
        "",
        "<> a acl:Authorization ;",
        f"    acl:accessTo <{resource}> ;",
    ]
    if roles:
        lines.append("    acl:agent %s ;" % ", ".join(_iris(roles)))
    lines.append("    acl:mode %s ." % ", ".join(_iris(permission.modes)))
    return "\n".join(lines) + "\n"


def authorization_patch(resource: str, roles: Collection[str], permission: Permission) -> str:
    """SPARQL update inserting the grant triples, leaving existing ones intact.

    Raises:
        InvalidIriError: if the resource or any role is not an absolute IRI
    """
    resource = require_iri(resource, "resource")
    lines = [f"PREFIX acl: <{ACL}>", "", "INSERT {", f"<> acl:accessTo <{resource}> ."]
    lines.extend(f"<> acl:agent {agent} ." for agent in _iris(roles))
    lines.extend(f"<> acl:mode {mode} ." for mode in _iris(permission.modes))
    lines.append("} WHERE {}")
    return "\n".join(lines)


class AclDriver:
    """Performs ACL-related create/read/patch/delete requests against the repository."""

    def __init__(self, acl_base: str, client: httpx.AsyncClient):
        """
        Args:
            acl_base: Container under which new ACLs are created
            client: HTTP client used for every request
        """
        self.acl_base = acl_base
        self.client = client

    async def _send(
        self,
        method: str,
        uri: str,
        message: str,
        tolerate: Collection[int] = (),
        **kwargs
    ) -> httpx.Response:
        return await send(self.client, method, uri, message, tolerate, **kwargs)

    async def find_acl(self, resource: str) -> Optional[str]:
        """Get the ACL linked from ``resource``, or None if it has none.

        Raises:
            MultipleAclsError: if the resource links to more than one ACL
        """
        logger.debug(f"Finding ACL for <{resource}>")
        response = await self._send(
            "GET", resource, f"Error looking for ACL of <{resource}>",
            headers={
                "Accept": N_TRIPLES,
                "Prefer": prefer_representation(omit=[PREFER_CONTAINMENT, PREFER_SERVER_MANAGED]),
            }
        )

        graph = parse_graph(response.text, N_TRIPLES, base=resource)
        acls = {str(o) for o in graph.objects(None, ACL.accessControl)}

        if len(acls) > 1:
            raise MultipleAclsError(resource, acls)
        if acls:
            acl = acls.pop()
            logger.debug(f"Found existing ACL <{acl}>")
            return acl
        return None

    async def find_or_create_acl(self, resource: str) -> Acl:
        """Resolve the ACL of ``resource``, creating an unlinked one if absent."""
        acl = await self.find_acl(resource)
        if acl is not None:
            return Acl(acl, is_new=False)

        logger.debug(f"No ACL on <{resource}>, creating one")
        return await self.create_acl()

    async def create_acl(self) -> Acl:
        response = await self._send(
            "POST", self.acl_base, f"Error creating acl by POSTing to {self.acl_base}",
            content=ACL_TEMPLATE.encode("utf-8"),
            headers={"Content-Type": TURTLE}
        )

        location = response.headers.get("Location")
        if not location:
            raise RepositoryError(
                f"Repository did not report a location for the acl created in {self.acl_base}",
                details={"status_code": response.status_code}
            )

        acl = str(response.url.join(location))
        logger.debug(f"Created ACL at <{acl}>")
        return Acl(acl, is_new=True)

    async def link_acl(self, acl: str, resource: str) -> None:
        """Add the ``acl:accessControl`` relationship from ``resource`` to ``acl``."""
        body = TEMPLATE_ADD_ACL_TRIPLE % require_iri(acl, "ACL")
        logger.debug(f"Linking ACL <{acl}> to <{resource}> via PATCH:\n{body}")

        await self._send(
            "PATCH", resource, f"Error linking to acl <{acl}> from <{resource}>",
            content=body.encode("utf-8"),
            headers={"Content-Type": SPARQL_UPDATE}
        )

    async def exists(self, uri: str) -> bool:
        response = await self._send(
            "HEAD", uri, f"Error checking existence of <{uri}>", tolerate=(404,)
        )
        return response.status_code != 404

    async def put_authz_body(self, uri: str, body: str) -> None:
        """Create or fully replace an authorization."""
        logger.debug(f"PUTting authz to <{uri}> with body\n{body}")

        await self._send(
            "PUT", uri, f"Error updating authorization at <{uri}>",
            content=body.encode("utf-8"),
            headers={"Content-Type": TURTLE, "Prefer": PREFER_LENIENT}
        )

    async def patch_authz_body(self, uri: str, body: str) -> None:
        """Insert triples into an existing authorization."""
        logger.debug(f"PATCHing authz to <{uri}> with body\n{body}")

        await self._send(
            "PATCH", uri, f"Error updating authorization at <{uri}>",
            content=body.encode("utf-8"),
            headers={"Content-Type": SPARQL_UPDATE}
        )

    async def delete_completely(self, uri: str) -> None:
        """Delete a resource and then its tombstone.

        A resource that is already gone (404), or of which only the tombstone
        remains (410), is not an error; neither is an absent tombstone.
        """
        response = await self._send(
            "DELETE", uri, f"Could not delete resource {uri}", tolerate=(404, 410)
        )
        if response.status_code == 404:
            logger.debug(f"{uri} already deleted")

        tombstone = tombstone_address(uri)
        response = await self._send(
            "DELETE", tombstone, f"Could not delete tombstone {tombstone}", tolerate=(404,)
        )
        if response.status_code == 404:
            logger.debug(f"No tombstone at {tombstone}")
        else:
            logger.debug(f"Deleted {uri} and its tombstone")

    async def read_acl(self, acl: str) -> AclReader:
        """Fetch an ACL with its authorizations embedded."""
        logger.debug(f"Reading ACL {acl}")
        response = await self._send(
            "GET", acl, f"Could not read acl {acl}",
            headers={
                "Accept": TURTLE,
                "Prefer": prefer_representation(include=[PREFER_EMBED], omit=[PREFER_SERVER_MANAGED]),
            }
        )
        return AclReader(response.text, content_type=TURTLE, base=acl)

    async def get_children(self, uri: str) -> List[str]:
        """URIs directly contained by ``uri``."""
        response = await self._send(
            "GET", uri, f"Error getting children of {uri}",
            headers={
                "Accept": N_TRIPLES,
                "Prefer": prefer_representation(include=[PREFER_CONTAINMENT]),
            }
        )

        graph = parse_graph(response.text, N_TRIPLES, base=uri)
        return sorted(str(o) for o in graph.objects(None, LDP.contains) if isinstance(o, URIRef))
