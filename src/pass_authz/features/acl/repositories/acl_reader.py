"""Read-only introspection of an ACL's RDF representation."""

import logging
from typing import Optional, Set

from rdflib import Graph, URIRef

from ....core.exceptions import MultipleAuthorizationsError
from ..entities.permission import Permission
from ..entities.vocabulary import ACL, JSON_LD, N_TRIPLES, TURTLE

logger = logging.getLogger(__name__)


RDF_FORMATS = {
    TURTLE: "turtle",
    N_TRIPLES: "nt",
    JSON_LD: "json-ld",
}

FIND_PERMISSIONS = """
PREFIX acl: <http://www.w3.org/ns/auth/acl#>
SELECT DISTINCT ?auth ?mode
WHERE { ?auth acl:agent ?role .
        ?auth acl:mode ?mode }
"""


def parse_graph(body: str, content_type: str = TURTLE, base: Optional[str] = None) -> Graph:
    """Parse an RDF body, resolving relative IRIs against ``base``."""
    rdf_format = RDF_FORMATS.get(content_type.split(";")[0].strip(), "turtle")
    graph = Graph()
    if body and body.strip():
        graph.parse(data=body, format=rdf_format, publicID=base)
    return graph


class AclReader:
    """Extracts the current grants from the body of an ACL resource.

    The body is expected to embed the ACL's authorization resources and to
    exclude server-managed triples.
    """

    def __init__(self, body: str, content_type: str = TURTLE, base: Optional[str] = None):
        self.graph = parse_graph(body, content_type, base)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Content of ACL {base} is\n{self.graph.serialize(format='turtle')}")

    def permissions_for_role(self, role: str) -> Set[Permission]:
        """Permissions granted to ``role`` across every authorization naming it."""
        permissions = set()
        for row in self.graph.query(FIND_PERMISSIONS, initBindings={"role": URIRef(role)}):
            permission = Permission.from_mode(row.mode)
            if permission is None:
                logger.debug(f"Ignoring unknown mode {row.mode} in {row.auth}")
                continue
            permissions.add(permission)
        return permissions

    def authorization_for_role(self, role: str) -> Optional[str]:
        """The single authorization naming ``role`` as agent, if any.

        Raises:
            MultipleAuthorizationsError: if several authorizations name the role
        """
        resources = {str(s) for s in self.graph.subjects(ACL.agent, URIRef(role))}

        if len(resources) > 1:
            raise MultipleAuthorizationsError(role, resources)
        if not resources:
            logger.debug(f"No authz resources for role {role}")
            return None
        return resources.pop()

    def roles_with_any_grant(self) -> Set[str]:
        """Every distinct agent named by any authorization."""
        return {
            str(o) for o in self.graph.objects(None, ACL.agent)
            if isinstance(o, URIRef)
        }
