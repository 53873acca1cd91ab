"""RDF vocabularies and representation preferences used against the repository."""

import re

from rdflib import Namespace

from ....core.exceptions import InvalidIriError

ACL = Namespace("http://www.w3.org/ns/auth/acl#")
LDP = Namespace("http://www.w3.org/ns/ldp#")
FEDORA = Namespace("http://fedora.info/definitions/v4/repository#")
WEBAC = Namespace("http://fedora.info/definitions/v4/webac#")

PREFER_EMBED = FEDORA.EmbedResources
PREFER_SERVER_MANAGED = FEDORA.ServerManaged
PREFER_CONTAINMENT = LDP.PreferContainment

TOMBSTONE = "fcr:tombstone"

TURTLE = "text/turtle"
N_TRIPLES = "application/n-triples"
SPARQL_UPDATE = "application/sparql-update"
JSON_LD = "application/ld+json"

# Scheme, then only characters Turtle and SPARQL allow inside <...>
ABSOLUTE_IRI = re.compile(r'[A-Za-z][A-Za-z0-9+.\-]*:[^\x00-\x20<>"{}|^`\\]*')


def require_iri(value, role: str = "IRI") -> str:
    """Return ``value`` as a string if it is an absolute IRI.

    Raises:
        InvalidIriError: if it has no scheme or contains characters that
            cannot appear between angle brackets
    """
    value = str(value)
    if not ABSOLUTE_IRI.fullmatch(value):
        raise InvalidIriError(value, role)
    return value
