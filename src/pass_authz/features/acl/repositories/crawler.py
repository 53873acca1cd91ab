"""Depth-first walker over repository containers."""

import logging
from typing import Optional

from ..entities.protocols import ChildLister, DepthRule, IgnoreRule, Visitor

logger = logging.getLogger(__name__)


def visit_all(depth: int) -> bool:
    return True


def one_level(depth: int) -> bool:
    """Descend only into the root's direct children."""
    return depth < 1


def ignore_none(uri: str) -> bool:
    return False


def ignoring(*uris: str) -> IgnoreRule:
    """Ignore rule skipping exactly the given URIs."""
    skipped = set(uris)
    return lambda uri: uri in skipped


class RepositoryCrawler:
    """Visits a resource and its contained descendants.

    Children are listed through ``ldp:contains``; ignored resources are not
    passed to the visitor but their children are still walked.
    """

    def __init__(self, lister: ChildLister):
        self.lister = lister

    async def visit(
        self,
        root: str,
        visitor: Visitor,
        ignore: Optional[IgnoreRule] = None,
        descend: Optional[DepthRule] = None
    ) -> int:
        """Visit ``root`` and its descendants.

        Args:
            root: Resource to start from
            visitor: Coroutine function called once per visited resource
            ignore: Predicate selecting resources to skip
            descend: Predicate on the current depth deciding whether to list children

        Returns:
            Number of resources passed to the visitor
        """
        return await self._visit(root, visitor, ignore or ignore_none, descend or visit_all, 0)

    async def _visit(
        self,
        resource: str,
        visitor: Visitor,
        ignore: IgnoreRule,
        descend: DepthRule,
        depth: int
    ) -> int:
        count = 0
        if ignore(resource):
            logger.debug(f"Ignoring {resource}")
        else:
            await visitor(resource)
            count += 1

        if not descend(depth):
            return count

        for child in await self.lister.get_children(resource):
            count += await self._visit(child, visitor, ignore, descend, depth + 1)
        return count
