"""Protocols for collaborators of the ACL feature."""

from typing import Awaitable, Callable, Optional, Protocol, runtime_checkable

Visitor = Callable[[str], Awaitable[None]]
IgnoreRule = Callable[[str], bool]
DepthRule = Callable[[int], bool]


@runtime_checkable
class ResourceCrawler(Protocol):
    """Walks a container tree in the repository."""

    async def visit(
        self,
        root: str,
        visitor: Visitor,
        ignore: Optional[IgnoreRule] = None,
        descend: Optional[DepthRule] = None
    ) -> int:
        """Visit ``root`` and its descendants, returning how many were visited."""
        ...


@runtime_checkable
class ChildLister(Protocol):
    """Lists the direct children of a container."""

    async def get_children(self, uri: str) -> list:
        """Get the URIs contained by ``uri``."""
        ...
