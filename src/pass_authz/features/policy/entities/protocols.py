"""Protocols for collaborators of the policy feature."""

from typing import Protocol, Type, TypeVar, runtime_checkable

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


@runtime_checkable
class ResourceReader(Protocol):
    """Reads repository resources into domain models."""

    async def read_resource(self, uri: str, model: Type[T]) -> T:
        """Read the resource at ``uri`` as an instance of ``model``."""
        ...
