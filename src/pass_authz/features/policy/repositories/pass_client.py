"""Reads domain entities from the repository as JSON-LD."""

import json
import logging
from typing import Type

import httpx
from pydantic import ValidationError

from ....core.exceptions import RepositoryError
from ....core.http import send
from ...acl.entities.vocabulary import JSON_LD
from ..entities.protocols import ResourceReader, T

logger = logging.getLogger(__name__)


class PassRepositoryClient(ResourceReader):
    """ResourceReader backed by the repository's compact JSON-LD representation."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def read_resource(self, uri: str, model: Type[T]) -> T:
        response = await send(
            self.client, "GET", uri, f"Error reading {model.__name__} <{uri}>",
            headers={"Accept": JSON_LD}
        )

        try:
            data = response.json()
        except json.JSONDecodeError as e:
            raise RepositoryError(
                f"Resource <{uri}> is not valid JSON-LD: {e}",
                details={"uri": uri}
            ) from e

        # Some repositories answer with a single-element array or a graph
        if isinstance(data, dict) and "@graph" in data:
            data = data["@graph"]
        if isinstance(data, list):
            objects = [d for d in data if isinstance(d, dict)]
            if not objects:
                raise RepositoryError(
                    f"Resource <{uri}> has no JSON-LD object",
                    details={"uri": uri}
                )
            data = next((d for d in objects if d.get("@id") == uri), objects[0])

        try:
            entity = model.model_validate(data)
        except ValidationError as e:
            raise RepositoryError(
                f"Resource <{uri}> is not a valid {model.__name__}: {e}",
                details={"uri": uri, "model": model.__name__}
            ) from e

        if entity.id is None:
            entity.id = uri
        logger.debug(f"Read {model.__name__} <{uri}>")
        return entity
