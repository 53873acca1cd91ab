"""Shared request handling for repository clients."""

from typing import Collection

import httpx

from .exceptions import RepositoryConnectionError, RepositoryProtocolError


async def send(
    client: httpx.AsyncClient,
    method: str,
    uri: str,
    message: str,
    tolerate: Collection[int] = (),
    **kwargs
) -> httpx.Response:
    """Send a request, converting failures into repository errors.

    Args:
        client: HTTP client
        method: HTTP method
        uri: Target URI
        message: Description used if the repository answers with an error
        tolerate: Error status codes returned to the caller instead of raised
        **kwargs: Passed to ``client.request``

    Raises:
        RepositoryProtocolError: status above 299 and not tolerated
        RepositoryConnectionError: the repository could not be reached
    """
    try:
        response = await client.request(method, uri, **kwargs)
    except httpx.TransportError as e:
        raise RepositoryConnectionError(
            f"Error connecting to the repository: {e}",
            details={"method": method, "uri": uri}
        ) from e

    if response.status_code > 299 and response.status_code not in tolerate:
        raise RepositoryProtocolError(message, response.status_code, response.text, uri=uri)
    return response
