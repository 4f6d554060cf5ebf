"""Push JSON payloads to remote endpoints."""

import json
from typing import Any

import httpx
import structlog
from fastapi.encoders import jsonable_encoder

logger = structlog.get_logger()

JSON_HEADERS = {"Content-Type": "application/json"}


def _encode(data: Any) -> bytes:
    return json.dumps(jsonable_encoder(data), allow_nan=False).encode()


def push_json_to_remote(
    uri: str, data: Any, client: httpx.Client | None = None
) -> tuple[httpx.Response, int]:
    """POST ``data`` as JSON to ``uri``.

    Uses ``client`` when given, otherwise a fresh client that is closed
    before returning. The response body is read in full, so it stays
    usable after the client is closed.
    """
    body = _encode(data)
    if client is None:
        with httpx.Client() as own_client:
            response = own_client.post(uri, content=body, headers=JSON_HEADERS)
    else:
        response = client.post(uri, content=body, headers=JSON_HEADERS)

    logger.info("Pushed JSON to remote", uri=uri, status=response.status_code)
    return response, response.status_code


async def push_json_to_remote_async(
    uri: str, data: Any, client: httpx.AsyncClient | None = None
) -> tuple[httpx.Response, int]:
    """Async counterpart of :func:`push_json_to_remote`."""
    body = _encode(data)
    if client is None:
        async with httpx.AsyncClient() as own_client:
            response = await own_client.post(uri, content=body, headers=JSON_HEADERS)
    else:
        response = await client.post(uri, content=body, headers=JSON_HEADERS)

    logger.info("Pushed JSON to remote", uri=uri, status=response.status_code)
    return response, response.status_code
