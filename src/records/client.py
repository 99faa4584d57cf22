from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import httpx
from pydantic import ValidationError

from .commands import FetchNextPage
from .errors import ClientError
from .logger import get_logger
from .models import Page, Record
from .pager import Pager
from .resources import Resource
from .settings import ClientConfig

logger = get_logger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Prefer the service's JSON error message, fall back to the status phrase."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase or "Request failed"


def _parse_total(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


# PUBLIC_INTERFACE
class RecordServiceClient:
    """
    Async client for a remote record collection.

    Every operation either returns decoded domain values or raises ClientError;
    transport failures, HTTP error statuses and undecodable bodies are not
    distinguished beyond the error message.

    Usage:
        async with RecordServiceClient(get_client_config()) as client:
            page = await client.list(client.resource, ["-last_modified"], 5)
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        self._http = httpx.AsyncClient(
            base_url=config.server_url,
            auth=config.credentials,
            timeout=config.request_timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @property
    def resource(self) -> Resource:
        """The collection named by the configuration."""
        return Resource(bucket=self._config.bucket, collection=self._config.collection)

    async def __aenter__(self) -> "RecordServiceClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _send(self, method: str, url: str, **kwargs: Any) -> Tuple[Any, httpx.Response]:
        logger.debug("%s %s %s", method, url, kwargs.get("params") or "")
        try:
            response = await self._http.request(method, url, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ClientError(f"Network error: {exc}") from exc

        if response.is_error:
            message = _error_message(response)
            logger.warning("%s %s returned %s: %s", method, url, response.status_code, message)
            raise ClientError(message, status_code=response.status_code)

        try:
            return response.json(), response
        except ValueError as exc:
            raise ClientError("Invalid JSON in response") from exc

    def _decode_record(self, resource: Resource, body: Any) -> Record:
        if not isinstance(body, dict) or not isinstance(body.get("data"), dict):
            raise ClientError("Unexpected response shape: missing 'data' object")
        try:
            return resource.decode(body["data"])
        except ValidationError as exc:
            raise ClientError(f"Invalid record: {exc.error_count()} validation error(s)") from exc

    def _decode_page(
        self,
        resource: Resource,
        body: Any,
        response: httpx.Response,
        continuation: bool,
    ) -> Page:
        if not isinstance(body, dict) or not isinstance(body.get("data"), list):
            raise ClientError("Unexpected response shape: missing 'data' list")
        try:
            objects = tuple(resource.decode(item) for item in body["data"])
        except ValidationError as exc:
            raise ClientError(f"Invalid record: {exc.error_count()} validation error(s)") from exc
        return Page(
            objects=objects,
            next_page=response.headers.get("Next-Page"),
            total=_parse_total(response.headers.get("Total-Records")),
            continuation=continuation,
        )

    # PUBLIC_INTERFACE
    async def list(
        self,
        resource: Resource,
        sort_keys: Sequence[str] = (),
        limit: Optional[int] = None,
    ) -> Page:
        """Fetch the first page of records ordered by sort_keys ('-' prefix for descending)."""
        params: Dict[str, str] = {}
        if sort_keys:
            params["_sort"] = ",".join(sort_keys)
        if limit is not None:
            params["_limit"] = str(limit)
        body, response = await self._send("GET", resource.records_path, params=params)
        return self._decode_page(resource, body, response, continuation=False)

    # PUBLIC_INTERFACE
    def get_next_page(self, pager: Pager) -> Optional[FetchNextPage]:
        """Request for the page after the pager's records, or None at the end."""
        return pager.load_next()

    # PUBLIC_INTERFACE
    async def fetch_next(self, request: FetchNextPage) -> Page:
        """Follow a next-page cursor; the page extends the records already loaded."""
        body, response = await self._send("GET", request.url)
        return self._decode_page(request.resource, body, response, continuation=True)

    # PUBLIC_INTERFACE
    async def get(self, resource: Resource, record_id: str) -> Record:
        body, _ = await self._send("GET", resource.record_path(record_id))
        return self._decode_record(resource, body)

    # PUBLIC_INTERFACE
    async def create(self, resource: Resource, body: Mapping[str, str]) -> Record:
        payload, _ = await self._send("POST", resource.records_path, json={"data": dict(body)})
        return self._decode_record(resource, payload)

    # PUBLIC_INTERFACE
    async def update(self, resource: Resource, record_id: str, body: Mapping[str, str]) -> Record:
        payload, _ = await self._send(
            "PATCH", resource.record_path(record_id), json={"data": dict(body)}
        )
        return self._decode_record(resource, payload)

    # PUBLIC_INTERFACE
    async def delete(self, resource: Resource, record_id: str) -> Record:
        """Delete a record and return its tombstone (id and last_modified only)."""
        payload, _ = await self._send("DELETE", resource.record_path(record_id))
        return self._decode_record(resource, payload)
