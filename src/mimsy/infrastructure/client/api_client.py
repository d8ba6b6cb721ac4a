"""Async HTTP client for the Mimsy content API.

The client is a thin wrapper over ``httpx.AsyncClient``. Records fetched
through a collection client are post-processed against the collection's
schema so relation fields come back as ``UnfetchedRelation`` handles.

Example:
    async with MimsyClient("https://cms.example.com") as client:
        post = await client.collection(Posts).get("42")
        author = await client.fetch_relation(post["author"])
"""

from typing import Any

import httpx

from mimsy.core.config import get_settings
from mimsy.core.logging import get_logger
from mimsy.domain.entities.collection import Collection, Global
from mimsy.domain.entities.relation import UnfetchedRelation
from mimsy.domain.services.post_processor import post_process
from mimsy.infrastructure.client.relation_resolver import fetch_relation

logger = get_logger(__name__)


class MimsyClient:
    """Entry point for talking to the content API.

    Args:
        base_url: API base URL. Defaults to the ``api_url`` setting.
        timeout: Request timeout in seconds. Defaults to the ``http_timeout`` setting.
        http_client: Optional preconfigured ``httpx.AsyncClient``. The caller
            keeps ownership of an injected client; ``aclose()`` only closes a
            client this instance created.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.http_timeout,
        )

    async def __aenter__(self) -> "MimsyClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def get_json(self, path: str) -> Any:
        """GET a path and decode its JSON body.

        Raises:
            httpx.HTTPStatusError: If the response is not 2xx.
            httpx.TransportError: If the request could not be sent.
            json.JSONDecodeError: If the body is not JSON.
        """
        url = self.url(path)
        logger.debug("Fetching resource", url=url)
        response = await self._http.get(url)
        response.raise_for_status()
        return response.json()

    def users(self) -> "UserClient":
        return UserClient(self)

    def media(self) -> "MediaClient":
        return MediaClient(self)

    def collection(self, collection: Collection) -> "CollectionClient":
        return CollectionClient(self, collection)

    def global_(self, global_: Global) -> "GlobalClient":
        return GlobalClient(self, global_)

    async def fetch_relation(self, relation: UnfetchedRelation) -> Any:
        """Resolve a relation handle into the related object."""
        return await fetch_relation(self, relation)


class UserClient:
    """Access to builtin users (``/v1/users``)."""

    def __init__(self, client: MimsyClient) -> None:
        self.client = client

    async def all(self) -> list[dict[str, Any]]:
        return await self.client.get_json("/v1/users")

    async def get(self, id: str) -> dict[str, Any]:
        return await self.client.get_json(f"/v1/users/{id}")


class MediaClient:
    """Access to builtin media (``/v1/media``)."""

    def __init__(self, client: MimsyClient) -> None:
        self.client = client

    async def all(self) -> list[dict[str, Any]]:
        return await self.client.get_json("/v1/media")

    async def get(self, id: str) -> dict[str, Any]:
        return await self.client.get_json(f"/v1/media/{id}")


class CollectionClient:
    """Access to the records of one collection (``/v1/collections/{name}``)."""

    def __init__(self, client: MimsyClient, collection: Collection) -> None:
        self.client = client
        self.collection = collection

    @property
    def path(self) -> str:
        return f"/v1/collections/{self.collection.name}"

    async def all(self) -> list[dict[str, Any]]:
        data = await self.client.get_json(self.path)
        return [post_process(self.collection, item) for item in data]

    async def get(self, id: str) -> dict[str, Any]:
        data = await self.client.get_json(f"{self.path}/{id}")
        return post_process(self.collection, data)


class GlobalClient:
    """Access to a global resource (``/v1/globals/{name}``)."""

    def __init__(self, client: MimsyClient, global_: Global) -> None:
        self.client = client
        self.global_ = global_

    @property
    def path(self) -> str:
        return f"/v1/globals/{self.global_.name}"

    async def get(self, id: str | None = None) -> dict[str, Any]:
        """Fetch the global, or one revision of it when ``id`` is given."""
        path = self.path if id is None else f"{self.path}/{id}"
        data = await self.client.get_json(path)
        return post_process(self.global_, data)
