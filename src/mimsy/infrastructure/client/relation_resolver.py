"""Resolve ``UnfetchedRelation`` handles over HTTP.

Each call issues exactly one request. There is no retry and no cache; HTTP,
transport and JSON errors reach the caller unchanged. Handles are immutable,
so several relations can be resolved concurrently with ``asyncio.gather``.
"""

from typing import TYPE_CHECKING, Any

from mimsy.core.exceptions import UnknownBuiltinError
from mimsy.domain.entities.builtins import MEDIA_NAME, USER_NAME, Builtin, is_builtin
from mimsy.domain.entities.relation import UnfetchedRelation

if TYPE_CHECKING:
    from mimsy.infrastructure.client.api_client import MimsyClient


async def fetch_relation(client: "MimsyClient", relation: UnfetchedRelation) -> Any:
    """Fetch the object a relation handle points at.

    Builtin targets are dispatched by name: users to ``/v1/users/{id}`` and
    media to ``/v1/media/{id}``; both return the raw JSON object. Collection
    targets are fetched from ``/v1/collections/{name}/{id}`` (globals from
    ``/v1/globals/{name}``) and post-processed against their schema.

    Args:
        client: The client to issue the request with.
        relation: The handle to resolve.

    Returns:
        The related object.

    Raises:
        UnknownBuiltinError: If the target is a builtin with an unknown name,
            or a ``Builtin`` that mimsy did not create.
        httpx.HTTPStatusError: If the API answers with a non-2xx status.
    """
    target = relation.target

    if is_builtin(target):
        if target.name == USER_NAME:
            return await client.users().get(relation.id)
        if target.name == MEDIA_NAME:
            return await client.media().get(relation.id)
        raise UnknownBuiltinError(target.name)

    if isinstance(target, Builtin):
        raise UnknownBuiltinError(target.name)

    if target.is_global:
        return await client.global_(target).get()

    return await client.collection(target).get(relation.id)
