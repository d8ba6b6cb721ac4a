"""HTTP client for the content API and the relation resolver."""

from mimsy.infrastructure.client.api_client import (
    CollectionClient,
    GlobalClient,
    MediaClient,
    MimsyClient,
    UserClient,
)
from mimsy.infrastructure.client.relation_resolver import fetch_relation

__all__ = [
    "CollectionClient",
    "GlobalClient",
    "MediaClient",
    "MimsyClient",
    "UserClient",
    "fetch_relation",
]
