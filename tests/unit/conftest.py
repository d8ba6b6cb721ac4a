"""Pytest configuration for unit tests."""

import pytest

from mimsy import builtins, collection, fields
from mimsy.domain.entities import Collection


@pytest.fixture
def tags() -> Collection:
    """A registered collection usable as a relation target."""
    return collection("tags", {
        "name": fields.short_string(constraints={"minLength": 2, "maxLength": 50}),
    })


@pytest.fixture
def posts(tags: Collection) -> Collection:
    """A registered collection covering every relation flavour."""
    return collection("posts", {
        "title": fields.short_string(description="The title of the post"),
        "body": fields.rich_text(),
        "author": fields.relation(relates_to=builtins.User),
        "tags": fields.multi_relation(relates_to=tags),
        "cover_image": fields.media(),
        "_draft_notes": fields.rich_text(),
    })
