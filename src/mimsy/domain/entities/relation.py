"""Lazy relation handle produced when rehydrating API records."""

from dataclasses import dataclass
from typing import Union

from mimsy.domain.entities.builtins import Builtin
from mimsy.domain.entities.collection import Collection


@dataclass(frozen=True)
class UnfetchedRelation:
    """A reference to a related object that has not been fetched yet.

    Attributes:
        target: The collection or builtin the id belongs to.
        id: Identifier of the related object, as a string.
    """

    target: Union[Collection, Builtin]
    id: str
