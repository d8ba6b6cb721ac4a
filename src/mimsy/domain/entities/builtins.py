"""Builtin pseudo-collections usable as relation targets.

``User`` and ``Media`` are served by the content API itself rather than
declared by operators. They are never registered; declaration code refers to
them directly, e.g. ``fields.relation(relates_to=User)``.
"""

from dataclasses import dataclass, field
from typing import Any

# Only objects built in this module carry this sentinel.
_BUILTIN_MARKER = object()

USER_NAME = "<builtins.user>"
MEDIA_NAME = "<builtins.media>"


@dataclass(frozen=True)
class Builtin:
    """A fixed relation target provided by the content API.

    Attributes:
        name: Stable identifier written as ``relatesTo`` in exported schemas.
    """

    name: str
    _marker: object = field(default=None, repr=False, compare=False)


User = Builtin(name=USER_NAME, _marker=_BUILTIN_MARKER)
Media = Builtin(name=MEDIA_NAME, _marker=_BUILTIN_MARKER)

BUILTINS: tuple[Builtin, ...] = (User, Media)


def is_builtin(value: Any) -> bool:
    """Check whether a value is a genuine builtin.

    Look-alike objects with a ``name`` but without the module's marker
    (including ``Builtin`` instances constructed elsewhere) are rejected.
    """
    return getattr(value, "_marker", None) is _BUILTIN_MARKER


def get_builtin(name: str) -> Builtin | None:
    """Return the builtin with the given identifier, or None."""
    for builtin in BUILTINS:
        if builtin.name == name:
            return builtin
    return None
