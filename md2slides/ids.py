"""Object identifiers for Slides API requests.

Every ``objectId`` in a batchUpdate must be unique within the presentation.
IDs are built from a shared counter, never from the wall clock, so two IDs
handed out by the same generator cannot collide however fast they are drawn.
The API additionally requires 5-50 characters matching
``[a-zA-Z0-9_][a-zA-Z0-9_\\-:]*``.
"""
from __future__ import annotations

import itertools
import re
import uuid
from typing import Optional

__all__ = ["IdentifierGenerator"]

_KIND_RE = re.compile(r"^[a-zA-Z0-9_]+$")


class IdentifierGenerator:
    """Hand out ``{prefix}_{kind}_{n}`` identifiers with a monotonic ``n``."""

    def __init__(self, prefix: Optional[str] = None) -> None:
        if prefix is None:
            prefix = "md" + uuid.uuid4().hex[:8]
        if not _KIND_RE.match(prefix):
            raise ValueError(f"Invalid identifier prefix: {prefix!r}")
        self.prefix = prefix
        self._counter = itertools.count()

    def next_id(self, kind: str) -> str:
        if not _KIND_RE.match(kind):
            raise ValueError(f"Invalid identifier kind: {kind!r}")
        object_id = f"{self.prefix}_{kind}_{next(self._counter)}"
        if len(object_id) > 50:
            raise ValueError(f"Identifier too long for the Slides API: {object_id}")
        return object_id
