"""Identifier generation for stored recipes.

A generator is any zero-argument callable returning a fresh string id. The
store only relies on ids being non-empty and never repeated.
"""

from __future__ import annotations

import itertools
import uuid
from typing import Callable

IdentifierGenerator = Callable[[], str]


def new_recipe_id() -> str:
    """Return a random 32 character hexadecimal identifier."""

    return uuid.uuid4().hex


def sequential_ids(prefix: str = "recipe-", start: int = 1) -> IdentifierGenerator:
    """Return a generator producing ``prefix1``, ``prefix2`` and so on."""

    counter = itertools.count(start)

    def _next_id() -> str:
        return f"{prefix}{next(counter)}"

    return _next_id


__all__ = ["IdentifierGenerator", "new_recipe_id", "sequential_ids"]
