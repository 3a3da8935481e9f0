from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Protocol, Sequence, Set

from .errors import IdMismatchError, NotFoundError, ValidationError
from .ids import IdentifierGenerator, new_recipe_id, sequential_ids
from .models import Recipe
from .schemas import RecipeFields, validate_payload

logger = logging.getLogger(__name__)


DEFAULT_SEED_RECIPES: Sequence[Mapping[str, Any]] = (
    {
        "name": "boiled white rice",
        "ingredients": ["1 cup white rice", "2 cups water", "pinch of salt"],
    },
    {
        "name": "milkshake",
        "ingredients": ["2 tbsp cocoa", "2 cups vanilla ice cream", "1 cup milk"],
    },
)


class RecipeRepository(Protocol):
    """Protocol describing the behaviour required by the web layer."""

    def list_recipes(self) -> Iterable[Recipe]:
        """Return every stored recipe in insertion order."""

    def get_recipe(self, recipe_id: str) -> Recipe:
        """Return a single recipe or raise :class:`NotFoundError` if missing."""

    def add_recipe(self, *, name: str, ingredients: Sequence[str]) -> Recipe:
        """Store a new recipe under a fresh id and return it."""

    def update_recipe(
        self,
        recipe_id: str,
        *,
        name: str,
        ingredients: Sequence[str],
        body_id: Optional[str] = None,
    ) -> Recipe:
        """Replace the name and ingredients of an existing recipe."""

    def delete_recipe(self, recipe_id: str) -> None:
        """Remove a recipe or raise :class:`NotFoundError` if missing."""


class InMemoryRecipeStorage(RecipeRepository):
    """Process-local recipe storage kept in insertion order.

    Every operation holds a single lock for its whole duration, so the
    storage is safe to share between the threads of a WSGI server. Callers
    always receive copies of the stored records.
    """

    def __init__(
        self,
        *,
        id_generator: Optional[IdentifierGenerator] = None,
        seed: Iterable[Mapping[str, Any]] = (),
    ) -> None:
        self._recipes: List[Recipe] = []
        self._issued_ids: Set[str] = set()
        self._id_generator = id_generator or new_recipe_id
        self._lock = threading.Lock()

        for entry in seed:
            self.add_recipe(name=entry.get("name"), ingredients=entry.get("ingredients"))

    @classmethod
    def from_env(cls) -> "InMemoryRecipeStorage":
        """Build a storage instance from environment variables."""

        scheme = os.environ.get("RECIPES_ID_SCHEME", "uuid").strip().lower()
        if scheme == "uuid":
            id_generator = new_recipe_id
        elif scheme == "sequential":
            id_generator = sequential_ids()
        else:
            raise RuntimeError(
                f"Unknown RECIPES_ID_SCHEME '{scheme}'. Expected 'uuid' or 'sequential'."
            )

        seed_file = os.environ.get("RECIPES_SEED_FILE")
        seed = load_seed_file(seed_file) if seed_file else DEFAULT_SEED_RECIPES
        return cls(id_generator=id_generator, seed=seed)

    def list_recipes(self) -> List[Recipe]:
        with self._lock:
            return [recipe.copy() for recipe in self._recipes]

    def get_recipe(self, recipe_id: str) -> Recipe:
        with self._lock:
            return self._find(recipe_id).copy()

    def add_recipe(self, *, name: str, ingredients: Sequence[str]) -> Recipe:
        fields = validate_payload(RecipeFields, {"name": name, "ingredients": ingredients})

        with self._lock:
            recipe = Recipe(
                id=self._next_id(),
                name=fields.name,
                ingredients=list(fields.ingredients),
            )
            self._recipes.append(recipe)
            created = recipe.copy()

        logger.info("Created recipe %s (%s)", created.id, created.name)
        return created

    def update_recipe(
        self,
        recipe_id: str,
        *,
        name: str,
        ingredients: Sequence[str],
        body_id: Optional[str] = None,
    ) -> Recipe:
        fields = validate_payload(RecipeFields, {"name": name, "ingredients": ingredients})
        if body_id is not None and body_id != recipe_id:
            raise IdMismatchError(recipe_id, body_id)

        with self._lock:
            recipe = self._find(recipe_id)
            recipe.name = fields.name
            recipe.ingredients = list(fields.ingredients)
            updated = recipe.copy()

        logger.info("Updated recipe %s", recipe_id)
        return updated

    def delete_recipe(self, recipe_id: str) -> None:
        with self._lock:
            for index, recipe in enumerate(self._recipes):
                if recipe.id == recipe_id:
                    del self._recipes[index]
                    break
            else:
                raise NotFoundError(recipe_id)

        logger.info("Deleted recipe %s", recipe_id)

    def _find(self, recipe_id: str) -> Recipe:
        for recipe in self._recipes:
            if recipe.id == recipe_id:
                return recipe
        raise NotFoundError(recipe_id)

    def _next_id(self) -> str:
        candidate = self._id_generator()
        if not candidate:
            raise RuntimeError("Identifier generator returned an empty id.")
        if candidate in self._issued_ids:
            raise RuntimeError(f"Identifier generator repeated id '{candidate}'.")
        self._issued_ids.add(candidate)
        return candidate


def load_seed_file(path: str | os.PathLike[str]) -> List[Mapping[str, Any]]:
    """Read seed recipes from a JSON array of ``{"name", "ingredients"}`` objects."""

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise RuntimeError(f"Could not read recipe seed file '{path}': {exc}") from exc

    if not isinstance(data, list) or not all(isinstance(entry, dict) for entry in data):
        raise RuntimeError(f"Recipe seed file '{path}' must contain a JSON array of objects.")

    for position, entry in enumerate(data):
        try:
            validate_payload(RecipeFields, entry)
        except ValidationError as exc:
            raise RuntimeError(
                f"Recipe seed file '{path}' has an invalid entry at index {position}: {exc}"
            ) from exc

    return data


__all__ = ["DEFAULT_SEED_RECIPES", "InMemoryRecipeStorage", "RecipeRepository", "load_seed_file"]
