from __future__ import annotations

from typing import Any, Dict, List, Optional


class RecipeError(Exception):
    """Base class for failures reported by the recipe store."""

    code = "recipe_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message}


class ValidationError(RecipeError, ValueError):
    """Raised when a recipe payload has the wrong shape."""

    code = "validation_error"

    def __init__(self, message: str, details: Optional[List[Dict[str, str]]] = None) -> None:
        super().__init__(message)
        self.details = details or []

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.details:
            body["details"] = self.details
        return body


class IdMismatchError(ValidationError):
    """Raised when an update body names a different recipe than its path."""

    code = "id_mismatch"

    def __init__(self, path_id: str, body_id: str) -> None:
        super().__init__(
            f"Request path id ({path_id}) and request body id ({body_id}) must match"
        )
        self.path_id = path_id
        self.body_id = body_id


class NotFoundError(RecipeError, KeyError):
    """Raised when no recipe exists for the requested id."""

    code = "not_found"

    def __init__(self, recipe_id: str) -> None:
        super().__init__(f"Recipe '{recipe_id}' does not exist.")
        self.recipe_id = recipe_id


__all__ = ["IdMismatchError", "NotFoundError", "RecipeError", "ValidationError"]
