from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Recipe:
    """Domain object representing a stored recipe."""

    id: str
    name: str
    ingredients: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "ingredients": list(self.ingredients),
        }

    def copy(self) -> "Recipe":
        return Recipe(id=self.id, name=self.name, ingredients=list(self.ingredients))


__all__ = ["Recipe"]
