from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class RecipeFields(BaseModel):
    """Fields a client supplies when creating or replacing a recipe."""

    model_config = ConfigDict(extra="ignore")

    name: StrictStr = Field(..., min_length=1)
    ingredients: List[StrictStr]

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        # Reject blank names but keep the value exactly as sent.
        if not value.strip():
            raise ValueError("name must contain at least one non-whitespace character")
        return value

    @field_validator("ingredients", mode="before")
    @classmethod
    def ingredients_ordered(cls, value: Any) -> Any:
        # Sets would validate as lists but lose the client's ordering.
        if not isinstance(value, (list, tuple)):
            raise ValueError("ingredients must be an ordered list of strings")
        return value


class RecipeUpdate(RecipeFields):
    """Update payload; ``id`` is optional but must match the target when sent."""

    id: Optional[StrictStr] = None


def validate_payload(model: Type[ModelT], data: Any) -> ModelT:
    """Validate ``data`` against ``model`` or raise :class:`ValidationError`."""

    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object.")

    try:
        return model.model_validate(dict(data))
    except PydanticValidationError as exc:
        details = [_describe(error) for error in exc.errors()]
        message = "; ".join(detail["message"] for detail in details)
        raise ValidationError(message, details=details) from exc


def _describe(error: Mapping[str, Any]) -> Dict[str, str]:
    field = ".".join(str(part) for part in error["loc"]) or "body"
    if error["type"] == "missing":
        message = f"Missing `{field}` in request body"
    else:
        message = f"Invalid `{field}`: {error['msg']}"
    return {"field": field, "message": message}


__all__ = ["RecipeFields", "RecipeUpdate", "validate_payload"]
