from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------- Hook options ----------
class SlugOptions(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    sluggable: tuple[str, ...] = Field(..., min_length=1)
    dest: str = Field("slug", min_length=1)
    id_field: str = Field(..., min_length=1)
    allow_duplication: bool = False
    invalidate_on_duplicate: bool = False
    # se evalúa en cada invocación con el registro como argumento
    scope: Callable[[Any], dict[str, Any]] | None = None
    duplicate_message: str = Field(..., min_length=1)

    @field_validator("sluggable", mode="before")
    @classmethod
    def normalize_sluggable(cls, value: Any) -> Any:
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("sluggable")
    @classmethod
    def validate_sluggable(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if any(not name for name in value):
            raise ValueError("sluggable field names must be non-empty")
        return value
