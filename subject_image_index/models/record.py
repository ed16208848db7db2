"""Subject record model."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def coerce_subject_id(value: Any) -> Any:
    """
    Coerce an integral id-like value to int.

    Numeric strings such as ``" 42 "`` or ``"42.0"`` and integral floats
    become ints. Other non-string values are returned unchanged.

    Raises:
        ValueError: If a string or float is not an integral number
    """
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            value = float(text)
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"id must be an integer, got {value!r}")
        return int(value)
    return value


class SubjectRecord(BaseModel):
    """
    One row of the subject dataset.

    Columns other than ``id``, ``name`` and ``image_id`` are kept as opaque
    extra fields. Records are immutable once loaded and identified by ``id``.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int = Field(..., description="Subject identifier")
    name: str = Field(..., description="Display name")
    image_id: Optional[str] = Field(None, description="Associated image reference")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Coerce numeric strings and integral floats to int."""
        return coerce_subject_id(v)

    @property
    def extra_fields(self) -> Dict[str, Any]:
        """Source columns that are not part of the core schema."""
        return dict(self.model_extra or {})

    def image_ref(self) -> Dict[str, Any]:
        """Project the record to its ``{id, image_id}`` pair."""
        return {"id": self.id, "image_id": self.image_id}
