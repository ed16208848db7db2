"""Request models for API endpoints."""

from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field, field_validator


class ImageLookupRequest(BaseModel):
    """Request model for image lookups by subject id."""

    ids: List[Union[int, str]] = Field(..., max_length=1000, description="Subject ids")

    @field_validator("ids")
    @classmethod
    def validate_ids(cls, v: List[Union[int, str]]) -> List[Union[int, str]]:
        """Strip string ids and drop blank ones."""
        cleaned = []
        for subject_id in v:
            if isinstance(subject_id, str):
                subject_id = subject_id.strip()
                if not subject_id:
                    continue
            cleaned.append(subject_id)
        return cleaned


class LoadRecordsRequest(BaseModel):
    """Request model for loading subject records."""

    records: List[Dict[str, Any]] = Field(..., description="Rows with id, name and image_id")
