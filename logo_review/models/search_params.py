from __future__ import annotations
from pydantic import BaseModel, Field, field_validator
from typing import Any, Optional


class SearchParams(BaseModel):
    """
    Identity of a logo search.
    - logo_id: reference logo (integer as string), optional
    - index: embedding index to query when no reference logo is given
    - count: number of neighbors to request

    Frozen: a new search is a new SearchParams, never an edited one.
    """
    logo_id: Optional[str] = None
    index: Optional[str] = None
    count: int = Field(default=50, ge=1)

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator('logo_id', 'index', mode='before')
    @classmethod
    def empty_to_none(cls, v: Any) -> Optional[str]:
        """Empty strings mean "not set"."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator('logo_id')
    @classmethod
    def validate_logo_id(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.isdecimal():
            raise ValueError("logo_id must be an integer")
        return v

    @property
    def reference_logo_id(self) -> Optional[int]:
        return int(self.logo_id) if self.logo_id else None
