"""
Logo models.
Wire payloads from the search service are validated into these before
anything else touches them.
"""

from __future__ import annotations
from pydantic import BaseModel, Field, model_validator
from typing import Any, List, Optional, Tuple

BoundingBox = Tuple[float, float, float, float]


class NeighborResult(BaseModel):
    """One ranked hit from the neighbor search."""
    logo_id: int
    distance: float = Field(ge=0)


class NeighborSearchResponse(BaseModel):
    results: List[NeighborResult] = Field(default_factory=list)


class SourceImage(BaseModel):
    source_image: str
    bounding_box: Optional[BoundingBox] = None


class LogoMetadata(BaseModel):
    """
    Image metadata for one logo, as returned by the logo images endpoint.
    The bounding box may sit on the logo itself or on its image; it is
    normalised onto the logo.
    """
    id: int
    image: SourceImage
    bounding_box: BoundingBox
    annotation_type: Optional[str] = None
    annotation_value: Optional[str] = None

    @model_validator(mode='before')
    @classmethod
    def lift_bounding_box(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("bounding_box") is None:
            image = data.get("image") or {}
            if isinstance(image, dict) and image.get("bounding_box") is not None:
                data = {**data, "bounding_box": image["bounding_box"]}
        return data


class LogoImagesResponse(BaseModel):
    logos: List[LogoMetadata] = Field(default_factory=list)


class LogoImage(BaseModel):
    source_image: str
    bounding_box: BoundingBox
    src: str = Field(description="Cropped image URL")


class LogoRecord(BaseModel):
    """
    A logo loaded into a review session.
    distance is only meaningful for the search that produced it.
    """
    id: int
    distance: float
    image: LogoImage
    selected: bool = False
    annotation_type: Optional[str] = None
    annotation_value: Optional[str] = None

    model_config = {"frozen": True}


class AnnotationData(BaseModel):
    """The (type, value) pair applied to every selected logo."""
    type: str = ""
    value: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.type or not self.value


class AnnotationRequest(BaseModel):
    logo_id: int
    type: str
    value: str
