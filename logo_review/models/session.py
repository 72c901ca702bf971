from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Optional

from .logo import LogoRecord
from .search_params import SearchParams


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class LoadMoreResult(BaseModel):
    """
    Outcome of a "load more" request.
    - accepted: False when the request would exceed the count cap
    - failed: the search failed; previously loaded logos were kept
    - appended: number of logos added to the session
    - discarded: a full reload started meanwhile; results were dropped
    """
    accepted: bool
    failed: bool = False
    appended: int = 0
    discarded: bool = False
    records: List[LogoRecord] = Field(default_factory=list, exclude=True)


class SessionView(BaseModel):
    """Read-only snapshot of a review session."""
    session_id: Optional[str] = None
    params: SearchParams
    query_string: str
    status: LoadStatus
    is_loading: bool
    is_refreshing: bool = False
    logos: List[LogoRecord] = Field(default_factory=list)
    selected_ids: List[int] = Field(default_factory=list)
    reference_logo: Optional[LogoRecord] = None
    can_unselect_all: bool = False
    can_load_more: bool = False
    extra_requested: int = 0
    default_annotation_type: str = ""
    default_annotation_value: str = ""
