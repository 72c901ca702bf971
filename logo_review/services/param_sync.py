"""
Two-way mapping between SearchParams and a URL query string.
Pure string transforms; nothing here touches I/O.
"""

from __future__ import annotations
from typing import Any, Dict
from urllib.parse import parse_qsl, urlencode
import logging

from logo_review.core.config import settings
from logo_review.models.search_params import SearchParams

logger = logging.getLogger(__name__)

SEARCH_KEYS = ("count", "logo_id", "index")

DEFAULT_SEARCH_PARAMS = SearchParams(count=settings.DEFAULT_COUNT)


def _parse(query: str) -> Dict[str, str]:
    return dict(parse_qsl(query.lstrip("?"), keep_blank_values=True))


def to_query_string(
    defaults: SearchParams,
    current: SearchParams,
    base_query: str = "",
) -> str:
    """
    Serialize current into a query string.
    Keys that are empty or equal to their default are dropped; keys of
    base_query that are not search keys are kept as they are.
    """
    params = _parse(base_query)
    for key in SEARCH_KEYS:
        value = getattr(current, key)
        if not value or value == getattr(defaults, key):
            params.pop(key, None)
        else:
            params[key] = str(value)
    return urlencode(params)


def from_query_string(defaults: SearchParams, query: str) -> SearchParams:
    """
    Read SearchParams out of a query string.
    A key that is present (and non-empty) always overrides its default.
    """
    parsed = _parse(query)
    values: Dict[str, Any] = {}
    for key in SEARCH_KEYS:
        raw = parsed.get(key)
        values[key] = raw if raw else getattr(defaults, key)

    try:
        values["count"] = int(values["count"])
        if values["count"] < 1:
            raise ValueError("count must be >= 1")
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid count %r in query string", values["count"])
        values["count"] = defaults.count

    if values["logo_id"] is not None and not str(values["logo_id"]).isdecimal():
        logger.warning("Ignoring invalid logo_id %r in query string", values["logo_id"])
        values["logo_id"] = defaults.logo_id

    return SearchParams(**values)
