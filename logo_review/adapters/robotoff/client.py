from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import urlencode
import logging

import httpx

from logo_review.core.config import settings
from logo_review.models.logo import BoundingBox

logger = logging.getLogger(__name__)


class RobotoffClient:
    """
    Async client for the Robotoff logo endpoints.
    Returns decoded JSON; validation into models is left to the services.
    """

    def __init__(
        self,
        base_url: str | None = None,
        image_base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.ROBOTOFF_URL).rstrip("/")
        self.image_base_url = (image_base_url or settings.IMAGE_BASE_URL).rstrip("/")
        self._client = httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.HTTP_TIMEOUT,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def search_neighbors(
        self,
        logo_id: Optional[str],
        index: Optional[str],
        count: int,
    ) -> Dict[str, Any]:
        url = f"{self.base_url}/ann/search"
        if logo_id:
            url = f"{url}/{logo_id}"
        params: Dict[str, Any] = {"count": count}
        if index:
            params["index"] = index
        r = await self._client.get(url, params=params)
        r.raise_for_status()
        return r.json()

    async def fetch_logo_images(self, ids: Sequence[int]) -> Dict[str, Any]:
        r = await self._client.get(
            f"{self.base_url}/images/logos",
            params={"logo_ids": ",".join(str(i) for i in ids)},
        )
        r.raise_for_status()
        return r.json()

    async def submit_annotations(self, batch: List[Dict[str, Any]]) -> None:
        r = await self._client.post(
            f"{self.base_url}/images/logos/annotate",
            json={"annotations": batch},
        )
        r.raise_for_status()
        logger.info("Submitted %d logo annotations", len(batch))

    # --------------- URL helpers (no network) ---------------
    def image_url(self, source_image: str) -> str:
        if not source_image.startswith("/"):
            source_image = f"/{source_image}"
        return f"{self.image_base_url}{source_image}"

    def crop_url(self, full_image_url: str, bounding_box: BoundingBox) -> str:
        y_min, x_min, y_max, x_max = bounding_box
        query = urlencode({
            "image_url": full_image_url,
            "y_min": y_min,
            "x_min": x_min,
            "y_max": y_max,
            "x_max": x_max,
        })
        return f"{self.base_url}/images/crop?{query}"
