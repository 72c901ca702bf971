from __future__ import annotations
from typing import Dict, Iterable, List, Optional
import logging

import httpx
from pydantic import ValidationError

from logo_review.adapters.robotoff.client import RobotoffClient
from logo_review.core.errors import SearchFailure
from logo_review.models.logo import (
    LogoImage,
    LogoImagesResponse,
    LogoMetadata,
    LogoRecord,
    NeighborResult,
    NeighborSearchResponse,
)

logger = logging.getLogger(__name__)


class LogoSearchService:
    """
    Orchestrates the two-stage logo fetch: neighbor search, then image
    metadata for the returned ids, joined into LogoRecords.
    """

    def __init__(self, client: Optional[RobotoffClient] = None) -> None:
        self.client = client or RobotoffClient()

    async def _search(self, logo_id: Optional[str], index: Optional[str], count: int) -> List[NeighborResult]:
        payload = await self.client.search_neighbors(logo_id, index, count)
        return NeighborSearchResponse.model_validate(payload).results

    async def _images(self, ids: List[int]) -> Dict[int, LogoMetadata]:
        payload = await self.client.fetch_logo_images(ids)
        logos = LogoImagesResponse.model_validate(payload).logos
        return {logo.id: logo for logo in logos}

    def _to_record(self, neighbor: NeighborResult, meta: LogoMetadata) -> LogoRecord:
        full_url = self.client.image_url(meta.image.source_image)
        return LogoRecord(
            id=neighbor.logo_id,
            distance=neighbor.distance,
            image=LogoImage(
                source_image=meta.image.source_image,
                bounding_box=meta.bounding_box,
                src=self.client.crop_url(full_url, meta.bounding_box),
            ),
            annotation_type=meta.annotation_type,
            annotation_value=meta.annotation_value,
        )

    async def load_logos(
        self,
        target_logo_id: Optional[str],
        index: Optional[str],
        count: int,
        already_loaded: Iterable[LogoRecord] = (),
    ) -> List[LogoRecord]:
        """
        Fetch up to `count` neighbors and return records for the ones not
        already loaded. Any failure is raised as SearchFailure; no partial
        result is returned.
        """
        try:
            # 1) Ranked neighbors
            neighbors = await self._search(target_logo_id, index, count)

            # 2) A reference logo that is not indexed yet won't find itself at distance 0
            if target_logo_id and (not neighbors or neighbors[0].distance != 0):
                neighbors.insert(0, NeighborResult(logo_id=int(target_logo_id), distance=0))

            # 3) Drop what the caller already holds (and repeats within this batch)
            seen = {logo.id for logo in already_loaded}
            fresh: List[NeighborResult] = []
            for n in neighbors:
                if n.logo_id in seen:
                    continue
                seen.add(n.logo_id)
                fresh.append(n)

            if not fresh:
                return []

            # 4) Image metadata for exactly the surviving ids
            images = await self._images([n.logo_id for n in fresh])
        except httpx.HTTPError as e:
            logger.warning("Logo search failed for logo_id=%s index=%s: %s", target_logo_id, index, e)
            raise SearchFailure(str(e)) from e
        except ValueError as e:
            logger.warning("Malformed logo search payload: %s", e)
            raise SearchFailure("malformed response from logo service") from e

        # 5) Strict join
        records: List[LogoRecord] = []
        for n in fresh:
            meta = images.get(n.logo_id)
            if meta is None:
                raise SearchFailure(f"no image metadata for logo {n.logo_id}")
            records.append(self._to_record(n, meta))

        logger.info("Loaded %d logos (logo_id=%s, index=%s, count=%d)", len(records), target_logo_id, index, count)
        return records
