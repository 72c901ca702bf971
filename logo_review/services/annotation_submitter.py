from __future__ import annotations
from typing import List, Optional, Sequence
import logging

import httpx

from logo_review.adapters.robotoff.client import RobotoffClient
from logo_review.core.config import settings
from logo_review.core.errors import SubmitFailure
from logo_review.models.logo import AnnotationData, AnnotationRequest

logger = logging.getLogger(__name__)


class AnnotationSubmitter:
    """
    Applies one (type, value) annotation to a batch of logos.
    No retry: a failed batch is raised to the caller as SubmitFailure.
    """

    def __init__(self, client: Optional[RobotoffClient] = None, dev_mode: bool | None = None) -> None:
        self.client = client or RobotoffClient()
        self.dev_mode = settings.DEV_MODE if dev_mode is None else dev_mode

    def build(self, selected_ids: Sequence[int], data: AnnotationData) -> List[AnnotationRequest]:
        return [
            AnnotationRequest(logo_id=logo_id, type=data.type, value=data.value)
            for logo_id in selected_ids
        ]

    async def submit(
        self,
        selected_ids: Sequence[int],
        data: Optional[AnnotationData],
    ) -> List[AnnotationRequest]:
        """Returns the dispatched batch, or [] when there was nothing to send."""
        if data is None or data.is_empty:
            return []

        batch = self.build(selected_ids, data)
        if not batch:
            return []

        if self.dev_mode:
            logger.info("DEV_MODE: not sending %d annotations: %s", len(batch), [a.model_dump() for a in batch])
            return batch

        try:
            await self.client.submit_annotations([a.model_dump() for a in batch])
        except httpx.HTTPError as e:
            logger.error("Annotation batch of %d failed: %s", len(batch), e)
            raise SubmitFailure(str(e)) from e
        return batch
