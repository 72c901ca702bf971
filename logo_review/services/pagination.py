from __future__ import annotations
from typing import Sequence
import logging

from logo_review.core.config import settings
from logo_review.core.errors import SearchFailure
from logo_review.models.logo import LogoRecord
from logo_review.models.search_params import SearchParams
from logo_review.models.session import LoadMoreResult
from logo_review.services.logo_search_service import LogoSearchService

logger = logging.getLogger(__name__)


class PaginationController:
    """
    Tracks how many logos were requested beyond the base count.
    The total requested count never goes above max_count.
    """

    def __init__(
        self,
        search: LogoSearchService,
        base_count: int | None = None,
        max_count: int | None = None,
    ) -> None:
        self.search = search
        self.base_count = base_count or settings.DEFAULT_COUNT
        self.max_count = max_count or settings.MAX_COUNT
        self.extra_requested = 0

    @property
    def requested_count(self) -> int:
        return self.base_count + self.extra_requested

    def can_request_more(self, delta: int) -> bool:
        return delta > 0 and self.requested_count + delta <= self.max_count

    def reset(self, base_count: int) -> None:
        self.base_count = base_count
        self.extra_requested = 0

    async def request_more(
        self,
        params: SearchParams,
        records: Sequence[LogoRecord],
        delta: int,
    ) -> LoadMoreResult:
        """
        Re-run the search with a larger count and return the logos that are
        not in `records` yet, unselected. A failed search keeps the caller's
        data: the result reports failed=True and carries nothing.
        """
        if not self.can_request_more(delta):
            logger.info("Load more rejected: %d + %d exceeds %d", self.requested_count, delta, self.max_count)
            return LoadMoreResult(accepted=False)

        self.extra_requested += delta
        try:
            new_logos = await self.search.load_logos(
                params.logo_id,
                params.index,
                self.requested_count,
                records,
            )
        except SearchFailure as e:
            logger.warning("Load more failed, keeping %d loaded logos: %s", len(records), e)
            return LoadMoreResult(accepted=True, failed=True)

        new_logos = [logo.model_copy(update={"selected": False}) for logo in new_logos]
        return LoadMoreResult(accepted=True, appended=len(new_logos), records=new_logos)
