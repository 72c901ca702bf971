"""
Review session state machine.

    IDLE -> LOADING -> READY | FAILED

Every full load (new params, refresh) increments `generation`. A result is
only applied if no other full load started while it was in flight, so the
latest full load always wins. "Load more" is checked the same way and
appends to whatever list is current when it lands.
"""

from __future__ import annotations
from typing import List, Optional
import logging

from logo_review.core.config import settings
from logo_review.core.errors import SearchFailure
from logo_review.models.logo import AnnotationData, AnnotationRequest, LogoRecord
from logo_review.models.search_params import SearchParams
from logo_review.models.session import LoadMoreResult, LoadStatus, SessionView
from logo_review.services.annotation_submitter import AnnotationSubmitter
from logo_review.services.logo_search_service import LogoSearchService
from logo_review.services.pagination import PaginationController
from logo_review.services.param_sync import DEFAULT_SEARCH_PARAMS, to_query_string
from logo_review.services.selection_store import SelectionStore

logger = logging.getLogger(__name__)


class LogoAnnotationSession:
    def __init__(
        self,
        params: Optional[SearchParams] = None,
        search: Optional[LogoSearchService] = None,
        submitter: Optional[AnnotationSubmitter] = None,
        session_id: Optional[str] = None,
        defaults: SearchParams = DEFAULT_SEARCH_PARAMS,
        max_count: int | None = None,
    ) -> None:
        self.session_id = session_id
        self.defaults = defaults
        self.params = params or defaults
        self.search = search or LogoSearchService()
        self.submitter = submitter or AnnotationSubmitter(self.search.client)
        self.selection = SelectionStore(self.params.reference_logo_id)
        self.pagination = PaginationController(self.search, self.params.count, max_count)

        self.records: List[LogoRecord] = []
        self.status = LoadStatus.IDLE
        self.generation = 0
        self.refreshing = False
        self._pending_more = 0

    # --------------- loading ---------------
    async def set_params(self, params: SearchParams) -> bool:
        """Switch to a new search. Same params on a loaded session do nothing."""
        if params == self.params and self.status != LoadStatus.IDLE:
            return self.status == LoadStatus.READY
        self.params = params
        return await self.reload()

    async def reload(self) -> bool:
        return await self._full_load(clear=True)

    async def refresh(self) -> bool:
        """Reload the current search, keeping the old logos visible meanwhile."""
        self.refreshing = True
        try:
            return await self._full_load(clear=False)
        finally:
            self.refreshing = False

    async def _full_load(self, clear: bool) -> bool:
        self.generation += 1
        generation = self.generation
        params = self.params
        self.selection = SelectionStore(params.reference_logo_id)
        self.pagination.reset(params.count)
        if clear:
            self.records = []
            self.status = LoadStatus.LOADING

        try:
            logos = await self.search.load_logos(params.logo_id, params.index, params.count)
        except SearchFailure as e:
            if generation != self.generation:
                return False
            logger.warning("Search failed for %s: %s", params, e)
            self.records = []
            self.status = LoadStatus.FAILED
            return False

        if generation != self.generation:
            logger.debug("Discarding stale results of generation %d", generation)
            return False
        self.records = self.selection.pristine(logos)
        self.status = LoadStatus.READY
        return True

    async def load_more(self, delta: int | None = None) -> LoadMoreResult:
        delta = delta or settings.LOAD_MORE_STEP
        if self.status != LoadStatus.READY:
            return LoadMoreResult(accepted=False)

        generation = self.generation
        self._pending_more += 1
        try:
            result = await self.pagination.request_more(self.params, self.records, delta)
        finally:
            self._pending_more -= 1

        if not result.records:
            return result
        if generation != self.generation:
            logger.debug("Discarding load-more results of generation %d", generation)
            return LoadMoreResult(accepted=True, discarded=True)

        # Another load-more may have landed first
        held = {logo.id for logo in self.records}
        fresh = [logo for logo in result.records if logo.id not in held]
        self.records = [*self.records, *fresh]
        return LoadMoreResult(accepted=True, appended=len(fresh), records=fresh)

    # --------------- selection ---------------
    def toggle(self, logo_id: int) -> None:
        self.records = self.selection.toggle(self.records, logo_id)

    def select_all(self) -> None:
        self.records = self.selection.select_all(self.records)

    def unselect_all(self) -> None:
        self.records = self.selection.unselect_all(self.records)

    @property
    def selected_ids(self) -> List[int]:
        return self.selection.selected_ids(self.records)

    @property
    def reference_logo(self) -> Optional[LogoRecord]:
        return self.selection.reference_logo(self.records)

    # --------------- annotation ---------------
    async def submit(self, data: Optional[AnnotationData]) -> List[AnnotationRequest]:
        """
        Annotate every selected logo. On success only the reference logo
        stays selected; SubmitFailure propagates with the selection intact.
        """
        batch = await self.submitter.submit(self.selected_ids, data)
        if batch:
            self.records = self.selection.pristine(self.records)
        return batch

    # --------------- views ---------------
    @property
    def is_loading(self) -> bool:
        return self.status == LoadStatus.LOADING or self._pending_more > 0

    def query_string(self, base_query: str = "") -> str:
        return to_query_string(self.defaults, self.params, base_query)

    def view(self) -> SessionView:
        reference = self.reference_logo
        return SessionView(
            session_id=self.session_id,
            params=self.params,
            query_string=self.query_string(),
            status=self.status,
            is_loading=self.is_loading,
            is_refreshing=self.refreshing,
            logos=self.records,
            selected_ids=self.selected_ids,
            reference_logo=reference,
            can_unselect_all=self.selection.can_unselect_all(self.records),
            can_load_more=self.status == LoadStatus.READY and not self.is_loading and self.pagination.can_request_more(settings.LOAD_MORE_STEP),
            extra_requested=self.pagination.extra_requested,
            default_annotation_type=(reference.annotation_type if reference else None) or "",
            default_annotation_value=(reference.annotation_value if reference else None) or "",
        )
