"""
Tests for "load more": the count cap and additive results.
"""
import pytest

from logo_review.models.search_params import SearchParams
from logo_review.services.logo_search_service import LogoSearchService
from logo_review.services.pagination import PaginationController


@pytest.fixture
def search(robotoff_client):
    return LogoSearchService(robotoff_client)


@pytest.fixture
def controller(search):
    return PaginationController(search, base_count=50, max_count=500)


class TestCap:

    def test_can_request_more(self, controller):
        assert controller.can_request_more(50) is True
        assert controller.can_request_more(450) is True
        assert controller.can_request_more(451) is False
        assert controller.can_request_more(0) is False

    @pytest.mark.asyncio
    async def test_requested_count_never_exceeds_500(self, controller, fake_robotoff):
        params = SearchParams()
        accepted = []
        for _ in range(12):
            result = await controller.request_more(params, [], 50)
            accepted.append(result.accepted)
            assert controller.requested_count <= 500

        assert accepted == [True] * 9 + [False] * 3
        assert controller.extra_requested == 450
        counts = [int(r.url.params["count"]) for r in fake_robotoff.calls("/ann/search")]
        assert counts == list(range(100, 501, 50))

    @pytest.mark.asyncio
    async def test_rejected_request_changes_nothing(self, controller, fake_robotoff):
        controller.extra_requested = 440
        result = await controller.request_more(SearchParams(), [], 50)
        assert result.accepted is False
        assert controller.extra_requested == 440
        assert fake_robotoff.requests == []

    def test_reset(self, controller):
        controller.extra_requested = 100
        controller.reset(80)
        assert controller.extra_requested == 0
        assert controller.requested_count == 80


class TestRequestMore:

    @pytest.mark.asyncio
    async def test_overlap_is_not_appended_twice(self, controller, search, fake_robotoff):
        """10 of the 50 new results are already loaded -> 40 appended."""
        fake_robotoff.set_results(range(1, 51))
        loaded = await search.load_logos(None, None, 50)

        fake_robotoff.set_results(range(41, 91))
        result = await controller.request_more(SearchParams(), loaded, 50)

        assert result.accepted is True
        assert result.failed is False
        assert result.appended == 40
        assert [l.id for l in result.records] == list(range(51, 91))
        assert controller.extra_requested == 50

    @pytest.mark.asyncio
    async def test_appended_logos_are_unselected(self, controller, fake_robotoff):
        fake_robotoff.set_results([1, 2])
        result = await controller.request_more(SearchParams(), [], 50)
        assert [l.selected for l in result.records] == [False, False]

    @pytest.mark.asyncio
    async def test_failure_is_reported_not_raised(self, controller, search, fake_robotoff):
        fake_robotoff.set_results(range(1, 51))
        loaded = await search.load_logos(None, None, 50)
        fake_robotoff.search_status = 500

        result = await controller.request_more(SearchParams(), loaded, 50)

        assert result.accepted is True
        assert result.failed is True
        assert result.appended == 0
        assert result.records == []
        assert len(loaded) == 50

    @pytest.mark.asyncio
    async def test_non_json_reply_is_reported_not_raised(self, controller, fake_robotoff):
        fake_robotoff.html_for = "/ann/search"
        result = await controller.request_more(SearchParams(), [], 50)
        assert result.accepted is True
        assert result.failed is True
