"""
Tests for the in-memory session registry.
"""
from logo_review.models.search_params import SearchParams
from logo_review.repositories.memory.session_repo import SessionRepo
from logo_review.services.annotation_session import LogoAnnotationSession
from logo_review.services.logo_search_service import LogoSearchService


def make_session(robotoff_client) -> LogoAnnotationSession:
    return LogoAnnotationSession(SearchParams(), search=LogoSearchService(robotoff_client))


class TestSessionRepo:

    def test_add_assigns_id(self, robotoff_client):
        repo = SessionRepo(max_sessions=5)
        session = repo.add(make_session(robotoff_client))
        assert session.session_id
        assert repo.get(session.session_id) is session

    def test_delete(self, robotoff_client):
        repo = SessionRepo(max_sessions=5)
        session = repo.add(make_session(robotoff_client))
        assert repo.delete(session.session_id) is True
        assert repo.delete(session.session_id) is False
        assert repo.get(session.session_id) is None

    def test_oldest_sessions_are_evicted(self, robotoff_client):
        repo = SessionRepo(max_sessions=3)
        sessions = [repo.add(make_session(robotoff_client)) for _ in range(5)]

        assert len(repo.list()) == 3
        assert repo.get(sessions[0].session_id) is None
        assert repo.get(sessions[1].session_id) is None
        assert [s.session_id for s in repo.list()] == [s.session_id for s in sessions[2:]]
