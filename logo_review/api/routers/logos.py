from __future__ import annotations
from typing import Any, Dict
from fastapi import APIRouter, HTTPException, Request
from fastapi import status as http
from pydantic import BaseModel

from logo_review.adapters.robotoff.client import RobotoffClient
from logo_review.core.config import settings
from logo_review.core.errors import SubmitFailure
from logo_review.models.logo import AnnotationData
from logo_review.models.session import SessionView
from logo_review.repositories.memory.session_repo import SessionRepo
from logo_review.services.annotation_session import LogoAnnotationSession
from logo_review.services.annotation_submitter import AnnotationSubmitter
from logo_review.services.logo_search_service import LogoSearchService
from logo_review.services.param_sync import DEFAULT_SEARCH_PARAMS, from_query_string

router = APIRouter()
client = RobotoffClient()
search = LogoSearchService(client)
submitter = AnnotationSubmitter(client)
sessions = SessionRepo.instance()


class ParamsPayload(BaseModel):
    query: str = ""


class LoadMorePayload(BaseModel):
    delta: int = settings.LOAD_MORE_STEP


def _get_session(session_id: str) -> LogoAnnotationSession:
    session = sessions.get(session_id)
    if not session:
        raise HTTPException(http.HTTP_404_NOT_FOUND, detail="Session not found")
    return session


@router.post("/sessions", response_model=SessionView, status_code=http.HTTP_201_CREATED)
async def create_session(request: Request):
    """
    Start a review session from the page query string, e.g.
    POST /logos/sessions?logo_id=42&count=100
    """
    params = from_query_string(DEFAULT_SEARCH_PARAMS, request.url.query)
    session = sessions.add(LogoAnnotationSession(params, search=search, submitter=submitter))
    await session.reload()
    return session.view()


@router.get("/sessions/{session_id}", response_model=SessionView)
async def get_session(session_id: str):
    return _get_session(session_id).view()


@router.delete("/sessions/{session_id}", status_code=http.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str):
    if not sessions.delete(session_id):
        raise HTTPException(http.HTTP_404_NOT_FOUND, detail="Session not found")
    return None


@router.put("/sessions/{session_id}/params", response_model=SessionView)
async def set_params(session_id: str, payload: ParamsPayload):
    session = _get_session(session_id)
    await session.set_params(from_query_string(session.defaults, payload.query))
    return session.view()


@router.post("/sessions/{session_id}/refresh", response_model=SessionView)
async def refresh(session_id: str):
    session = _get_session(session_id)
    await session.refresh()
    return session.view()


@router.post("/sessions/{session_id}/selection/toggle/{logo_id}", response_model=SessionView)
async def toggle(session_id: str, logo_id: int):
    session = _get_session(session_id)
    session.toggle(logo_id)
    return session.view()


@router.post("/sessions/{session_id}/selection/select_all", response_model=SessionView)
async def select_all(session_id: str):
    session = _get_session(session_id)
    session.select_all()
    return session.view()


@router.post("/sessions/{session_id}/selection/unselect_all", response_model=SessionView)
async def unselect_all(session_id: str):
    session = _get_session(session_id)
    session.unselect_all()
    return session.view()


@router.post("/sessions/{session_id}/load_more")
async def load_more(session_id: str, payload: LoadMorePayload | None = None) -> Dict[str, Any]:
    session = _get_session(session_id)
    delta = payload.delta if payload else settings.LOAD_MORE_STEP
    if delta <= 0:
        raise HTTPException(http.HTTP_400_BAD_REQUEST, detail="delta must be positive")
    result = await session.load_more(delta)
    return {
        "result": result.model_dump(),
        "session": session.view().model_dump(mode="json"),
    }


@router.post("/sessions/{session_id}/annotate")
async def annotate(session_id: str, data: AnnotationData) -> Dict[str, Any]:
    session = _get_session(session_id)
    try:
        batch = await session.submit(data)
    except SubmitFailure as e:
        raise HTTPException(http.HTTP_502_BAD_GATEWAY, detail=f"Annotation failed: {e}")
    return {
        "submitted": len(batch),
        "session": session.view().model_dump(mode="json"),
    }
