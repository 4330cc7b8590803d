# folio/api/v1/endpoints/search.py
import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import StreamingResponse

from folio.core.config import Settings, get_settings
from folio.core.errors import FolioError
from folio.core.services.reveal_service import RevealCancelled, RevealRegistry, reveal_chunks
from folio.core.services.search_service import SearchOrchestrator
from folio.core.utils.markdown import markdown_to_html
from folio.dependencies import (
    SESSION_COOKIE,
    get_or_create_session_id,
    get_reveal_registry,
    get_search_orchestrator,
)
from folio.models.schemas import SearchRequest, SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _event(event_type: str, content: str = "") -> str:
    return f"data: {json.dumps({'type': event_type, 'content': content})}\n\n"


@router.post("/", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    orchestrator: SearchOrchestrator = Depends(get_search_orchestrator),
):
    """Answer one question about the CV; FolioError failures become {"error": ...} responses."""
    outcome = await run_in_threadpool(orchestrator.search, request.query)
    if outcome.cleared:
        return SearchResponse(query="", cleared=True)
    return SearchResponse(
        query=outcome.query,
        answer=outcome.answer,
        html=str(markdown_to_html(outcome.answer)),
    )


@router.post("/stream")
async def search_stream(
    http_request: Request,
    request: SearchRequest,
    orchestrator: SearchOrchestrator = Depends(get_search_orchestrator),
    registry: RevealRegistry = Depends(get_reveal_registry),
    settings: Settings = Depends(get_settings),
):
    """Answer a question and reveal it chunk by chunk as server-sent events.

    A newer search from the same session cancels a reveal still in progress.
    """
    session_id, created = get_or_create_session_id(http_request)

    async def event_generator():
        token = registry.start(session_id)
        try:
            try:
                outcome = await run_in_threadpool(orchestrator.search, request.query)
            except FolioError as e:
                logger.error("Search error: %s", e)
                yield _event("error", e.user_message())
                return
            if outcome.cleared:
                yield _event("cleared")
                return
            async for chunk in reveal_chunks(
                outcome.answer,
                token,
                chunk_size=settings.reveal_chunk_size,
                interval=settings.reveal_interval,
            ):
                yield _event("chunk", chunk)
            yield _event("html", str(markdown_to_html(outcome.answer)))
        except RevealCancelled:
            yield _event("cancelled")
        finally:
            registry.finish(session_id, token)

    response = StreamingResponse(event_generator(), media_type="text/event-stream")
    if created:
        response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response
