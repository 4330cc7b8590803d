# folio/api/v1/endpoints/proxy.py
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from folio.core.config import Settings, get_settings
from folio.core.services.generative_service import GenerativeService, LocalProxy
from folio.models.schemas import ErrorResponse, ProxyRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("", responses={500: {"model": ErrorResponse}})
async def forward_search(request: Request, settings: Settings = Depends(get_settings)):
    """Attach the server-held key to a CV question and relay the generative API's JSON body."""
    if not settings.gemini_api_key:
        return _error(500, "API key not configured")
    try:
        body = ProxyRequest.model_validate(await request.json())
        local = LocalProxy(GenerativeService.from_settings(settings), settings.owner_name)
        data = await run_in_threadpool(local.forward, body.query, body.cv_text or "", body.context_text or "")
    except Exception as e:
        logger.error("Proxy error: %s", e)
        return _error(500, str(e))
    return JSONResponse(content=data, headers={"Access-Control-Allow-Origin": "*"})


@router.api_route("", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"], include_in_schema=False)
async def reject_method():
    return _error(405, "Method not allowed")
