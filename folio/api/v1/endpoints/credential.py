# folio/api/v1/endpoints/credential.py
from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from folio.core.config import Settings, get_settings
from folio.core.services.credential_service import CLIENT_CREDENTIAL_COOKIE
from folio.models.schemas import CredentialRequest, CredentialResponse

router = APIRouter()


@router.post("/", response_model=CredentialResponse)
def store_credential(request: CredentialRequest, response: Response, settings: Settings = Depends(get_settings)):
    """Keep a visitor-supplied API key in an HttpOnly cookie. Disabled unless ALLOW_CLIENT_CREDENTIAL is set."""
    if not settings.allow_client_credential:
        return JSONResponse(status_code=403, content={"error": "Client-held API keys are disabled"})
    key = request.key.strip()
    if not key:
        return JSONResponse(status_code=422, content={"error": "API key is required", "field": "key"})
    response.set_cookie(CLIENT_CREDENTIAL_COOKIE, key, httponly=True, samesite="strict")
    return CredentialResponse(stored=True)


@router.delete("/", response_model=CredentialResponse)
def clear_credential(response: Response):
    response.delete_cookie(CLIENT_CREDENTIAL_COOKIE)
    return CredentialResponse(stored=False)
