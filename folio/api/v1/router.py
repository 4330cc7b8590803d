# folio/api/v1/router.py
from fastapi import APIRouter
from folio.api.v1.endpoints import credential, proxy, reference, search, theme

api_router = APIRouter()
api_router.include_router(proxy.router, prefix="/proxy", tags=["Proxy"])
api_router.include_router(search.router, prefix="/search", tags=["Search"])
api_router.include_router(reference.router, prefix="/reference", tags=["Reference Text"])
api_router.include_router(theme.router, prefix="/theme", tags=["Theme"])
api_router.include_router(credential.router, prefix="/credential", tags=["Credential"])
