import secrets

from fastapi import Depends, Request

from folio.core.config import Settings, get_settings
from folio.core.services.credential_service import CLIENT_CREDENTIAL_COOKIE, resolve_credential
from folio.core.services.generative_service import GenerativeService, HttpProxy, LocalProxy
from folio.core.services.reference_service import ReferenceText
from folio.core.services.reveal_service import RevealRegistry
from folio.core.services.search_service import Proxy, SearchOrchestrator

SESSION_COOKIE = "folio_session"


def get_or_create_session_id(request: Request) -> tuple[str, bool]:
    existing = request.cookies.get(SESSION_COOKIE)
    if existing:
        return existing, False
    return secrets.token_urlsafe(16), True


def get_reference(request: Request) -> ReferenceText:
    return getattr(request.app.state, "reference", None) or ReferenceText()


def get_reveal_registry(request: Request) -> RevealRegistry:
    registry = getattr(request.app.state, "reveal_registry", None)
    if registry is None:
        registry = request.app.state.reveal_registry = RevealRegistry()
    return registry


def get_proxy(request: Request, settings: Settings = Depends(get_settings)) -> Proxy:
    if settings.proxy_url:
        return HttpProxy(settings.proxy_url, timeout=settings.gemini_timeout)
    api_key = resolve_credential(settings, request.cookies.get(CLIENT_CREDENTIAL_COOKIE))
    return LocalProxy(GenerativeService.from_settings(settings, api_key=api_key), settings.owner_name)


def get_search_orchestrator(
    reference: ReferenceText = Depends(get_reference),
    proxy: Proxy = Depends(get_proxy),
) -> SearchOrchestrator:
    return SearchOrchestrator(reference=reference, proxy=proxy)
