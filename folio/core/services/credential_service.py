# folio/core/services/credential_service.py
from typing import Optional

from folio.core.config import Settings

# Only honoured when Settings.allow_client_credential is on; the server key always wins.
CLIENT_CREDENTIAL_COOKIE = "GEMINI_API_KEY"


def resolve_credential(settings: Settings, client_key: Optional[str] = None) -> str:
    if settings.gemini_api_key:
        return settings.gemini_api_key
    if settings.allow_client_credential and client_key and client_key.strip():
        return client_key.strip()
    return ""
