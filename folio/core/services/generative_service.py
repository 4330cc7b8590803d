# folio/core/services/generative_service.py
import logging
from typing import Any, Dict, Optional

import requests

from folio.core.config import Settings
from folio.core.errors import ConfigurationError, SearchServiceError

logger = logging.getLogger(__name__)


def build_prompt(owner_name: str, query: str, cv_text: Optional[str] = None, context_text: Optional[str] = None) -> str:
    cv_section = f"CV Content:\n{cv_text}\n" if cv_text else ""
    context_section = f"Additional Context:\n{context_text}\n" if context_text else ""
    return (
        f"You are an AI assistant helping to answer questions about {owner_name}'s CV and experience. \n"
        "Use ONLY the information provided below from the CV and additional context. "
        "Do not use any information outside of what is provided.\n\n"
        f"{cv_section}{context_section}"
        f"Please answer the following question using ONLY the information above: {query}"
    )


class GenerativeService:
    """Forwards a prompt to the Gemini generateContent endpoint with a server-held key."""

    def __init__(self, api_key: str, model: str = "gemini-2.5-flash",
                 host: str = "generativelanguage.googleapis.com", timeout: Optional[float] = None):
        self.api_key = api_key
        self.model = model
        self.host = host
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings, api_key: Optional[str] = None) -> "GenerativeService":
        return cls(
            api_key=settings.gemini_api_key if api_key is None else api_key,
            model=settings.gemini_model,
            host=settings.gemini_api_host,
            timeout=settings.gemini_timeout,
        )

    @property
    def endpoint(self) -> str:
        return f"https://{self.host}/v1beta/models/{self.model}:generateContent"

    def generate(self, prompt: str) -> Dict[str, Any]:
        """Send one prompt and return the API's JSON body unchanged."""
        if not self.api_key:
            raise ConfigurationError("API key not configured")
        resp = requests.post(
            self.endpoint,
            params={"key": self.api_key},
            json={"contents": [{"parts": [{"text": prompt}]}]},
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        if not resp.ok:
            raise SearchServiceError(f"API error: {resp.status_code}")
        return resp.json()


class LocalProxy:
    """Runs the proxy in-process: builds the prompt and calls the generative API."""

    def __init__(self, service: GenerativeService, owner_name: str):
        self.service = service
        self.owner_name = owner_name

    def forward(self, query: str, cv_text: str = "", context_text: str = "") -> Dict[str, Any]:
        prompt = build_prompt(self.owner_name, query, cv_text, context_text)
        return self.service.generate(prompt)


class HttpProxy:
    """Posts the search payload to a separately deployed proxy endpoint."""

    def __init__(self, url: str, timeout: Optional[float] = None):
        self.url = url
        self.timeout = timeout

    def forward(self, query: str, cv_text: str = "", context_text: str = "") -> Dict[str, Any]:
        try:
            resp = requests.post(
                self.url,
                json={"query": query, "cvText": cv_text, "contextText": context_text},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SearchServiceError(str(e)) from e
        if not resp.ok:
            raise SearchServiceError(f"Search service error: {resp.status_code}")
        try:
            return resp.json()
        except ValueError as e:
            raise SearchServiceError(f"Invalid JSON from search service: {e}") from e
