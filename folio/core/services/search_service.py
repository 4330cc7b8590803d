# folio/core/services/search_service.py
import logging
from dataclasses import dataclass
from typing import Any, Dict, Protocol

import requests

from folio.core.errors import ContentNotLoadedError, SearchServiceError, UnexpectedResponseError
from folio.core.services.reference_service import ReferenceText

logger = logging.getLogger(__name__)


class Proxy(Protocol):
    def forward(self, query: str, cv_text: str = "", context_text: str = "") -> Dict[str, Any]:
        ...


@dataclass
class SearchOutcome:
    query: str
    answer: str = ""
    cleared: bool = False


def extract_answer(data: Any) -> str:
    """Pull candidates[0].content.parts[0].text out of a generateContent response."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise UnexpectedResponseError() from e
    if not isinstance(text, str):
        raise UnexpectedResponseError()
    return text


class SearchOrchestrator:
    """Turns one visitor question into one answer, with a single proxy call."""

    def __init__(self, reference: ReferenceText, proxy: Proxy):
        self.reference = reference
        self.proxy = proxy

    def search(self, query: str) -> SearchOutcome:
        query = (query or "").strip()
        if not query:
            return SearchOutcome(query="", cleared=True)

        if self.reference.is_empty:
            raise ContentNotLoadedError()

        logger.info("Received search query: %s", query)
        try:
            data = self.proxy.forward(
                query,
                cv_text=self.reference.cv_text,
                context_text=self.reference.context_text,
            )
        except (requests.RequestException, ValueError) as e:
            raise SearchServiceError(str(e)) from e
        return SearchOutcome(query=query, answer=extract_answer(data))
