# folio/core/services/reveal_service.py
import asyncio
import logging
from typing import AsyncIterator, Dict, Iterator

logger = logging.getLogger(__name__)


def chunk_text(text: str, chunk_size: int = 3) -> Iterator[str]:
    if chunk_size < 1:
        raise ValueError("chunk_size must be at least 1")
    for i in range(0, len(text), chunk_size):
        yield text[i:i + chunk_size]


class RevealCancelled(Exception):
    pass


class RevealRegistry:
    """Tracks the running reveal of each visitor session.

    Starting a reveal for a session cancels the one already running for it.
    """

    def __init__(self):
        self._active: Dict[str, asyncio.Event] = {}

    def start(self, session_id: str) -> asyncio.Event:
        previous = self._active.get(session_id)
        if previous is not None:
            previous.set()
            logger.debug("Cancelled stale reveal for session %s", session_id)
        token = asyncio.Event()
        self._active[session_id] = token
        return token

    def finish(self, session_id: str, token: asyncio.Event) -> None:
        if self._active.get(session_id) is token:
            del self._active[session_id]

    def is_active(self, session_id: str) -> bool:
        return session_id in self._active


async def reveal_chunks(text: str, cancel: asyncio.Event, chunk_size: int = 3,
                        interval: float = 0.005) -> AsyncIterator[str]:
    """Yield text in fixed-size chunks at a fixed interval until done or cancelled."""
    for chunk in chunk_text(text, chunk_size):
        if cancel.is_set():
            raise RevealCancelled()
        yield chunk
        await asyncio.sleep(interval)
    if cancel.is_set():
        raise RevealCancelled()
