"""
Live commentary for the Kabaddi Score Master.

Commentary is produced by an external text generator reached over HTTP. It is
purely decorative: requests run on a single background worker so scoring
never waits for them, failures are logged and dropped, and a match reset
discards any response that arrives late.
"""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

import requests

from ..models import EventSummary
from ..utils.constants import (
    COMMENTARY_HISTORY_SIZE, COMMENTARY_TIMEOUT_SEC, COMMENTARY_URL,
    FOUL_PLAY_MAX_CHARS, FOUL_PLAY_MIN_CHARS,
)
from .errors import CommentaryGenerationFailure, InvalidPlayDescription

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommentaryRequest:
    """Payload sent to the commentary generator."""

    summary: EventSummary
    clock_display: str
    recent_history: List[str] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        payload = self.summary.to_dict()
        if payload.get("defenderName") is None:
            payload.pop("defenderName", None)
        payload["raiderName"] = payload.get("raiderName") or "Unknown raider"
        payload["recentHistory"] = list(self.recent_history[:COMMENTARY_HISTORY_SIZE])
        payload["clockDisplay"] = self.clock_display
        return payload


@dataclass(frozen=True)
class FoulPlayAnalysis:
    """Verdict returned by the foul-play analyzer."""

    has_foul_play: bool
    analysis: str

    def to_dict(self) -> Dict[str, Any]:
        return {"has_foul_play": self.has_foul_play, "analysis": self.analysis}


class CommentaryClient(Protocol):
    """Interface for the external text generator - supports DIP."""

    def generate(self, request: CommentaryRequest) -> str:
        """Return one line of commentary or raise CommentaryGenerationFailure."""
        ...

    def analyze_foul_play(self, description: str) -> FoulPlayAnalysis:
        """Judge a play description or raise CommentaryGenerationFailure."""
        ...


class HttpCommentaryClient:
    """Commentary client that POSTs JSON to a text-generation endpoint."""

    def __init__(
        self,
        base_url: str = COMMENTARY_URL,
        timeout: float = COMMENTARY_TIMEOUT_SEC,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def generate(self, request: CommentaryRequest) -> str:
        data = self._post("", request.to_payload())
        text = data.get("commentary") or data.get("commentaryText")
        if not isinstance(text, str) or not text.strip():
            raise CommentaryGenerationFailure("Commentary response did not contain any text")
        return text.strip()

    def analyze_foul_play(self, description: str) -> FoulPlayAnalysis:
        data = self._post("/foul-play", {"playDescription": description})
        if "hasFoulPlay" not in data or "analysis" not in data:
            raise CommentaryGenerationFailure("Foul play response is missing fields")
        return FoulPlayAnalysis(has_foul_play=bool(data["hasFoulPlay"]), analysis=str(data["analysis"]))

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise CommentaryGenerationFailure(f"Commentary provider request failed: {e}") from e
        except ValueError as e:
            raise CommentaryGenerationFailure("Commentary provider returned invalid JSON") from e
        if not isinstance(data, dict):
            raise CommentaryGenerationFailure("Commentary provider returned an unexpected body")
        return data


class CommentaryService:
    """
    Serialises commentary requests and keeps the commentary log.

    At most one request is in flight at a time; later events queue up behind
    it in arrival order. Each new line is prepended so the log reads newest
    first.
    """

    def __init__(self, client: CommentaryClient) -> None:
        self.client = client
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="commentary")
        self._lock = threading.Lock()
        self._log: List[str] = []
        self._epoch = 0
        self._pending = 0

    @property
    def log(self) -> List[str]:
        """Commentary lines, most recent first."""
        with self._lock:
            return list(self._log)

    @property
    def is_busy(self) -> bool:
        with self._lock:
            return self._pending > 0

    def submit(self, summary: EventSummary, clock_display: str) -> Future:
        """
        Queue commentary for ``summary`` without blocking the caller.

        Returns:
            Future resolving to the generated text, or None when the request
            failed or was discarded by a reset.
        """
        with self._lock:
            epoch = self._epoch
            self._pending += 1
        return self._executor.submit(self._generate, summary, clock_display, epoch)

    def reset(self) -> None:
        """Clear the log; responses for earlier requests are discarded."""
        with self._lock:
            self._epoch += 1
            self._log.clear()

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def analyze_foul_play(self, description: str) -> FoulPlayAnalysis:
        """
        Ask the generator whether a described play involved a foul.

        Raises:
            InvalidPlayDescription: If the description length is out of range
            CommentaryGenerationFailure: If the provider call fails
        """
        text = (description or "").strip()
        if len(text) < FOUL_PLAY_MIN_CHARS:
            raise InvalidPlayDescription(f"Description must be at least {FOUL_PLAY_MIN_CHARS} characters.")
        if len(text) > FOUL_PLAY_MAX_CHARS:
            raise InvalidPlayDescription(f"Description must not be longer than {FOUL_PLAY_MAX_CHARS} characters.")
        return self.client.analyze_foul_play(text)

    def _generate(self, summary: EventSummary, clock_display: str, epoch: int) -> Optional[str]:
        try:
            with self._lock:
                if epoch != self._epoch:
                    return None
                history = self._log[:COMMENTARY_HISTORY_SIZE]
            request = CommentaryRequest(summary=summary, clock_display=clock_display, recent_history=history)
            try:
                text = self.client.generate(request)
            except CommentaryGenerationFailure as e:
                logger.warning("Commentary skipped for %s: %s", summary.event_type.value, e)
                return None
            with self._lock:
                if epoch != self._epoch:
                    logger.info("Discarding commentary from before the last reset")
                    return None
                self._log.insert(0, text)
            return text
        finally:
            with self._lock:
                self._pending -= 1
