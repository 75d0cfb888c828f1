"""
Post-match commentary from the Gemini generateContent endpoint.

Gameplay never depends on this: any failure yields FALLBACK_COMMENTARY.
"""
import json
import logging
from dataclasses import dataclass
from typing import Optional

from google.auth.exceptions import TransportError
from google.auth.transport import requests as google_requests

from handcricket.config import settings
from handcricket.engine.state import MatchSnapshot

logger = logging.getLogger(__name__)

FALLBACK_COMMENTARY = "The connection to the commentary box was lost. The commentator must be on a tea break!"


@dataclass(frozen=True)
class MatchSummary:
    player_score: int
    computer_score: int
    target: int
    result_title: str

    @classmethod
    def from_snapshot(cls, snapshot: MatchSnapshot) -> "MatchSummary":
        return cls(
            player_score=snapshot.player_score,
            computer_score=snapshot.computer_score,
            target=snapshot.target,
            result_title=snapshot.result_title or "",
        )

    def to_text(self) -> str:
        target = self.target if self.target > 0 else "Not set"
        return (
            f"Player Score: {self.player_score}\n"
            f"Computer Score: {self.computer_score}\n"
            f"Target: {target}\n"
            f"Result: {self.result_title}"
        )


def build_prompt(summary: MatchSummary) -> str:
    return (
        "You are an enthusiastic and slightly dramatic cricket commentator. "
        'Provide a short, fun, and exciting commentary for a game of "Hand Cricket" '
        f"based on this summary:\n\n{summary.to_text()}\n\n"
        "Keep it under 60 words. Be encouraging if the player lost, and celebrate "
        "their victory if they won. End with a fun, one-line tip for the next game."
    )


class CommentaryService:
    """Thin client for the text-generation service"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        transport=None,
    ):
        self.api_key = settings.GEMINI_API_KEY if api_key is None else api_key
        self.model = model or settings.GEMINI_MODEL
        self.timeout = timeout or settings.COMMENTARY_TIMEOUT
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{settings.GEMINI_BASE_URL}/{self.model}:generateContent"

    def _get_transport(self):
        if self._transport is None:
            self._transport = google_requests.Request()
        return self._transport

    def commentate(self, summary: MatchSummary) -> str:
        if not self.api_key:
            logger.info("No Gemini API key configured, skipping commentary")
            return FALLBACK_COMMENTARY

        payload = {"contents": [{"role": "user", "parts": [{"text": build_prompt(summary)}]}]}
        try:
            response = self._get_transport()(
                self.url,
                method="POST",
                body=json.dumps(payload).encode("utf-8"),
                headers={"Content-Type": "application/json", "x-goog-api-key": self.api_key},
                timeout=self.timeout,
            )
        except TransportError as e:
            logger.warning("Commentary request failed: %s", e)
            return FALLBACK_COMMENTARY

        if response.status != 200:
            logger.warning("Commentary service returned HTTP %s", response.status)
            return FALLBACK_COMMENTARY

        try:
            result = json.loads(response.data)
            text = result["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning("Commentary response has an unexpected shape: %s", e)
            return FALLBACK_COMMENTARY

        if not isinstance(text, str) or not text.strip():
            return FALLBACK_COMMENTARY
        return text.strip()
