"""Exceptions shared by the generation client, orchestrator and API."""

from typing import List


class ContentGenerationError(Exception):
    """Raised when one content stream (landing page, pitch deck, marketing) fails."""

    def __init__(self, stream: str, reason: str):
        self.stream = stream
        self.reason = reason
        super().__init__(f"{stream}: {reason}")


class AllStreamsFailedError(Exception):
    """Raised when no content stream produced a result."""

    def __init__(self, details: List[str]):
        self.details = [str(d).strip() for d in details if str(d).strip()]
        super().__init__("All agents failed to generate content")


class DeckUnavailableError(Exception):
    """Raised when a pitch deck download is asked for a deck that failed to render."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)
