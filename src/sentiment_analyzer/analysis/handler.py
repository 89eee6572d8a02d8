"""Calling layer that turns analysis failures into generic error records."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sentiment_analyzer.analysis.service import SentimentAnalysisService
from sentiment_analyzer.core.errors import InvalidInput, SuspiciousContent
from sentiment_analyzer.core.logger import get_logger, set_request_id
from sentiment_analyzer.core.models import AnalysisRequest, AnalysisResult

log = get_logger("handler")

HEALTH_MESSAGE = "Sentiment Analyzer App is running!"


@dataclass(frozen=True)
class HandlerResponse:
    status_code: int
    result: AnalysisResult

    @property
    def ok(self) -> bool:
        return self.status_code == 200


class AnalysisRequestHandler:
    """Transport-agnostic request handler.

    Status codes follow HTTP conventions so a web layer can pass them
    through: 200 on success, 400 for rejected input, 500 when the
    classifier (or anything else) fails. Error records never carry the
    reason for the failure.
    """

    def __init__(self, service: SentimentAnalysisService, echo_length: int = 100):
        self.service = service
        self.echo_length = echo_length

    def handle(self, text: Optional[str], request_id: Optional[str] = None) -> HandlerResponse:
        return self.handle_request(AnalysisRequest(text=text), request_id=request_id)

    def handle_request(self, request: AnalysisRequest, request_id: Optional[str] = None) -> HandlerResponse:
        set_request_id(request_id)
        text = request.text

        if text is None or not text.strip():
            return HandlerResponse(400, AnalysisResult.error(""))

        trimmed = text.strip()
        if len(trimmed) > self.service.guard.max_length:
            log.warning(f"Rejected oversized text ({len(trimmed)} chars)")
            return HandlerResponse(400, AnalysisResult.error(self._echo(trimmed)))

        try:
            return HandlerResponse(200, self.service.analyze(trimmed))
        except (InvalidInput, SuspiciousContent):
            return HandlerResponse(400, AnalysisResult.error(text))
        except Exception as e:
            log.exception(f"Analysis failed: {type(e).__name__}")
            return HandlerResponse(500, AnalysisResult.error(text))

    def health(self) -> str:
        return HEALTH_MESSAGE

    def _echo(self, text: str) -> str:
        return text[: self.echo_length] + "..."
