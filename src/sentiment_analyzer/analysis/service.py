from __future__ import annotations

import logging
from typing import Optional

from sentiment_analyzer.analysis.aggregator import aggregate
from sentiment_analyzer.analysis.guard import InputGuard
from sentiment_analyzer.config import Settings
from sentiment_analyzer.core.errors import ClassifierFailure
from sentiment_analyzer.core.logger import get_logger, log_rejection
from sentiment_analyzer.core.models import AnalysisResult
from sentiment_analyzer.sentiment.base import ClassifyFn
from sentiment_analyzer.sentiment.factory import make_classifier

log = get_logger("service")


class SentimentAnalysisService:
    """Guard, classify and aggregate one block of text.

    Holds no per-request state, so one instance can serve concurrent callers
    as long as the injected classifier is itself thread safe.

    Usage:
        service = SentimentAnalysisService(classifier=LocalRuleClassifier())
        result = service.analyze("I love it. The box was damaged.")
    """

    def __init__(self, classifier: ClassifyFn, guard: Optional[InputGuard] = None):
        self.classifier = classifier
        self.guard = guard or InputGuard()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SentimentAnalysisService":
        guard = InputGuard(
            max_length=settings.max_text_length,
            min_length=settings.min_text_length,
            max_special_ratio=settings.max_special_char_ratio,
        )
        return cls(classifier=make_classifier(settings), guard=guard)

    def analyze(self, text: Optional[str]) -> AnalysisResult:
        """Analyze ``text`` and return the document-level result.

        Raises:
            InvalidInput: text is absent, blank or out of length bounds
            SuspiciousContent: a content heuristic matched
            ClassifierFailure: the classifier raised; the cause is chained
        """
        cleaned = self.guard.validate_and_clean(text)

        try:
            labels = list(self.classifier(cleaned))
        except ClassifierFailure as e:
            log_rejection(log, "classifier_failure", e, level=logging.ERROR, text_length=len(cleaned))
            raise
        except Exception as e:
            log_rejection(log, "classifier_failure", e, level=logging.ERROR, text_length=len(cleaned))
            raise ClassifierFailure(f"Sentence classifier failed: {e}") from e

        agg = aggregate(labels)
        log.info(
            f"Analyzed {agg.sentence_count} sentence(s): {agg.overall.value} "
            f"(confidence={agg.confidence:.3f})",
            extra={
                "sentiment": agg.overall.value,
                "confidence": agg.confidence,
                "sentence_count": agg.sentence_count,
            },
        )

        return AnalysisResult(
            text=cleaned,
            sentiment=agg.overall,
            confidence=agg.confidence,
            positive_score=agg.scores.positive,
            negative_score=agg.scores.negative,
            neutral_score=agg.scores.neutral,
        )

    def close(self) -> None:
        """Release the classifier's resources, if it holds any."""
        close = getattr(self.classifier, "close", None)
        if callable(close):
            close()
