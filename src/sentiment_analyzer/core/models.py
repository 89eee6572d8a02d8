from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class PolarityLabel(Enum):
    """Per-sentence polarity as produced by a sentence classifier."""

    VERY_POSITIVE = "very positive"
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    VERY_NEGATIVE = "very negative"

    @classmethod
    def parse(cls, value: Any) -> Optional["PolarityLabel"]:
        """Map a classifier's textual label to a PolarityLabel.

        Accepts "Very positive", "very_positive", "VeryPositive", "VERY-POSITIVE"
        and the like. Returns None for anything unrecognised.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        text = re.sub(r"(?<=[a-z])(?=[A-Z])", " ", value.strip())
        text = re.sub(r"[\s_\-]+", " ", text).lower()
        try:
            return cls(text)
        except ValueError:
            return None


# A parsed label, or whatever text a classifier produced for a sentence
LabelLike = Union[PolarityLabel, str]


class Sentiment(Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"
    ERROR = "Error"


@dataclass(frozen=True)
class AnalysisRequest:
    text: Optional[str] = None


@dataclass(frozen=True)
class AggregateScores:
    positive: float = 0.0
    negative: float = 0.0
    neutral: float = 0.0


@dataclass(frozen=True)
class AnalysisResult:
    """Document-level verdict returned to the caller. Never stored."""

    text: str
    sentiment: Sentiment
    confidence: float = 0.0
    positive_score: float = 0.0
    negative_score: float = 0.0
    neutral_score: float = 0.0

    @classmethod
    def error(cls, text: str = "") -> "AnalysisResult":
        """Build the generic error record: sentiment Error, all numbers 0.0."""
        return cls(text=text, sentiment=Sentiment.ERROR)

    @property
    def is_error(self) -> bool:
        return self.sentiment is Sentiment.ERROR

    def to_dict(self) -> dict[str, Any]:
        """Render the wire shape used by API consumers."""
        return {
            "text": self.text,
            "sentiment": self.sentiment.value,
            "confidence": self.confidence,
            "positiveScore": self.positive_score,
            "negativeScore": self.negative_score,
            "neutralScore": self.neutral_score,
        }
