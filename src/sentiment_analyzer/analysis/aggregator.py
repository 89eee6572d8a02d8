"""Reduce per-sentence polarity labels to a document-level verdict."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from sentiment_analyzer.core.models import AggregateScores, LabelLike, PolarityLabel, Sentiment

# (accumulator, weight) per label. VERY_NEGATIVE intentionally weighs the
# same as NEGATIVE.
LABEL_WEIGHTS: dict[PolarityLabel, tuple[str, float]] = {
    PolarityLabel.VERY_POSITIVE: ("positive", 2.0),
    PolarityLabel.POSITIVE: ("positive", 1.0),
    PolarityLabel.NEUTRAL: ("neutral", 1.0),
    PolarityLabel.NEGATIVE: ("negative", 1.0),
    PolarityLabel.VERY_NEGATIVE: ("negative", 1.0),
}


@dataclass(frozen=True)
class Aggregation:
    scores: AggregateScores = field(default_factory=AggregateScores)
    overall: Sentiment = Sentiment.NEUTRAL
    confidence: float = 0.0
    sentence_count: int = 0


def decide(scores: AggregateScores) -> tuple[Sentiment, float]:
    """Pick the overall label by strict comparison; ties fall back to neutral.

    Confidence is the winning score. For the neutral fallback it is the
    neutral score, which may be 0.0 when positive and negative tie.
    """
    pos, neg, neu = scores.positive, scores.negative, scores.neutral
    if pos > neg and pos > neu:
        return Sentiment.POSITIVE, pos
    if neg > pos and neg > neu:
        return Sentiment.NEGATIVE, neg
    return Sentiment.NEUTRAL, neu


def aggregate(labels: Iterable[LabelLike]) -> Aggregation:
    """Average weighted label contributions over all sentences.

    Every item counts as a sentence. Items that are not a known label (after
    ``PolarityLabel.parse``) add nothing to any score. The scores are mean
    contributions, not a distribution: VERY_POSITIVE adds 2.0, so they need
    not sum to 1 and ``positive`` can reach 2.0.

    Never raises; an empty sequence yields all zeros and NEUTRAL.
    """
    totals = {"positive": 0.0, "negative": 0.0, "neutral": 0.0}
    count = 0

    for raw in labels:
        count += 1
        label = PolarityLabel.parse(raw)
        if label is None:
            continue
        bucket, weight = LABEL_WEIGHTS[label]
        totals[bucket] += weight

    if count > 0:
        totals = {k: v / count for k, v in totals.items()}

    scores = AggregateScores(**totals)
    overall, confidence = decide(scores)
    return Aggregation(
        scores=scores,
        overall=overall,
        confidence=confidence,
        sentence_count=count,
    )
