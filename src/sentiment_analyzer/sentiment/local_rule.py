from __future__ import annotations

import re

from sentiment_analyzer.core.models import PolarityLabel
from sentiment_analyzer.sentiment.base import SentenceClassifier

POS = {
    "love", "loved", "like", "great", "good", "amazing", "wonderful", "excellent",
    "happy", "fantastic", "awesome", "best", "enjoy", "enjoyed", "nice", "brilliant",
}
NEG = {
    "hate", "hated", "bad", "terrible", "awful", "horrible", "worst", "sad",
    "angry", "poor", "disappointing", "disappointed", "broken", "ugly", "annoying", "boring",
}
INTENSIFIERS = {"very", "extremely", "really", "so", "absolutely", "incredibly", "totally"}
NEGATIONS = {"not", "never", "no", "hardly"}

_SENTENCE_END = re.compile(r"(?<=[.!?])\s+|\n+")
_WORD = re.compile(r"[a-z']+")


def split_sentences(text: str) -> list[str]:
    """Split on terminal punctuation followed by whitespace, or on line breaks."""
    return [s.strip() for s in _SENTENCE_END.split(text) if s.strip()]


def score_sentence(sentence: str) -> int:
    """Sum keyword hits; an intensifier doubles the next hit, a negation flips it."""
    score = 0
    boost = 1
    sign = 1
    for word in _WORD.findall(sentence.lower()):
        if word in NEGATIONS or word.endswith("n't"):
            sign = -sign
            continue
        if word in INTENSIFIERS:
            boost = 2
            continue
        hit = 1 if word in POS else -1 if word in NEG else 0
        if hit:
            score += hit * boost * sign
            boost = 1
            sign = 1
    return score


def label_for(score: int) -> PolarityLabel:
    if score >= 2:
        return PolarityLabel.VERY_POSITIVE
    if score == 1:
        return PolarityLabel.POSITIVE
    if score == 0:
        return PolarityLabel.NEUTRAL
    if score == -1:
        return PolarityLabel.NEGATIVE
    return PolarityLabel.VERY_NEGATIVE


class LocalRuleClassifier(SentenceClassifier):
    """A tiny keyword-based sentence classifier. Replace with an LLM for real usage."""

    def classify(self, text: str) -> list[PolarityLabel]:
        return [label_for(score_sentence(s)) for s in split_sentences(text or "")]
