"""Input screening that runs before any text reaches a sentence classifier.

The content checks are a coarse heuristic layer: a fixed denylist of
script/SQL injection fragments plus a special-character ratio. They are
trivially bypassed with encoding variants and are not a security boundary.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sentiment_analyzer.core.errors import InvalidInput, SuspiciousContent
from sentiment_analyzer.core.logger import get_logger, log_rejection

log = get_logger("guard")

DEFAULT_MAX_LENGTH = 10000
DEFAULT_MIN_LENGTH = 1
DEFAULT_MAX_SPECIAL_RATIO = 0.30

SCRIPT_PATTERNS = ("<script", "javascript:", "onload=", "onerror=", "onclick=")
SQL_PATTERNS = ("' or '1'='1", "; drop table", "union select")


def special_char_count(text: str) -> int:
    """Count characters that are neither alphanumeric nor whitespace."""
    return sum(1 for ch in text if not ch.isalnum() and not ch.isspace())


def find_denylisted(text: str) -> Optional[str]:
    """Return the rule family ("script" or "sql") of the first match, if any."""
    lowered = text.lower()
    if any(p in lowered for p in SCRIPT_PATTERNS):
        return "script"
    if any(p in lowered for p in SQL_PATTERNS):
        return "sql"
    return None


@dataclass(frozen=True)
class InputGuard:
    """Validates raw text and returns it trimmed.

    Rules run in order and the first failure wins:
    absent/blank, too long, too short, denylist, special-character ratio.
    """

    max_length: int = DEFAULT_MAX_LENGTH
    min_length: int = DEFAULT_MIN_LENGTH
    max_special_ratio: float = DEFAULT_MAX_SPECIAL_RATIO

    def validate_and_clean(self, raw: Optional[str]) -> str:
        if raw is None or not raw.strip():
            raise self._reject(InvalidInput("Text cannot be null or empty"), "empty")

        text = raw.strip()

        if len(text) > self.max_length:
            raise self._reject(
                InvalidInput(f"Text too long. Maximum length is {self.max_length:,} characters"),
                "too_long",
                text_length=len(text),
            )

        if len(text) < self.min_length:
            raise self._reject(
                InvalidInput(f"Text must contain at least {self.min_length} character(s)"),
                "too_short",
                text_length=len(text),
            )

        rule = find_denylisted(text)
        if rule:
            raise self._reject(SuspiciousContent(rule=rule), f"denylist_{rule}", text_length=len(text))

        if special_char_count(text) > len(text) * self.max_special_ratio:
            raise self._reject(
                SuspiciousContent(rule="special_chars"),
                "special_char_ratio",
                text_length=len(text),
            )

        return text

    @staticmethod
    def _reject(error: Exception, reason: str, **context) -> Exception:
        log_rejection(log, reason, error, **context)
        return error


_default_guard = InputGuard()


def validate_and_clean(raw: Optional[str]) -> str:
    """Validate ``raw`` with the default limits and return it trimmed.

    Raises:
        InvalidInput: text is absent, blank, or out of length bounds
        SuspiciousContent: a content heuristic matched
    """
    return _default_guard.validate_and_clean(raw)
