from __future__ import annotations


class SentimentAnalyzerError(Exception):
    """Base exception for analysis failures."""
    pass


class InvalidInput(SentimentAnalyzerError):
    """Text is absent, empty, or outside the allowed length bounds."""
    pass


class SuspiciousContent(SentimentAnalyzerError):
    """Text tripped one of the content heuristics.

    The message is deliberately generic; which heuristic fired is only
    logged, never raised to the caller.
    """

    def __init__(self, message: str = "Text contains suspicious content", rule: str = ""):
        super().__init__(message)
        self.rule = rule


class ClassifierFailure(SentimentAnalyzerError):
    """The sentence classifier could not produce labels for the text."""
    pass
