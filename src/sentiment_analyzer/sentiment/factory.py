from __future__ import annotations

from sentiment_analyzer.config import Settings
from sentiment_analyzer.core.logger import get_logger
from sentiment_analyzer.sentiment.base import SentenceClassifier
from sentiment_analyzer.sentiment.llm import LLMSentenceClassifier
from sentiment_analyzer.sentiment.local_rule import LocalRuleClassifier

log = get_logger("classifier")


def make_classifier(settings: Settings) -> SentenceClassifier:
    """Create the sentence classifier selected by configuration."""
    settings.validate_llm_credentials()
    if settings.use_llm:
        log.info(f"Using LLMSentenceClassifier ({settings.llm_model}).")
        return LLMSentenceClassifier(
            api_key=settings.llm_api_key,
            base_url=settings.llm_base_url,
            model=settings.llm_model,
            timeout=settings.llm_timeout_seconds,
        )
    log.info("Using LocalRuleClassifier (fallback).")
    return LocalRuleClassifier()
