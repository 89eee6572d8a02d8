"""Pytest configuration and fixtures for sentiment analyzer tests."""
from __future__ import annotations

import os
from typing import Iterable
from unittest.mock import MagicMock

import pytest

# Keep tests on the local classifier regardless of the developer's env
os.environ["CLASSIFIER_BACKEND"] = "local"
os.environ.pop("LLM_API_KEY", None)

from sentiment_analyzer.analysis.handler import AnalysisRequestHandler
from sentiment_analyzer.analysis.service import SentimentAnalysisService
from sentiment_analyzer.config import Settings, reload_settings
from sentiment_analyzer.core.models import PolarityLabel


class FixedClassifier:
    """Synthetic classifier returning a preset label sequence."""

    def __init__(self, labels: Iterable[PolarityLabel]):
        self.labels = list(labels)
        self.calls: list[str] = []

    def __call__(self, text: str) -> list[PolarityLabel]:
        self.calls.append(text)
        return list(self.labels)


@pytest.fixture
def fixed_classifier() -> FixedClassifier:
    """Classifier that labels every text as two positive sentences and one neutral."""
    return FixedClassifier([PolarityLabel.POSITIVE, PolarityLabel.POSITIVE, PolarityLabel.NEUTRAL])


@pytest.fixture
def service(fixed_classifier: FixedClassifier) -> SentimentAnalysisService:
    return SentimentAnalysisService(classifier=fixed_classifier)


@pytest.fixture
def handler(service: SentimentAnalysisService) -> AnalysisRequestHandler:
    return AnalysisRequestHandler(service)


@pytest.fixture
def failing_classifier() -> MagicMock:
    """Classifier whose backend is down."""
    mock = MagicMock(side_effect=RuntimeError("backend unavailable"))
    return mock


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with minimal configuration."""
    return reload_settings()


@pytest.fixture
def mock_httpx_client():
    """Create a mock httpx client returning a chat completion."""
    mock = MagicMock()
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.json.return_value = {
        "choices": [{"message": {"content": '["positive", "neutral"]'}}]
    }
    mock.post.return_value = mock_response
    return mock
