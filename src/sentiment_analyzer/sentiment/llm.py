from __future__ import annotations

import json
import re

import httpx

from sentiment_analyzer.core.errors import ClassifierFailure
from sentiment_analyzer.core.logger import get_logger
from sentiment_analyzer.core.models import LabelLike, PolarityLabel
from sentiment_analyzer.sentiment.base import SentenceClassifier

log = get_logger("llm")

CLASSIFY_SYSTEM_PROMPT = """You are a sentence-level sentiment classifier. Split the user's text into sentences and label the sentiment of each one.

Return ONLY a JSON array with one label per sentence, in order, for example:
["positive", "neutral", "very negative"]

Allowed labels: "very positive", "positive", "neutral", "negative", "very negative".
Do not include the sentences themselves or any other text."""


class LLMSentenceClassifier(SentenceClassifier):
    """Sentence classifier backed by an OpenAI-compatible chat completions API.

    Failures are never retried or softened into a neutral result: any
    transport error, HTTP error or unparseable reply raises ClassifierFailure.

    Configuration:
        LLM_API_KEY: API key for the endpoint
        LLM_BASE_URL: API base URL (default: https://api.openai.com/v1)
        LLM_MODEL: Model to use (default: gpt-4o-mini)

    Usage:
        classifier = LLMSentenceClassifier(api_key="your_key")
        labels = classifier.classify("Great product. Shipping was slow.")
        classifier.close()
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4o-mini",
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ):
        if not api_key:
            raise ValueError("LLM_API_KEY is required")

        self.base_url = base_url.rstrip("/")
        self.model = model

        self.client = client or httpx.Client(
            timeout=timeout,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()
        log.debug("LLM client closed")

    def _parse_labels(self, content: str) -> list[LabelLike]:
        """Parse the model reply into labels.

        Tolerates prose around the JSON array. Unknown labels are kept as raw
        text: they still count as sentences but add to no score.
        """
        content = content.strip()

        json_match = re.search(r"\[[^\[\]]*\]", content)
        if json_match:
            content = json_match.group()

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            log.warning(f"Failed to parse JSON response: {content[:100]}")
            raise ClassifierFailure("Classifier returned malformed output") from e

        if not isinstance(data, list):
            raise ClassifierFailure("Classifier returned malformed output")

        labels = []
        for item in data:
            label = PolarityLabel.parse(item)
            if label is None:
                log.warning(f"Unknown label from classifier, counted without score: {item!r}")
                labels.append(str(item))
                continue
            labels.append(label)
        return labels

    def classify(self, text: str) -> list[LabelLike]:
        """Label each sentence of ``text``.

        Raises:
            ClassifierFailure: If the API call fails or the reply is unusable
        """
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": CLASSIFY_SYSTEM_PROMPT},
                {"role": "user", "content": text},
            ],
            "temperature": 0.0,
        }

        url = f"{self.base_url}/chat/completions"

        try:
            response = self.client.post(url, json=payload)

            if response.status_code == 429:
                raise ClassifierFailure("Rate limit exceeded")

            if response.status_code == 401:
                raise ClassifierFailure("Invalid API key")

            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            log.error(f"LLM API error: {e.response.status_code}")
            raise ClassifierFailure(f"API error: {e.response.status_code}") from e
        except httpx.RequestError as e:
            log.error(f"LLM request error: {e}")
            raise ClassifierFailure(f"Request error: {e}") from e
        except ValueError as e:
            raise ClassifierFailure("Classifier returned a non-JSON body") from e

        if not isinstance(data, dict):
            raise ClassifierFailure("Classifier returned malformed output")

        choices = data.get("choices") or []
        if not choices:
            raise ClassifierFailure("No choices in classifier response")

        choice = choices[0] if isinstance(choices, list) else None
        message = choice.get("message") if isinstance(choice, dict) else None
        if not isinstance(message, dict):
            raise ClassifierFailure("Classifier returned malformed output")

        content = message.get("content") or ""
        if not isinstance(content, str):
            raise ClassifierFailure("Classifier returned malformed output")
        if not content:
            raise ClassifierFailure("Empty content in classifier response")

        labels = self._parse_labels(content)
        log.debug(f"Classified {len(labels)} sentence(s) for: {text[:50]}...")
        return labels
