from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Iterable

from sentiment_analyzer.core.models import LabelLike

# Any function that splits text into sentences and labels each one.
ClassifyFn = Callable[[str], Iterable[LabelLike]]


class SentenceClassifier(ABC):
    @abstractmethod
    def classify(self, text: str) -> list[LabelLike]:
        """Return one label per sentence, in sentence order.

        Labels the classifier cannot map to a PolarityLabel are returned as
        raw text so the sentence still counts.
        """
        raise NotImplementedError

    def __call__(self, text: str) -> list[LabelLike]:
        return self.classify(text)
