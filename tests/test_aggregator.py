"""Tests for sentiment aggregation."""
import itertools

import pytest

from sentiment_analyzer.analysis.aggregator import aggregate, decide
from sentiment_analyzer.core.models import AggregateScores, PolarityLabel, Sentiment

VP = PolarityLabel.VERY_POSITIVE
P = PolarityLabel.POSITIVE
N = PolarityLabel.NEUTRAL
NG = PolarityLabel.NEGATIVE
VN = PolarityLabel.VERY_NEGATIVE


class TestAggregate:
    """Tests for aggregate()."""

    def test_empty_sequence(self):
        agg = aggregate([])

        assert agg.scores == AggregateScores(0.0, 0.0, 0.0)
        assert agg.overall == Sentiment.NEUTRAL
        assert agg.confidence == 0.0
        assert agg.sentence_count == 0

    def test_mostly_positive(self):
        agg = aggregate([P, P, N])

        assert agg.scores.positive == pytest.approx(2 / 3)
        assert agg.scores.neutral == pytest.approx(1 / 3)
        assert agg.scores.negative == 0.0
        assert agg.overall == Sentiment.POSITIVE
        assert agg.confidence == pytest.approx(2 / 3)

    def test_very_negative_weighs_like_negative(self):
        agg = aggregate([VN, NG])

        assert agg.scores.negative == 1.0
        assert agg.scores.positive == 0.0
        assert agg.scores.neutral == 0.0
        assert agg.overall == Sentiment.NEGATIVE
        assert agg.confidence == 1.0

    def test_positive_negative_tie_is_neutral(self):
        agg = aggregate([P, NG])

        assert agg.scores.positive == 0.5
        assert agg.scores.negative == 0.5
        assert agg.overall == Sentiment.NEUTRAL
        assert agg.confidence == 0.0

    def test_very_positive_counts_double(self):
        agg = aggregate([VP])

        assert agg.scores.positive == 2.0
        assert agg.overall == Sentiment.POSITIVE
        assert agg.confidence == 2.0

    def test_scores_not_a_distribution(self):
        """VERY_POSITIVE makes the three scores sum above 1."""
        agg = aggregate([VP, N])
        total = agg.scores.positive + agg.scores.negative + agg.scores.neutral

        assert total == pytest.approx(1.5)

    def test_unknown_labels_count_as_sentences_only(self):
        agg = aggregate([P, "sarcastic", None])

        assert agg.sentence_count == 3
        assert agg.scores.positive == pytest.approx(1 / 3)
        assert agg.scores.negative == 0.0
        assert agg.scores.neutral == 0.0
        assert agg.overall == Sentiment.POSITIVE

    def test_string_labels_accepted(self):
        agg = aggregate(["Very positive", "negative", "NEUTRAL"])

        assert agg.scores.positive == pytest.approx(2 / 3)
        assert agg.scores.negative == pytest.approx(1 / 3)
        assert agg.scores.neutral == pytest.approx(1 / 3)

    def test_accepts_generator(self):
        agg = aggregate(label for label in [NG, NG, P])

        assert agg.overall == Sentiment.NEGATIVE
        assert agg.sentence_count == 3

    def test_order_independent(self):
        labels = [VP, P, N, NG, VN, N]
        expected = aggregate(labels)

        for perm in itertools.permutations(labels):
            assert aggregate(perm) == expected

    @pytest.mark.parametrize(
        "labels",
        [
            [],
            [VP] * 5,
            [VN] * 5,
            [VP, VN, N],
            [P, NG, N, N],
            [VP, P, VP, NG],
        ],
    )
    def test_score_bounds(self, labels):
        agg = aggregate(labels)

        assert 0.0 <= agg.scores.positive <= 2.0
        assert 0.0 <= agg.scores.negative <= 1.0
        assert 0.0 <= agg.scores.neutral <= 1.0
        if VP not in labels:
            assert agg.scores.positive <= 1.0


class TestDecide:
    """Tests for the tie-breaking rule."""

    def test_strict_positive(self):
        assert decide(AggregateScores(0.6, 0.2, 0.2)) == (Sentiment.POSITIVE, 0.6)

    def test_strict_negative(self):
        assert decide(AggregateScores(0.2, 0.6, 0.2)) == (Sentiment.NEGATIVE, 0.6)

    def test_strict_neutral(self):
        assert decide(AggregateScores(0.2, 0.2, 0.6)) == (Sentiment.NEUTRAL, 0.6)

    def test_positive_ties_neutral(self):
        assert decide(AggregateScores(0.5, 0.0, 0.5)) == (Sentiment.NEUTRAL, 0.5)

    def test_negative_ties_neutral(self):
        assert decide(AggregateScores(0.0, 0.5, 0.5)) == (Sentiment.NEUTRAL, 0.5)

    def test_three_way_tie(self):
        third = 1 / 3
        assert decide(AggregateScores(third, third, third)) == (Sentiment.NEUTRAL, third)

    def test_all_zero(self):
        assert decide(AggregateScores()) == (Sentiment.NEUTRAL, 0.0)


class TestPolarityLabelParse:
    """Tests for PolarityLabel.parse()."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Very positive", VP),
            ("very_positive", VP),
            ("VeryPositive", VP),
            ("VERY-NEGATIVE", VN),
            ("  neutral ", N),
            ("Negative", NG),
            (P, P),
        ],
    )
    def test_known(self, raw, expected):
        assert PolarityLabel.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["", "mixed", "very", 3, None])
    def test_unknown(self, raw):
        assert PolarityLabel.parse(raw) is None
