"""Tests for VaderAnalyzer and VaderScorer."""

import pytest

from sentiment_tagger.sentiment.vader import VaderAnalyzer, VaderScorer


@pytest.fixture
def analyzer():
    return VaderAnalyzer()


@pytest.fixture
def scorer():
    return VaderScorer()


def test_positive_text(analyzer):
    assert analyzer.score("I absolutely love this service! Amazing support!") > 0.3


def test_negative_text(analyzer):
    assert analyzer.score("This is terrible, the worst support ever") < -0.3


def test_empty_text(analyzer):
    assert analyzer.score("") == 0.0
    assert analyzer.score("   ") == 0.0


def test_scorer_positive_label(scorer):
    score = scorer.score("Wonderful, helpful and friendly staff")
    assert score.polarity == "positive"
    assert score.polarity_score > 0


def test_scorer_negative_label(scorer):
    score = scorer.score("Awful experience, I hate waiting")
    assert score.polarity == "negative"
    assert score.polarity_score < 0


def test_scorer_neutral_label(scorer):
    assert scorer.score("The office is on the second floor").polarity == "neutral"


def test_scorer_ranges(scorer):
    for text in ["I love it", "I hate it", "meh", ""]:
        score = scorer.score(text)
        assert -1.0 <= score.polarity_score <= 1.0
        assert 0.0 <= score.confidence <= 0.95
        assert all(0.0 <= v <= 1.0 for v in score.kpi_scores.to_dict().values())


def test_kpi_lexicon_raises_matching_dimension(scorer):
    kpis = scorer.kpi_scores("The process was fair and equal for everyone", 0.0)
    assert kpis.fairness > kpis.trust
    assert kpis.trust == VaderScorer.KPI_BASELINE


def test_frustration_boosted_by_negative_polarity(scorer):
    calm = scorer.kpi_scores("there was a problem", 0.0)
    angry = scorer.kpi_scores("there was a problem", -0.8)
    assert angry.frustration > calm.frustration


def test_scorer_deterministic(scorer):
    text = "Clear instructions, but access was difficult"
    assert scorer.score(text) == scorer.score(text)
