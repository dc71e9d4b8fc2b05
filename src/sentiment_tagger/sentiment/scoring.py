"""Scorer interface, the neutral placeholder scorer, and backend lookup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from sentiment_tagger.classification.schemas import KPIScore
from sentiment_tagger.config import scoring_config


@dataclass(frozen=True)
class SentimentScore:
    """Scoring output for one text, before node assignment is attached."""

    polarity: str
    polarity_score: float
    kpi_scores: KPIScore
    confidence: float


class Scorer(Protocol):
    name: str

    def score(self, text: str) -> SentimentScore: ...


class PlaceholderScorer:
    """Constant neutral scores for every text.

    Keeps the response shape valid for downstream aggregation without
    running any model: polarity ``neutral``, score 0, confidence 0.5 and
    every KPI at 0.5.
    """

    name = "placeholder"

    _SCORE = SentimentScore(
        polarity="neutral",
        polarity_score=0.0,
        kpi_scores=KPIScore.uniform(0.5),
        confidence=0.5,
    )

    def score(self, text: str) -> SentimentScore:
        return self._SCORE


SCORER_BACKENDS = ("placeholder", "vader")


def get_scorer(name: str | None = None) -> Scorer:
    """Return a scorer by backend name (defaults to ``SCORING_BACKEND``)."""
    backend = (name or scoring_config.backend).strip().lower()
    if backend == "placeholder":
        return PlaceholderScorer()
    if backend == "vader":
        # Lazy import: vaderSentiment loads its lexicon on construction
        from sentiment_tagger.sentiment.vader import VaderScorer

        return VaderScorer()
    raise ValueError(
        f"Unknown scoring backend {backend!r}; expected one of {', '.join(SCORER_BACKENDS)}"
    )
