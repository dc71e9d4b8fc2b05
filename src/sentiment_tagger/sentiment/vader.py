"""VADER-based polarity scoring with a keyword lexicon for KPI dimensions."""

from __future__ import annotations

import re

from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from sentiment_tagger.classification.schemas import KPI_FIELDS, KPIScore
from sentiment_tagger.config import ScoringConfig, scoring_config
from sentiment_tagger.sentiment.scoring import SentimentScore

# ---------------------------------------------------------------------------
# KPI concept lexicon
# ---------------------------------------------------------------------------

# kpi -> concept words (case-insensitive, word-prefix matching)
KPI_CONCEPTS: dict[str, list[str]] = {
    "trust": ["trust", "reliable", "honest", "transparent", "credible", "dependable", "authentic"],
    "optimism": ["hope", "optimistic", "positive", "encouraging", "promising", "bright", "confident"],
    "frustration": [
        "frustrat", "annoying", "difficult", "problem", "issue", "struggle", "challenging",
    ],
    "clarity": ["clear", "understand", "simple", "obvious", "transparent", "straightforward", "explicit"],
    "access": ["access", "available", "easy", "convenient", "reachable", "obtainable", "open"],
    "fairness": ["fair", "equal", "just", "equitable", "balanced", "impartial", "unbiased"],
}

_COMPILED: dict[str, list[re.Pattern]] = {
    kpi: [re.compile(r"\b" + re.escape(word), re.IGNORECASE) for word in words]
    for kpi, words in KPI_CONCEPTS.items()
}


class VaderAnalyzer:
    """Thin wrapper around VaderSentiment for batch text analysis."""

    def __init__(self) -> None:
        self._analyzer = SentimentIntensityAnalyzer()

    def score(self, text: str) -> float:
        """Return compound score in [-1, 1]."""
        if not text or not text.strip():
            return 0.0
        return self._analyzer.polarity_scores(text)["compound"]


class VaderScorer:
    """Score polarity with VADER and KPI dimensions with the concept lexicon."""

    name = "vader"

    # Base KPI value when the text mentions no concept word for that KPI
    KPI_BASELINE = 0.5

    def __init__(self, config: ScoringConfig | None = None) -> None:
        cfg = config or scoring_config
        self._positive_threshold = cfg.positive_threshold
        self._negative_threshold = cfg.negative_threshold
        self._max_confidence = cfg.max_confidence
        self._vader = VaderAnalyzer()

    def polarity_label(self, compound: float) -> str:
        if compound >= self._positive_threshold:
            return "positive"
        if compound <= self._negative_threshold:
            return "negative"
        return "neutral"

    def kpi_scores(self, text: str, compound: float) -> KPIScore:
        """Lexicon hit ratio per KPI, boosted by polarity, clamped to [0, 1]."""
        values: dict[str, float] = {}
        for kpi in KPI_FIELDS:
            patterns = _COMPILED[kpi]
            hits = sum(1 for pat in patterns if pat.search(text))
            value = self.KPI_BASELINE + 0.5 * (hits / len(patterns)) if hits else self.KPI_BASELINE

            if kpi == "optimism" and compound > 0:
                value *= 1 + compound * 0.5
            elif kpi == "frustration" and compound < 0:
                value *= 1 + abs(compound) * 0.5

            values[kpi] = round(max(0.0, min(1.0, value)), 4)
        return KPIScore(**values)

    def score(self, text: str) -> SentimentScore:
        compound = self._vader.score(text)
        return SentimentScore(
            polarity=self.polarity_label(compound),
            polarity_score=round(compound, 4),
            kpi_scores=self.kpi_scores(text, compound),
            confidence=round(min(self._max_confidence, 0.5 + abs(compound) / 2), 4),
        )
