"""Per-node aggregation of classified sentiment results."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import pandas as pd

from sentiment_tagger.classification.schemas import KPI_FIELDS, POLARITIES, KPIScore, SentimentResult


@dataclass
class NodeAnalysis:
    """Aggregated sentiment metrics for one node."""

    node_id: str
    node_name: str
    total_texts: int
    avg_polarity: float
    avg_kpi_scores: KPIScore
    sentiment_distribution: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "nodeId": self.node_id,
            "nodeName": self.node_name,
            "totalTexts": self.total_texts,
            "avgPolarity": self.avg_polarity,
            "avgKpiScores": self.avg_kpi_scores.to_dict(),
            "sentimentDistribution": dict(self.sentiment_distribution),
        }


def results_frame(results: Iterable[SentimentResult]) -> pd.DataFrame:
    """Flatten results into one row per text with a column per KPI."""
    rows = [
        {
            "text": r.text,
            "node_id": r.node_id,
            "node_name": r.node_name,
            "polarity": r.polarity,
            "polarity_score": r.polarity_score,
            "confidence": r.confidence,
            **r.kpi_scores.to_dict(),
        }
        for r in results
    ]
    columns = ["text", "node_id", "node_name", "polarity", "polarity_score", "confidence", *KPI_FIELDS]
    return pd.DataFrame(rows, columns=columns)


class NodeAnalyzer:
    """Group results by node and reduce them to NodeAnalysis records."""

    def compute(self, results: Iterable[SentimentResult]) -> list[NodeAnalysis]:
        """Return one NodeAnalysis per node, in order of first appearance."""
        df = results_frame(results)
        if df.empty:
            return []

        analyses: list[NodeAnalysis] = []
        for node_id, group in df.groupby("node_id", sort=False):
            kpi_means = group[list(KPI_FIELDS)].mean()
            counts = group["polarity"].value_counts()
            analyses.append(
                NodeAnalysis(
                    node_id=str(node_id),
                    node_name=str(group["node_name"].iloc[0]),
                    total_texts=len(group),
                    avg_polarity=float(group["polarity_score"].mean()),
                    avg_kpi_scores=KPIScore(**{k: float(kpi_means[k]) for k in KPI_FIELDS}),
                    sentiment_distribution={p: int(counts.get(p, 0)) for p in POLARITIES},
                )
            )
        return analyses

    def comparison_table(self, results: Iterable[SentimentResult]) -> pd.DataFrame:
        """Return a tidy DataFrame sorted by avg_polarity descending."""
        rows = [
            {
                "node_id": a.node_id,
                "node": a.node_name,
                "texts": a.total_texts,
                "avg_polarity": round(a.avg_polarity, 4),
                **{k: round(v, 3) for k, v in a.avg_kpi_scores.to_dict().items()},
                "positive": a.sentiment_distribution["positive"],
                "neutral": a.sentiment_distribution["neutral"],
                "negative": a.sentiment_distribution["negative"],
            }
            for a in self.compute(results)
        ]
        if not rows:
            return pd.DataFrame()
        result = pd.DataFrame(rows).sort_values("avg_polarity", ascending=False, kind="stable")
        return result.reset_index(drop=True)
