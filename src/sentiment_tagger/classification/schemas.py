"""Dataclasses for topic nodes, KPI scores and per-text sentiment results."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

POLARITIES = ("positive", "neutral", "negative")

KPI_FIELDS = ("trust", "optimism", "frustration", "clarity", "access", "fairness")


@dataclass(frozen=True)
class Node:
    """A named topic with keyword triggers."""

    id: str
    name: str
    keywords: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Node:
        """Build from ``{id, name, keywords}``; raises ValueError on a bad keyword list."""
        keywords = data.get("keywords")
        if keywords is None:
            keywords = []
        if not isinstance(keywords, (list, tuple)) or not all(
            isinstance(kw, str) for kw in keywords
        ):
            raise ValueError(f"node {data.get('id')!r} keywords must be a list of strings")
        return cls(id=str(data["id"]), name=str(data["name"]), keywords=list(keywords))

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "keywords": list(self.keywords)}


@dataclass(frozen=True)
class KPIScore:
    """Six quality dimensions, each in [-1.0, 1.0]."""

    trust: float
    optimism: float
    frustration: float
    clarity: float
    access: float
    fairness: float

    @classmethod
    def uniform(cls, value: float) -> KPIScore:
        return cls(**{name: value for name in KPI_FIELDS})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> KPIScore:
        return cls(**{name: float(data[name]) for name in KPI_FIELDS})

    def to_dict(self) -> dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class SentimentResult:
    """Classification and scoring for one input text."""

    text: str
    node_id: str
    node_name: str
    polarity: str  # one of POLARITIES
    polarity_score: float
    kpi_scores: KPIScore
    confidence: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SentimentResult:
        """Build from the camelCase wire shape."""
        return cls(
            text=data["text"],
            node_id=data["nodeId"],
            node_name=data["nodeName"],
            polarity=data["polarity"],
            polarity_score=float(data["polarityScore"]),
            kpi_scores=KPIScore.from_dict(data["kpiScores"]),
            confidence=float(data["confidence"]),
        )

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "nodeId": self.node_id,
            "nodeName": self.node_name,
            "polarity": self.polarity,
            "polarityScore": self.polarity_score,
            "kpiScores": self.kpi_scores.to_dict(),
            "confidence": self.confidence,
        }
