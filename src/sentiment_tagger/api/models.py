"""Pydantic request/response models for the sentiment tagging API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from sentiment_tagger.analysis.node_analysis import NodeAnalysis
from sentiment_tagger.classification.schemas import KPIScore, Node, SentimentResult

Polarity = Literal["positive", "neutral", "negative"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class HealthResponse(BaseModel):
    status: str
    scorer: str


class NodeModel(BaseModel):
    id: str
    name: str
    keywords: list[str] = Field(default_factory=list)

    def to_node(self) -> Node:
        return Node(id=self.id, name=self.name, keywords=list(self.keywords))


class ClassifyRequest(BaseModel):
    # Optional here so that missing fields reach classify() and fail there
    texts: list[str] | None = None
    nodes: list[NodeModel] | None = None


class KPIScoreModel(BaseModel):
    trust: float = Field(ge=-1.0, le=1.0)
    optimism: float = Field(ge=-1.0, le=1.0)
    frustration: float = Field(ge=-1.0, le=1.0)
    clarity: float = Field(ge=-1.0, le=1.0)
    access: float = Field(ge=-1.0, le=1.0)
    fairness: float = Field(ge=-1.0, le=1.0)

    @classmethod
    def from_score(cls, score: KPIScore) -> KPIScoreModel:
        return cls(**score.to_dict())

    def to_score(self) -> KPIScore:
        return KPIScore(**self.model_dump())


class SentimentResultModel(_CamelModel):
    text: str
    node_id: str = Field(alias="nodeId")
    node_name: str = Field(alias="nodeName")
    polarity: Polarity
    polarity_score: float = Field(alias="polarityScore", ge=-1.0, le=1.0)
    kpi_scores: KPIScoreModel = Field(alias="kpiScores")
    confidence: float = Field(ge=0.0, le=1.0)

    @classmethod
    def from_result(cls, result: SentimentResult) -> SentimentResultModel:
        return cls.model_validate(result.to_dict())

    def to_result(self) -> SentimentResult:
        return SentimentResult(
            text=self.text,
            node_id=self.node_id,
            node_name=self.node_name,
            polarity=self.polarity,
            polarity_score=self.polarity_score,
            kpi_scores=self.kpi_scores.to_score(),
            confidence=self.confidence,
        )


class ClassifyResponse(BaseModel):
    results: list[SentimentResultModel]


class ErrorResponse(BaseModel):
    error: str
    results: list[SentimentResultModel] = Field(default_factory=list)


class SentimentDistribution(BaseModel):
    positive: int
    neutral: int
    negative: int


class NodeAnalysisModel(_CamelModel):
    node_id: str = Field(alias="nodeId")
    node_name: str = Field(alias="nodeName")
    total_texts: int = Field(alias="totalTexts")
    avg_polarity: float = Field(alias="avgPolarity")
    avg_kpi_scores: KPIScoreModel = Field(alias="avgKpiScores")
    sentiment_distribution: SentimentDistribution = Field(alias="sentimentDistribution")

    @classmethod
    def from_analysis(cls, analysis: NodeAnalysis) -> NodeAnalysisModel:
        return cls.model_validate(analysis.to_dict())


class NodeAnalysisRequest(BaseModel):
    results: list[SentimentResultModel] | None = None


class NodeAnalysisResponse(BaseModel):
    nodes: list[NodeAnalysisModel]
