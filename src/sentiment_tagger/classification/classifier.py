"""Keyword node matching and per-text sentiment classification."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from sentiment_tagger.classification.schemas import Node, SentimentResult
from sentiment_tagger.sentiment.scoring import PlaceholderScorer, Scorer

logger = logging.getLogger(__name__)


class ClassificationInputError(ValueError):
    """Raised when a batch is missing its texts or nodes."""


@dataclass(frozen=True)
class NodeMatch:
    """Which node a text was assigned to and whether a keyword triggered it."""

    node: Node
    keyword: str | None  # None when the default node applied

    @property
    def is_default(self) -> bool:
        return self.keyword is None


class KeywordNodeMatcher:
    """Assign texts to the first node whose keywords appear in the text.

    Nodes are scanned in the order given; the first node with any keyword
    that is a case-insensitive substring of the text wins. A text matching
    no node falls back to the default node, which is always the first node
    of the sequence.
    """

    def __init__(self, nodes: Sequence[Node]) -> None:
        if not nodes:
            raise ClassificationInputError("nodes array is required")
        self._nodes = list(nodes)
        # Lowercased keywords per node; "" is a substring of every text
        self._keywords: list[list[tuple[str, str]]] = [
            [(kw.lower(), kw) for kw in node.keywords] for node in self._nodes
        ]

    @property
    def default_node(self) -> Node:
        return self._nodes[0]

    def match(self, text: str) -> NodeMatch:
        text_lower = text.lower()
        for node, keywords in zip(self._nodes, self._keywords):
            for kw_lower, kw in keywords:
                if kw_lower in text_lower:
                    return NodeMatch(node=node, keyword=kw)
        return NodeMatch(node=self.default_node, keyword=None)


def _is_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _coerce_nodes(nodes: Sequence[Node | Mapping]) -> list[Node]:
    coerced = []
    for node in nodes:
        if isinstance(node, Node):
            coerced.append(node)
        elif isinstance(node, Mapping):
            try:
                coerced.append(Node.from_dict(node))
            except KeyError as exc:
                raise ClassificationInputError(f"node is missing field {exc}") from exc
            except ValueError as exc:
                raise ClassificationInputError(str(exc)) from exc
        else:
            raise ClassificationInputError("nodes must be objects with id, name and keywords")
    return coerced


def validate_batch(texts: object, nodes: object) -> tuple[list[str], list[Node]]:
    """Check a batch before any processing; returns the texts and parsed nodes."""
    if texts is None or not _is_sequence(texts) or len(texts) == 0:
        raise ClassificationInputError("texts array is required")
    if nodes is None or not _is_sequence(nodes) or len(nodes) == 0:
        raise ClassificationInputError("nodes array is required")
    if not all(isinstance(t, str) for t in texts):
        raise ClassificationInputError("texts must contain only strings")
    return list(texts), _coerce_nodes(nodes)


def classify(
    texts: Sequence[str],
    nodes: Sequence[Node | Mapping],
    scorer: Scorer | None = None,
) -> list[SentimentResult]:
    """Assign every text to a node and score it.

    Returns one result per text, in input order. Raises
    ClassificationInputError (without producing any results) if *texts* or
    *nodes* is missing, not a sequence, or empty.
    """
    text_list, node_list = validate_batch(texts, nodes)
    scorer = scorer or PlaceholderScorer()

    logger.info(
        "Analyzing %d texts across %d nodes (scorer=%s)",
        len(text_list),
        len(node_list),
        scorer.name,
    )

    matcher = KeywordNodeMatcher(node_list)
    results: list[SentimentResult] = []
    for text in text_list:
        match = matcher.match(text)
        score = scorer.score(text)
        results.append(
            SentimentResult(
                text=text,
                node_id=match.node.id,
                node_name=match.node.name,
                polarity=score.polarity,
                polarity_score=score.polarity_score,
                kpi_scores=score.kpi_scores,
                confidence=score.confidence,
            )
        )

    logger.info("Successfully processed %d texts", len(results))
    return results
