"""Tests for the FastAPI REST API endpoints."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from sentiment_tagger.api.app import CORS_HEADERS, app
from sentiment_tagger.sentiment.scoring import PlaceholderScorer

GENERAL = {"id": "n1", "name": "General", "keywords": []}
NODES = [
    {"id": "a", "name": "Refunds", "keywords": ["refund"]},
    {"id": "b", "name": "Shipping", "keywords": ["shipping"]},
]


@pytest.fixture(autouse=True)
def placeholder_scorer():
    """Pin the placeholder scorer regardless of SCORING_BACKEND."""
    with patch("sentiment_tagger.api.app._scorer", PlaceholderScorer()):
        yield


@pytest.fixture
def client():
    return TestClient(app)


def _assert_cors(resp):
    for header, value in CORS_HEADERS.items():
        assert resp.headers[header] == value


# ---------------------------------------------------------------------------
# /health
# ---------------------------------------------------------------------------


def test_health_status(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "scorer": "placeholder"}


# ---------------------------------------------------------------------------
# POST /classify
# ---------------------------------------------------------------------------


def test_classify_end_to_end(client):
    resp = client.post(
        "/classify", json={"texts": ["great service", "bad support"], "nodes": [GENERAL]}
    )
    assert resp.status_code == 200
    results = resp.json()["results"]
    assert len(results) == 2
    for result in results:
        assert result["nodeId"] == "n1"
        assert result["nodeName"] == "General"
        assert result["polarity"] == "neutral"
        assert result["polarityScore"] == 0
        assert result["confidence"] == 0.5
        assert set(result["kpiScores"].values()) == {0.5}
    assert [r["text"] for r in results] == ["great service", "bad support"]


def test_classify_response_fields(client):
    resp = client.post("/classify", json={"texts": ["hi"], "nodes": [GENERAL]})
    result = resp.json()["results"][0]
    for field in ("text", "nodeId", "nodeName", "polarity", "polarityScore", "kpiScores", "confidence"):
        assert field in result
    assert set(result["kpiScores"]) == {
        "trust", "optimism", "frustration", "clarity", "access", "fairness",
    }


def test_classify_keyword_matching(client):
    resp = client.post(
        "/classify", json={"texts": ["My shipping was late", "no keyword here"], "nodes": NODES}
    )
    assert [r["nodeId"] for r in resp.json()["results"]] == ["b", "a"]


def test_legacy_batch_path(client):
    resp = client.post("/analyze-sentiment-batch", json={"texts": ["x"], "nodes": [GENERAL]})
    assert resp.status_code == 200
    assert len(resp.json()["results"]) == 1


def test_classify_success_has_cors_headers(client):
    resp = client.post("/classify", json={"texts": ["x"], "nodes": [GENERAL]})
    _assert_cors(resp)


@pytest.mark.parametrize(
    "body, message",
    [
        ({"texts": [], "nodes": NODES}, "texts array is required"),
        ({"nodes": NODES}, "texts array is required"),
        ({"texts": ["x"], "nodes": []}, "nodes array is required"),
        ({"texts": ["x"]}, "nodes array is required"),
    ],
)
def test_classify_validation_errors_return_500(client, body, message):
    resp = client.post("/classify", json=body)
    assert resp.status_code == 500
    assert resp.json() == {"error": message, "results": []}
    _assert_cors(resp)


def test_classify_wrong_types_return_500(client):
    resp = client.post("/classify", json={"texts": "not a list", "nodes": NODES})
    assert resp.status_code == 500
    data = resp.json()
    assert data["results"] == []
    assert data["error"].startswith("Invalid request")


def test_classify_malformed_node_returns_500(client):
    resp = client.post("/classify", json={"texts": ["x"], "nodes": [{"id": "a"}]})
    assert resp.status_code == 500
    assert "nodes.0.name" in resp.json()["error"]


def test_classify_invalid_json_returns_500(client):
    resp = client.post(
        "/classify", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 500
    assert resp.json() == {"error": "Invalid JSON in request body", "results": []}


def test_classify_non_object_body_returns_500(client):
    resp = client.post("/classify", json=["x"])
    assert resp.status_code == 500
    assert resp.json()["results"] == []


def test_classify_unexpected_error_returns_500(client):
    with patch("sentiment_tagger.api.app.classify", side_effect=RuntimeError("boom")):
        resp = client.post("/classify", json={"texts": ["x"], "nodes": [GENERAL]})
    assert resp.status_code == 500
    assert resp.json() == {"error": "boom", "results": []}
    _assert_cors(resp)


# ---------------------------------------------------------------------------
# CORS preflight
# ---------------------------------------------------------------------------


def test_options_short_circuits(client):
    resp = client.options("/classify")
    assert resp.status_code == 200
    assert resp.content == b""
    _assert_cors(resp)


def test_options_with_preflight_headers(client):
    resp = client.options(
        "/classify",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
    )
    assert resp.status_code == 200
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


# ---------------------------------------------------------------------------
# POST /node-analysis
# ---------------------------------------------------------------------------


def test_node_analysis_aggregates_classified_results(client):
    classified = client.post(
        "/classify",
        json={"texts": ["refund now", "shipping slow", "refund late"], "nodes": NODES},
    ).json()["results"]

    resp = client.post("/node-analysis", json={"results": classified})
    assert resp.status_code == 200
    nodes = resp.json()["nodes"]
    assert [n["nodeId"] for n in nodes] == ["a", "b"]
    assert nodes[0]["totalTexts"] == 2
    assert nodes[0]["avgPolarity"] == 0
    assert nodes[0]["sentimentDistribution"] == {"positive": 0, "neutral": 2, "negative": 0}
    assert nodes[0]["avgKpiScores"]["trust"] == 0.5


def test_node_analysis_empty_results(client):
    resp = client.post("/node-analysis", json={"results": []})
    assert resp.status_code == 200
    assert resp.json() == {"nodes": []}


def test_node_analysis_missing_results_returns_500(client):
    resp = client.post("/node-analysis", json={})
    assert resp.status_code == 500
    assert resp.json() == {"error": "results array is required", "nodes": []}
