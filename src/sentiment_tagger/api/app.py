"""FastAPI application for the sentiment tagging service."""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from types import MappingProxyType
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from sentiment_tagger.analysis.node_analysis import NodeAnalyzer
from sentiment_tagger.api.models import (
    ClassifyRequest,
    ClassifyResponse,
    ErrorResponse,
    HealthResponse,
    NodeAnalysisModel,
    NodeAnalysisRequest,
    NodeAnalysisResponse,
    SentimentResultModel,
)
from sentiment_tagger.classification.classifier import ClassificationInputError, classify
from sentiment_tagger.config import service_config
from sentiment_tagger.logging_setup import configure_logging
from sentiment_tagger.sentiment.scoring import get_scorer

logger = logging.getLogger(__name__)

# Applied to every response, success and error alike
CORS_HEADERS = MappingProxyType(
    {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    }
)

# ---------------------------------------------------------------------------
# Scorer — initialised once at startup
# ---------------------------------------------------------------------------

_scorer = get_scorer()
_node_analyzer = NodeAnalyzer()


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: RUF029
    configure_logging(service_config.log_level)
    logger.info("Sentiment tagger ready (scorer=%s)", _scorer.name)
    yield


app = FastAPI(
    title="Sentiment Tagger API",
    description=(
        "Assign text entries to keyword topic nodes and attach sentiment/KPI scores. "
        "Run 'sentiment-tagger serve' to start the server."
    ),
    version="0.1.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def cors_headers(request: Request, call_next):
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=dict(CORS_HEADERS))
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class RequestBodyError(ValueError):
    """Raised when the request body is not a JSON object."""


async def _read_payload(request: Request) -> dict[str, Any]:
    body = await request.body()
    if not body:
        raise RequestBodyError("Empty request body")
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as exc:
        raise RequestBodyError("Invalid JSON in request body") from exc
    if not isinstance(payload, dict):
        raise RequestBodyError("Request body must be a JSON object")
    return payload


def _describe(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return f"Invalid request: {details}"
    return str(exc) or exc.__class__.__name__


def _error_response(exc: Exception, empty_key: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": _describe(exc), empty_key: []},
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse, tags=["Meta"])
def health() -> HealthResponse:
    """Liveness check — reports the active scoring backend."""
    return HealthResponse(status="ok", scorer=_scorer.name)


@app.post(
    "/classify",
    response_model=ClassifyResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["Inference"],
)
@app.post(
    "/analyze-sentiment-batch",
    response_model=ClassifyResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["Inference"],
    include_in_schema=False,
)
async def classify_batch(request: Request):
    """Assign each text to a node and score it.

    Body: ``{texts: [str], nodes: [{id, name, keywords}]}``. Any failure,
    including validation, is reported as HTTP 500 with an ``error`` message
    and an empty ``results`` list.
    """
    try:
        payload = await _read_payload(request)
        req = ClassifyRequest.model_validate(payload)
        nodes = [n.to_node() for n in req.nodes] if req.nodes is not None else None
        results = classify(req.texts, nodes, scorer=_scorer)
    except (RequestBodyError, ValidationError, ClassificationInputError) as exc:
        logger.warning("Rejected classify request: %s", _describe(exc))
        return _error_response(exc, "results")
    except Exception as exc:
        logger.exception("Error in classify")
        return _error_response(exc, "results")

    return ClassifyResponse(results=[SentimentResultModel.from_result(r) for r in results])


@app.post(
    "/node-analysis",
    response_model=NodeAnalysisResponse,
    tags=["Analysis"],
)
async def node_analysis(request: Request):
    """Aggregate classified results per node (count, averages, polarity histogram)."""
    try:
        payload = await _read_payload(request)
        req = NodeAnalysisRequest.model_validate(payload)
        if req.results is None:
            raise RequestBodyError("results array is required")
        analyses = _node_analyzer.compute(r.to_result() for r in req.results)
    except (RequestBodyError, ValidationError) as exc:
        logger.warning("Rejected node-analysis request: %s", _describe(exc))
        return _error_response(exc, "nodes")
    except Exception as exc:
        logger.exception("Error in node-analysis")
        return _error_response(exc, "nodes")

    return NodeAnalysisResponse(nodes=[NodeAnalysisModel.from_analysis(a) for a in analyses])
