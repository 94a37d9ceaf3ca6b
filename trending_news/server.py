"""FastAPI application serving aggregated trending news."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .schemas import ErrorResponse, SourceResponse, TrendingResponse
from .service import FeedAggregator

LOGGER = logging.getLogger(__name__)


def _error_response(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


def create_app(aggregator: FeedAggregator, fail_fast: bool = True) -> FastAPI:
    app = FastAPI(title="Trending News", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def get_aggregator() -> FeedAggregator:
        return aggregator

    @app.get("/healthz", summary="Health check")
    def health_check() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/sources", response_model=list[SourceResponse])
    def list_sources(service: FeedAggregator = Depends(get_aggregator)) -> list[SourceResponse]:
        return [SourceResponse.from_source(source) for source in service.sources]

    @app.get(
        "/api/trending",
        response_model=TrendingResponse,
        response_model_exclude_none=True,
        responses={500: {"model": ErrorResponse}},
    )
    def trending(service: FeedAggregator = Depends(get_aggregator)):
        """Fetch all feeds now and return up to ten articles per source."""

        try:
            if fail_fast:
                return TrendingResponse.from_result(service.aggregate())
            report = service.aggregate_report()
        except Exception as exc:  # any fetch or parse failure fails the request
            LOGGER.exception("Trending aggregation failed")
            return _error_response(str(exc))

        if report.errors and not report.feeds:
            return _error_response("; ".join(report.errors.values()))
        return TrendingResponse.from_result(report.feeds, report.errors)

    return app


__all__ = ["create_app"]
