"""KeywordProfit - FastAPI production server."""

from __future__ import annotations

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncIterator

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response

from keyword_profit.config import AppConfig
from keyword_profit.io.outputs import export_to_csv
from keyword_profit.orchestrator import analyze_and_store
from keyword_profit.schemas import AnalysisRequest, AnalysisResponse, CsvExportRequest
from keyword_profit.utils.exceptions import KeywordAnalysisError
from keyword_profit.utils.logger import get_logger

logger = get_logger("keyword_profit")


@lru_cache
def get_config() -> AppConfig:
    return AppConfig()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    config = get_config()
    get_logger("keyword_profit", config.log_level, config.log_dir)
    logger.info("KeywordProfit server started")
    yield
    logger.info("KeywordProfit server stopped")


app = FastAPI(title="KeywordProfit", lifespan=lifespan)


@app.exception_handler(KeywordAnalysisError)
async def analysis_error_handler(request: Request, exc: KeywordAnalysisError) -> JSONResponse:
    logger.warning("Analysis rejected on %s: %s", request.url.path, exc)
    return JSONResponse({"error": str(exc)}, status_code=400)


@app.get("/health")
async def health() -> JSONResponse:
    return JSONResponse({"status": "ok"})


@app.post("/api/analyze", response_model=AnalysisResponse, response_model_by_alias=True)
async def analyze(
    payload: AnalysisRequest,
    config: AppConfig = Depends(get_config),
) -> AnalysisResponse:
    return await analyze_and_store(payload, config)


@app.post("/api/export/csv")
async def export_csv(payload: CsvExportRequest) -> Response:
    content = export_to_csv(payload.keywords, payload.currency)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="keywords.csv"'},
    )
