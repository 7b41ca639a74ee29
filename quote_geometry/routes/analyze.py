from __future__ import annotations

import json

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from quote_geometry.schemas.analysis import AnalyzeResponse, ErrorResponse
from quote_geometry.services.analyzer import QuoteAnalyzer
from quote_geometry.services.deps import get_analyzer

router = APIRouter(prefix="/api", tags=["analyze"])

BAD_REQUEST_MESSAGE = "Please provide an array of quotes."


def _reject_constant(name: str):
    # NaN / Infinity / -Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={400: {"model": ErrorResponse}},
)
async def analyze_quotes(request: Request, analyzer: QuoteAnalyzer = Depends(get_analyzer)):
    try:
        body = json.loads(await request.body(), parse_constant=_reject_constant)
    except ValueError:
        body = None

    quotes = body.get("quotes") if isinstance(body, dict) else None
    if not isinstance(quotes, list) or not quotes:
        return JSONResponse(status_code=400, content={"error": BAD_REQUEST_MESSAGE})

    # completion clients are blocking; keep them off the event loop
    results = await run_in_threadpool(analyzer.analyze_many, quotes)
    return AnalyzeResponse(results=results)
