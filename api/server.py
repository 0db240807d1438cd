"""server.py — FastAPI stylize API.

Run with:
    uvicorn api.server:app --host 0.0.0.0 --port 8000

POST the encoded photo as the raw request body to /stylize/{stock}; the
response is the rendered JPEG.  Pass ``seed`` for reproducible grain.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import FastAPI, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response

from darkroom import STOCK_INFO, Stock, apply_filter
from darkroom.exceptions import (
    APIError,
    BadImageError,
    DecodeError,
    NotFoundError,
    RenderError,
    ServerRenderError,
    UnsupportedPresetError,
)
from darkroom.logging import get_logger

from .models import ErrorResponse, StockInfo

logger = get_logger()

app = FastAPI(title="Darkroom Stock API", version="1.0.0")


@app.exception_handler(APIError)
async def _api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(detail=exc.message).model_dump(),
    )


# Endpoints


@app.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/stocks")
def list_stocks() -> list[StockInfo]:
    """List every stock with its display name and description."""
    return [
        StockInfo(
            id=stock.value,
            name=STOCK_INFO[stock][0],
            description=STOCK_INFO[stock][1],
            instant_film=stock.is_instant_film,
        )
        for stock in Stock
    ]


@app.post(
    "/stylize/{stock}",
    response_class=Response,
    responses={
        200: {"content": {"image/jpeg": {}}},
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def stylize(
    stock: str,
    request: Request,
    seed: Annotated[int | None, Query(ge=0)] = None,
) -> Response:
    """Render the request body on *stock* and return JPEG bytes."""
    try:
        preset = Stock.parse(stock)
    except UnsupportedPresetError as exc:
        raise NotFoundError(str(exc))

    body = await request.body()
    try:
        data = await run_in_threadpool(apply_filter, body, preset, seed=seed)
    except DecodeError as exc:
        raise BadImageError(str(exc))
    except RenderError as exc:
        logger.error("render failed for %s: %s", preset.value, exc)
        raise ServerRenderError(str(exc))

    return Response(content=data, media_type="image/jpeg")
