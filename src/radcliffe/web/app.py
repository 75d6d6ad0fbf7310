"""FastAPI application exposing schema inference over HTTP."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, List, Mapping

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from radcliffe import __version__
from radcliffe.config import AppConfig
from radcliffe.decoding import load_document
from radcliffe.errors import DocumentDecodeError, UnsupportedShapeError
from radcliffe.inference.pipeline import SchemaInferrer
from radcliffe.models import DataType, Format, Metadata

LOGGER = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


class MetadataOut(BaseModel):
    path: str
    type: DataType
    format: Format | None = None


def _is_json_content_type(value: str | None) -> bool:
    if not value:
        return False
    return value.split(";", 1)[0].strip().lower() == JSON_CONTENT_TYPE


def _error_response(
    status_code: int, message: str, headers: Mapping[str, str] | None = None
) -> JSONResponse:
    LOGGER.error("%s (statusCode=%d)", message, status_code)
    return JSONResponse(
        status_code=status_code,
        content={"error": True, "message": message},
        headers=dict(headers) if headers else None,
    )


def create_app(config: AppConfig | None = None) -> FastAPI:
    config = config or AppConfig()
    inferrer = SchemaInferrer.from_config(config)

    app = FastAPI(title="Radcliffe", version=__version__)
    app.state.config = config

    def _infer_body(body: bytes) -> List[Metadata]:
        return inferrer.infer(load_document(body))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 405:
            message = f"The {request.method} method is not allowed"
        else:
            message = str(exc.detail)
        return _error_response(exc.status_code, message, exc.headers)

    @app.on_event("startup")
    async def startup_event() -> None:
        level = logging.DEBUG if config.debug else logging.INFO
        logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Any) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        LOGGER.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    @app.post("/", response_model=List[MetadataOut], response_model_exclude_none=True)
    async def infer_document(request: Request) -> Any:
        if not _is_json_content_type(request.headers.get("content-type")):
            return _error_response(400, "Content-Type must be set to application/json")

        body = await request.body()
        try:
            records = await asyncio.to_thread(_infer_body, body)
        except DocumentDecodeError:
            return _error_response(400, "Unable to parse the JSON body")
        except UnsupportedShapeError as exc:
            return _error_response(400, str(exc))

        return [MetadataOut(path=r.path, type=r.type, format=r.format) for r in records]

    @app.options("/")
    async def options_root() -> Response:
        return Response(status_code=200, headers={"Allow": "POST"})

    return app


app = create_app()
