from __future__ import annotations

import logging
from typing import Optional, Protocol

import uvicorn
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.schemas import DataResponse, ErrorResponse, HealthResponse
from core.config import Settings, load_settings
from core.decoder import decode_records
from core.errors import DecodeError, RemoteAccessDenied, RemoteNotFound, RemoteSourceError
from core.storage import S3SourceClient


logger = logging.getLogger(__name__)


class SourceClient(Protocol):
    def open_object(self): ...


def _json(data: object, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(data))


def _error(status_code: int, message: str) -> JSONResponse:
    return _json({"error": message}, status_code=status_code)


def get_table_data(source: SourceClient) -> JSONResponse:
    """One remote fetch, one parse. Errors map to 404/403/500."""
    try:
        body = source.open_object()
    except RemoteNotFound:
        logger.warning("csv object not found")
        return _error(404, "CSV file not found in S3")
    except RemoteAccessDenied:
        logger.warning("access denied fetching csv object")
        return _error(403, "Access denied to S3 bucket")
    except RemoteSourceError as exc:
        logger.error("S3 fetch error: %s", exc)
        return _error(500, f"Failed to fetch CSV: {exc}")

    if body is None:
        return _error(404, "CSV file not found or empty")

    try:
        records = decode_records(body)
    except DecodeError as exc:
        logger.error("CSV parse error: %s", exc)
        return _error(500, f"CSV parse error: {exc}")
    finally:
        close = getattr(body, "close", None)
        if callable(close):
            close()

    return _json({"data": [r.as_row() for r in records]})


def create_app(settings: Optional[Settings] = None, source: Optional[SourceClient] = None) -> FastAPI:
    settings = settings or load_settings()
    source = source or S3SourceClient(settings)

    app = FastAPI(title="CSV Table API", version="0.1.0")
    app.state.settings = settings
    app.state.source = source

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    def health():
        return {"status": "ok"}

    @app.get(
        "/api/data",
        response_model=DataResponse,
        responses={404: {"model": ErrorResponse}, 403: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def api_data():
        try:
            return get_table_data(app.state.source)
        except Exception as exc:
            logger.exception("api_data failed")
            return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})

    return app


def run(settings: Optional[Settings] = None) -> None:
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("Server running at http://localhost:%s/", settings.port)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
