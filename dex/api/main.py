"""FastAPI application for the exchange.

Note: Authentication and rate limiting are not implemented at the
application level. They belong to the infrastructure in front of it.
"""

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dex import __version__
from dex.api.endpoints import router
from dex.config import ExchangeConfig
from dex.errors import ExchangeError
from dex.logging_config import configure_logging
from dex.models.responses import ErrorResponse

logger = structlog.get_logger()

CONFIG = ExchangeConfig.from_env()

# Status code per error kind
ERROR_STATUS = {
    "invalid-parameter": 400,
    "state-conflict": 409,
    "insufficient-value": 422,
    "arithmetic-overflow": 400,
}

app = FastAPI(
    title="Constant-product exchange",
    description="Pool registry, liquidity, and swaps on a constant-product curve",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than the configured maximum."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > CONFIG.max_request_size:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(ExchangeError)
async def exchange_error_handler(request: Request, exc: ExchangeError) -> JSONResponse:
    """Translate a rejected operation into a JSON error body."""
    status_code = ERROR_STATUS.get(exc.kind, 400)
    logger.warning(
        "operation_rejected",
        path=request.url.path,
        kind=exc.kind,
        code=type(exc).__name__,
        detail=str(exc),
    )
    body = ErrorResponse(error=exc.kind, code=type(exc).__name__, detail=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the exchange API server.

    Configuration via environment variables:
    - DEX_HOST: Host to bind to (default: 0.0.0.0)
    - DEX_PORT: Port to bind to (default: 8000)
    - DEX_DEBUG: Enable debug/reload mode (default: false)
    - DEX_LOG_LEVEL: Log level (default: INFO)
    - DEX_JSON_LOGS: Emit JSON logs (default: false)
    """
    configure_logging(CONFIG.log_level, CONFIG.json_logs)
    uvicorn.run(
        "dex.api.main:app",
        host=CONFIG.host,
        port=CONFIG.port,
        reload=CONFIG.debug,
    )


if __name__ == "__main__":
    run()
