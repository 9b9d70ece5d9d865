"""
FastAPI server exposing the market data snapshot and the table images.

Routes:
- GET /api/v1/market-data: JSON snapshot, always HTTP 200
- GET /api/v1/market-tables: base64 PNG tables, HTTP 500 on top-level failure
- GET /health: liveness probe
"""

import json
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..config.defaults import DefaultConfig
from ..config.loader import ConfigLoader
from ..data.aggregator import error_snapshot
from ..errors import ConfigurationMissingError
from ..logging import configure_logging
from ..logging.config import get_route_logger
from ..service import MarketDataService
from ..utils.time import iso_timestamp

MARKET_DATA_ROUTE = "/api/v1/market-data"
MARKET_TABLES_ROUTE = "/api/v1/market-tables"

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

UNKNOWN_ERROR = "Unknown error occurred"


def _error_message(exc: Exception) -> str:
    return str(exc) or UNKNOWN_ERROR


def _error_details(exc: Exception) -> str:
    """JSON description of an exception for the tables error body."""
    details = {"type": type(exc).__name__}
    details.update({key: value for key, value in vars(exc).items()
                    if isinstance(value, (str, int, float, bool, list, type(None)))})
    return json.dumps(details, default=str)


def create_app(service: Optional[MarketDataService] = None,
               config: Optional[DefaultConfig] = None) -> FastAPI:
    """
    Build the application.

    Args:
        service: Service handling requests; built from config when omitted
        config: Configuration; loaded from settings.yaml and environment when omitted
    """
    if service is None:
        if config is None:
            config = ConfigLoader.create().load()
        configure_logging(level=config.logging.level, format_json=config.logging.format_json)
        service = MarketDataService(config)

    app = FastAPI(title="CBOT Market Snapshot API", version=__version__)
    app.state.service = service

    @app.get(MARKET_DATA_ROUTE)
    async def market_data(request: Request) -> JSONResponse:
        """Soybean and corn curves with the dollar and euro quotes."""
        logger = get_route_logger(__name__, MARKET_DATA_ROUTE)
        try:
            logger.info("Fetching market data")
            snapshot = await request.app.state.service.market_snapshot()
        except ConfigurationMissingError as e:
            logger.error("Redis environment variables missing", missing=e.missing)
            snapshot = error_snapshot(_error_message(e))
        except Exception as e:
            logger.exception("Error in market data route")
            snapshot = error_snapshot(_error_message(e))

        return JSONResponse(content=snapshot.to_dict(), status_code=200)

    @app.get(MARKET_TABLES_ROUTE)
    async def market_tables(request: Request) -> JSONResponse:
        """Rendered soybean and corn tables as base64 PNG."""
        logger = get_route_logger(__name__, MARKET_TABLES_ROUTE)
        try:
            tables = await request.app.state.service.market_tables()
        except Exception as e:
            logger.exception("Error generating market data tables")
            return JSONResponse(
                content={
                    "error": True,
                    "message": _error_message(e),
                    "details": _error_details(e),
                },
                status_code=500,
            )

        return JSONResponse(
            content={"tabelas": tables, "timestamp": iso_timestamp()},
            headers=NO_CACHE_HEADERS,
        )

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
