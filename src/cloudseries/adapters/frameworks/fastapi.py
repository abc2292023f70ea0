"""FastAPI adapter for metric discovery and rendering endpoints."""

import asyncio

from fastapi import APIRouter, HTTPException, Query, Response

from cloudseries.adapters.frameworks.query_params import _parse_window_params
from cloudseries.core.encoding.json_array import encode_matches, encode_series
from cloudseries.core.errors import LoadError
from cloudseries.core.ports import ConnectorPort


def create_series_router(connector: ConnectorPort) -> APIRouter:
    """Create a FastAPI router with /metrics/find and /render endpoints.

    Args:
        connector: Connector implementing ConnectorPort.

    Returns:
        APIRouter with /metrics/find and /render endpoints configured.
    """
    router = APIRouter()

    @router.get("/metrics/find")
    async def find_metrics(query: str = Query(default="*")) -> Response:
        """Return schema paths matching a discovery pattern."""
        body = encode_matches(connector.query(query))
        return Response(content=body, media_type="application/json")

    @router.get("/render")
    async def render(
        target: list[str] = Query(default=[]),
        from_: str | None = Query(default=None, alias="from"),
        until: str | None = Query(default=None),
    ) -> Response:
        """Return series for each target over the requested window.

        Args:
            target: Dot-delimited targets; may be repeated.
            from_: Window start (Unix seconds or offset like "-1h").
            until: Window end (Unix seconds, offset, or "now").
        """
        try:
            window = _parse_window_params(from_, until)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        try:
            loaded = await asyncio.gather(*(connector.load(t, window) for t in target))
        except LoadError as e:
            raise HTTPException(status_code=502, detail=str(e)) from e
        body = encode_series(series for group in loaded for series in group)
        return Response(content=body, media_type="application/json")

    return router
