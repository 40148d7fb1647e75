"""
gps/api.py
==========
Optional FastAPI server that lets a phone or browser push real position
fixes into a :class:`~gps.drift_source.GeoDriftSource`.

Start it alongside the view with ``CABNAV_API=1 python main.py`` or
standalone::

    python -m gps.api          # → http://localhost:8000/fix

``POST /fix`` accepts ``{lat, lng, accuracy_m?, ts?}`` and returns the
raw drift offset it produced (``null`` for the baseline fix or a stale
one; ``accepted`` is false only for a stale fix).  ``GET /metrics``
returns the drift counters.

.. note::

   This server is **not** required to run the navigation view.  Without
   it the simulated feed (or nothing at all) drives the drift.
"""

import logging
import threading
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from .drift_source import FIX_STALE, GeoDriftSource
from .fix import GeoFix

log = logging.getLogger(__name__)

# ── Pydantic request / response schemas ──────────────────────────────────────


class FixModel(BaseModel):
    """Single position fix in the request payload."""
    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)
    accuracy_m: Optional[float] = Field(default=None, ge=0.0)
    ts: Optional[float] = None


class OffsetModel(BaseModel):
    """Raw drift offset produced by a fix."""
    x: float
    y: float


class FixResponse(BaseModel):
    accepted: bool
    offset: Optional[OffsetModel] = None


# ── FastAPI application ──────────────────────────────────────────────────────

def create_app(source: GeoDriftSource) -> FastAPI:
    """Build an app bound to *source*."""
    app = FastAPI(
        title="Cab Nav GPS Ingest",
        description="Feeds device position fixes into the map camera drift.",
        version="1.0",
    )

    @app.post("/fix", response_model=FixResponse)
    def push_fix(body: FixModel):
        """Convert one fix into a drift offset."""
        ts = body.ts if body.ts is not None else time.time()
        try:
            status, offset = source.submit_fix(GeoFix(
                lat=body.lat, lng=body.lng, ts=ts, accuracy_m=body.accuracy_m,
            ))
        except (TypeError, ValueError) as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        if offset is None:
            return FixResponse(accepted=status != FIX_STALE)
        return FixResponse(accepted=True, offset=OffsetModel(x=offset.x, y=offset.y))

    @app.post("/reset")
    def reset_baseline():
        """Restart tracking from the next fix."""
        source.reset_baseline()
        return {"status": "ok"}

    @app.get("/metrics")
    def metrics():
        return source.metrics.report()

    return app


def serve_in_background(
    source: GeoDriftSource, host: str = "0.0.0.0", port: int = 8000,
) -> threading.Thread:
    """Run the ingest server on a daemon thread next to the pygame loop."""
    config = uvicorn.Config(create_app(source), host=host, port=port, log_level="warning")
    server = uvicorn.Server(config)
    thread = threading.Thread(target=server.run, daemon=True, name="GpsIngestApi")
    thread.start()
    log.info("GPS ingest API listening on http://%s:%d", host, port)
    return thread


# ── Standalone entry point ───────────────────────────────────────────────────

if __name__ == "__main__":
    print("Starting GPS ingest server on http://0.0.0.0:8000 …")
    uvicorn.run(create_app(GeoDriftSource()), host="0.0.0.0", port=8000)
