"""
FastAPI application exposing the status aggregation engine.

Endpoints:
    GET  /            → health check with a minimal dashboard
    GET  /status      → snapshot computed from the configured data file
    POST /v1/resolve  → derived service statuses + overall status
    POST /v1/snapshot → full public status snapshot
"""

from __future__ import annotations

import html
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from status_engine.config import settings
from status_engine.engine import (
    derive_service_statuses,
    filter_active_incidents,
    resolve_overall_status,
)
from status_engine.loader import SnapshotLoadError, StatusInput, load_status_input
from status_engine.models import DerivedServiceStatus, OverallStatus, StatusSnapshot
from status_engine.severity import label_for
from status_engine.snapshot import build_snapshot

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------

class ResolveResponse(BaseModel):
    services: list[DerivedServiceStatus]
    overall: OverallStatus


class SnapshotRequest(StatusInput):
    generated_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title=settings.app_name,
    description="Derives public service and system status from services and incidents",
    version="1.0.0",
)


def _snapshot_from(data: StatusInput, generated_at: Optional[datetime] = None) -> StatusSnapshot:
    return build_snapshot(
        data.services,
        data.incidents,
        data.groups,
        generated_at=generated_at or datetime.now(timezone.utc),
        imminent_maintenance=settings.imminent_maintenance_statuses,
    )


def _load_configured_input() -> StatusInput:
    if settings.data_file is None:
        raise HTTPException(status_code=404, detail="No data file configured (set SAE_DATA_FILE)")
    try:
        return load_status_input(settings.data_file)
    except SnapshotLoadError as exc:
        logger.error("Failed to load status data: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.get("/", response_class=HTMLResponse)
def health_check() -> str:
    """Health check with a minimal dashboard."""
    rows = ""
    headline = "No data file configured."
    if settings.data_file is not None:
        try:
            snapshot = _snapshot_from(load_status_input(settings.data_file))
        except SnapshotLoadError as exc:
            logger.error("Dashboard could not load status data: %s", exc)
            headline = f"Status data unavailable: {html.escape(exc.reason)}"
        else:
            headline = html.escape(snapshot.overall.message)
            views = [v for g in snapshot.service_groups for v in g.services]
            views.extend(snapshot.ungrouped_services)
            for view in views:
                rows += (
                    f"<tr>"
                    f"<td>{html.escape(view.name)}</td>"
                    f"<td>{label_for(view.status)}</td>"
                    f"</tr>"
                )

    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <title>{settings.app_name}</title>
        <style>
            body {{ font-family: 'Segoe UI', sans-serif; background: #0d1117; color: #c9d1d9; padding: 2rem; }}
            h1 {{ color: #58a6ff; }}
            table {{ border-collapse: collapse; width: 100%; margin-top: 1rem; }}
            th, td {{ padding: 0.75rem 1rem; text-align: left; border-bottom: 1px solid #21262d; }}
            th {{ color: #8b949e; font-weight: 600; }}
            a {{ color: #58a6ff; }}
        </style>
    </head>
    <body>
        <h1>{settings.app_name}</h1>
        <p>{headline}</p>
        <table>
            <tr><th>Service</th><th>Status</th></tr>
            {rows}
        </table>
        <p><a href="/status">/status</a> <a href="/docs">/docs</a></p>
    </body>
    </html>
    """


@app.get("/status", response_model=StatusSnapshot)
def get_status() -> StatusSnapshot:
    """Public status snapshot for the configured data file."""
    return _snapshot_from(_load_configured_input())


@app.post("/v1/resolve", response_model=ResolveResponse)
async def resolve(data: StatusInput) -> ResolveResponse:
    """Derived status per publicly monitored service plus the overall status."""
    services = [s for s in data.services if s.is_monitored_publicly]
    derived = derive_service_statuses(
        services,
        filter_active_incidents(data.incidents),
        imminent_maintenance=settings.imminent_maintenance_statuses,
    )
    return ResolveResponse(services=derived, overall=resolve_overall_status(derived))


@app.post("/v1/snapshot", response_model=StatusSnapshot)
async def snapshot(data: SnapshotRequest) -> StatusSnapshot:
    """Full public status snapshot for the posted services and incidents."""
    return _snapshot_from(data, data.generated_at)


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "status_engine.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
