"""FastAPI application for on-site window tolerance checks.

Holds one project in memory: its metadata and a registry of floors and
windows.  Every window is evaluated when it is added or edited; the
statistics, chart and export endpoints are computed from the current
registry on each request.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from packages.core.types import ProjectMetadata, WindowInput, WindowPatch
from packages.tolerance.aggregate import (
    floor_chart_series,
    floor_summary,
    project_statistics,
    status_distribution,
)
from packages.tolerance.export import ExportNotReadyError, build_export
from packages.tolerance.registry import FloorRegistry
from packages.tolerance.validation import validate_project_info, validate_window_input

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Window Tolerance API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # permissive for local development; tighten for production
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── In-memory store (single-project) ─────────────────────────────────
_state: dict = {
    "registry": FloorRegistry(),   # FloorRegistry
    "project": ProjectMetadata(),  # ProjectMetadata
}


def _dump(model: BaseModel) -> Any:
    return json.loads(model.model_dump_json(by_alias=True))


def _registry() -> FloorRegistry:
    return _state["registry"]


def _floors_payload() -> dict:
    registry = _registry()
    return {
        "current_floor_index": registry.current_floor_index,
        "floors": [_dump(f) for f in registry.floors],
    }


@app.get("/health")
def health():
    return {"status": "ok"}


# ── project metadata ─────────────────────────────────────────────────
@app.get("/project")
def get_project():
    return JSONResponse(content=_dump(_state["project"]))


@app.put("/project")
def put_project(project: ProjectMetadata):
    """Replace the project metadata after checking the required fields."""
    errors = validate_project_info(project.building_name, project.engineer_name)
    if errors:
        raise HTTPException(422, errors)
    _state["project"] = project
    logger.info(f"🏢 Project set: {project.building_name}")
    return JSONResponse(content=_dump(project))


# ── floors ───────────────────────────────────────────────────────────
class AddFloorRequest(BaseModel):
    name: Optional[str] = None


class SelectFloorRequest(BaseModel):
    index: int


@app.get("/floors")
def list_floors():
    return _floors_payload()


@app.post("/floors")
def add_floor(req: AddFloorRequest):
    floor = _registry().add_floor(req.name)
    logger.info(f"➕ Floor {floor.floor_number} added")
    return JSONResponse(content=_dump(floor))


@app.delete("/floors/{floor_id}")
def delete_floor(floor_id: str):
    """Delete a floor.  Deleting the only floor leaves one fresh empty floor."""
    registry = _registry()
    if not registry.remove_floor(floor_id):
        raise HTTPException(404, f"Floor {floor_id} not found")
    logger.info(f"🗑️  Deleted floor {floor_id}, {len(registry.floors)} floor(s) remaining")
    return {
        "deleted": floor_id,
        "remaining": len(registry.floors),
        "current_floor_index": registry.current_floor_index,
    }


@app.post("/floors/select")
def select_floor(req: SelectFloorRequest):
    index = _registry().select_floor(req.index)
    return {"current_floor_index": index}


@app.post("/clear")
def clear_all():
    _registry().clear_all()
    logger.info("🧹 All floors cleared")
    return _floors_payload()


# ── windows ──────────────────────────────────────────────────────────
@app.post("/floors/{floor_id}/windows")
def add_window(floor_id: str, window: WindowInput):
    """Validate, evaluate, and store a window on the given floor."""
    registry = _registry()
    floor = registry.get_floor(floor_id)
    if floor is None:
        raise HTTPException(404, f"Floor {floor_id} not found")

    errors = validate_window_input(window, [w.code for w in floor.windows])
    if errors:
        logger.info(f"⚠️  Rejected window {window.code!r}: {errors}")
        raise HTTPException(422, errors)

    record = registry.add_window(floor_id, window)
    logger.info(f"🪟 Window {record.code} on floor {floor.floor_number}: {record.status.value}")
    return JSONResponse(content=_dump(record))


@app.patch("/floors/{floor_id}/windows/{window_id}")
def update_window(floor_id: str, window_id: str, patch: WindowPatch):
    """Merge a partial update into a window and re-evaluate it."""
    registry = _registry()
    current = registry.get_window(floor_id, window_id)
    if current is None:
        raise HTTPException(404, f"Window {window_id} not found on floor {floor_id}")

    merged = patch.apply(current)
    other_codes = [
        w.code for w in registry.get_floor(floor_id).windows if w.id != window_id
    ]
    errors = validate_window_input(merged, other_codes)
    if errors:
        raise HTTPException(422, errors)

    record = registry.update_window(floor_id, window_id, patch)
    logger.info(f"✏️  Window {record.code} re-evaluated: {record.status.value}")
    return JSONResponse(content=_dump(record))


@app.delete("/floors/{floor_id}/windows/{window_id}")
def delete_window(floor_id: str, window_id: str):
    if not _registry().remove_window(floor_id, window_id):
        raise HTTPException(404, f"Window {window_id} not found on floor {floor_id}")
    return {"deleted": window_id}


# ── reporting ────────────────────────────────────────────────────────
@app.get("/statistics")
def get_statistics():
    floors = _registry().floors
    return JSONResponse(content={
        "project": _dump(project_statistics(floors)),
        "floors": [_dump(floor_summary(f)) for f in floors],
    })


@app.get("/charts")
def get_charts():
    """Series for the per-floor bar/line charts and the status pie chart."""
    floors = _registry().floors
    return JSONResponse(content={
        "series": [_dump(p) for p in floor_chart_series(floors)],
        "distribution": [_dump(s) for s in status_distribution(floors)],
    })


@app.get("/export")
def get_export():
    """Return the fully-derived record set for the spreadsheet exporter."""
    try:
        snapshot = build_export(_state["project"], _registry().floors)
    except ExportNotReadyError as e:
        raise HTTPException(400, str(e))
    logger.info(f"📤 Export prepared: {snapshot.statistics.total} windows")
    return JSONResponse(content=_dump(snapshot))
