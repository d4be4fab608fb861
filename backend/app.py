from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Allow running `python backend/app.py` from repo root.
_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from map_coloring.config import DEFAULT_MAX_COLORS, DEFAULT_SOLVER, DEFAULT_TIMEOUT_MS, MAX_TIMEOUT_MS, MAX_TRACE_STEPS
from map_coloring.graph import AdjacencyGraph
from map_coloring.logging_utils import get_logger
from map_coloring.palette import MAP_COLORS
from map_coloring.regions import MapData
from map_coloring.samples import sample_map, sample_names
from map_coloring.solver import SOLVER_CHOICES, SearchInterrupted, StepRecorder, is_color_valid, solve_map

logger = get_logger("backend")


def _map_summary(name: str, map_data: MapData) -> Dict[str, Any]:
    graph = AdjacencyGraph.from_map(map_data)
    return {
        "name": name,
        "regions": len(graph),
        "edges": sum(1 for _ in graph.edges()),
    }


def _issues_payload(map_data: MapData) -> List[Dict[str, Any]]:
    return [
        {"kind": i.kind, "region_id": i.region_id, "other_id": i.other_id, "message": i.describe()}
        for i in map_data.adjacency_issues()
    ]


def _resolve_map(req: "MapRequest") -> MapData:
    if req.sample is not None and req.text is not None:
        raise ValueError("Send either 'sample' or 'text', not both")
    if req.sample is not None:
        return sample_map(req.sample)
    if req.text is not None:
        return MapData.from_json(req.text)
    raise ValueError("Send a map as 'text' (JSON) or pick a 'sample'")


class MapRequest(BaseModel):
    text: Optional[str] = None
    sample: Optional[str] = None
    symmetrize: bool = False


class CheckRequest(MapRequest):
    region_id: str
    color: str


class SolveRequest(MapRequest):
    solver: str = Field(default=DEFAULT_SOLVER)
    max_colors: int = Field(default=DEFAULT_MAX_COLORS, ge=1)
    palette: Optional[List[str]] = None
    timeout_ms: Optional[int] = Field(default=DEFAULT_TIMEOUT_MS, ge=1, le=MAX_TIMEOUT_MS)
    include_steps: bool = False
    max_steps: int = Field(default=MAX_TRACE_STEPS, ge=0, le=MAX_TRACE_STEPS)
    strict: bool = False


app = FastAPI(title="Map Coloring API", version="0.1.0")

cors_raw = os.environ.get("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
cors_list = [c.strip() for c in cors_raw.split(",") if c.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_list or ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/maps")
def list_maps() -> Dict[str, Any]:
    entries = [_map_summary(name, sample_map(name)) for name in sample_names()]
    return {"entries": entries, "palette": list(MAP_COLORS), "solvers": list(SOLVER_CHOICES)}


@app.get("/maps/{name}")
def get_map(name: str) -> Dict[str, Any]:
    try:
        map_data = sample_map(name)
    except KeyError as e:
        raise HTTPException(status_code=404, detail="Map not found") from e
    return {"name": name, **map_data.to_dict()}


@app.post("/validate")
def validate_map(req: MapRequest) -> Dict[str, Any]:
    try:
        map_data = _resolve_map(req)
    except (KeyError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    if req.symmetrize:
        map_data = map_data.symmetrized()
    issues = _issues_payload(map_data)
    return {"valid": not issues, "issues": issues, **_map_summary("request", map_data)}


@app.post("/check")
def check_color(req: CheckRequest) -> Dict[str, Any]:
    try:
        map_data = _resolve_map(req)
    except (KeyError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    if req.symmetrize:
        map_data = map_data.symmetrized()
    return {"region_id": req.region_id, "color": req.color, "valid": is_color_valid(map_data.regions, req.region_id, req.color)}


@app.post("/solve")
def solve(req: SolveRequest) -> Dict[str, Any]:
    try:
        map_data = _resolve_map(req)
        if req.symmetrize:
            map_data = map_data.symmetrized()
        if req.strict:
            issues = map_data.adjacency_issues()
            if issues:
                raise ValueError("Map has adjacency issues: " + "; ".join(i.describe() for i in issues))

        recorder = StepRecorder(max_steps=req.max_steps) if req.include_steps else None
        res = solve_map(
            map_data,
            solver=req.solver,  # type: ignore[arg-type]
            max_colors=req.max_colors,
            palette=req.palette,
            on_step=recorder,
            timeout_ms=req.timeout_ms,
        )
    except (KeyError, ValueError, SearchInterrupted) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    logger.info(
        "solve: solver=%s regions=%d colors=%d solved=%s steps=%d backtracks=%d",
        res.solver,
        len(map_data),
        req.max_colors,
        res.solved,
        res.steps,
        res.backtracks,
    )
    payload: Dict[str, Any] = {
        "solved": res.solved,
        "solver": res.solver,
        "regions": [r.to_dict() for r in res.regions] if res.regions is not None else None,
        "coloring": res.coloring,
        "step_count": res.steps,
        "backtrack_count": res.backtracks,
    }
    if recorder is not None:
        payload["steps"] = [s.to_dict() for s in recorder.steps]
        payload["logs"] = recorder.logs
        payload["truncated"] = recorder.truncated
    return payload
