from __future__ import annotations

from typing import Optional, Sequence, Union

from ..config import DEFAULT_MAX_COLORS, DEFAULT_SOLVER
from ..palette import Color, PaletteError
from ..regions import MapData, Region
from .backtracking import (
    BacktrackingSearch,
    SearchCancelled,
    SearchInterrupted,
    SearchTimeoutError,
    run_search,
    run_search_async,
    solve_map_coloring,
    solve_map_coloring_async,
)
from .checker import is_color_valid
from .trace import RecordedStep, StepRecorder
from .types import SearchStep, SolveResult, SolverName, StepObserver
from .z3_solver import solve_with_z3

SOLVER_CHOICES: tuple[SolverName, ...] = ("backtracking", "z3")


def solve_map(
    regions: Union[MapData, Sequence[Region]],
    *,
    solver: SolverName = DEFAULT_SOLVER,  # type: ignore[assignment]
    max_colors: int = DEFAULT_MAX_COLORS,
    palette: Optional[Sequence[Color]] = None,
    on_step: Optional[StepObserver] = None,
    timeout_ms: int | None = None,
) -> SolveResult:
    if isinstance(regions, MapData):
        regions = regions.regions

    if solver == "backtracking":
        search = BacktrackingSearch(regions, max_colors, palette=palette)
        solution = run_search(search, on_step, timeout_ms=timeout_ms)
        return SolveResult(regions=solution, steps=search.steps, backtracks=search.backtracks, solver="backtracking")
    if solver == "z3":
        return SolveResult(regions=solve_with_z3(regions, max_colors, palette=palette, timeout_ms=timeout_ms), solver="z3")
    raise ValueError(f"Unknown solver {solver!r}. Choose one of: {', '.join(SOLVER_CHOICES)}")


__all__ = [
    "BacktrackingSearch",
    "PaletteError",
    "RecordedStep",
    "SOLVER_CHOICES",
    "SearchCancelled",
    "SearchInterrupted",
    "SearchStep",
    "SearchTimeoutError",
    "SolveResult",
    "SolverName",
    "StepRecorder",
    "is_color_valid",
    "run_search",
    "run_search_async",
    "solve_map",
    "solve_map_coloring",
    "solve_map_coloring_async",
    "solve_with_z3",
]
