from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Literal, Optional, Union

from ..palette import Color
from ..regions import Region, RegionId

SolverName = Literal["backtracking", "z3"]
StepKind = Literal["assign", "backtrack"]

# on_step(regions_snapshot, region_id); the snapshot is the observer's to keep.
StepObserver = Callable[[List[Region], RegionId], Any]
AsyncStepObserver = Callable[[List[Region], RegionId], Union[Awaitable[Any], Any]]


@dataclass(frozen=True)
class SearchStep:
    """A single move of the search: a color placed on, or taken off, `region_id`."""

    kind: StepKind
    region_id: RegionId
    color: Optional[Color]  # the color tried (also set for backtracks)
    depth: int


@dataclass
class SolveResult:
    regions: Optional[List[Region]]  # None => no coloring with this palette
    steps: int = 0
    backtracks: int = 0
    solver: SolverName = "backtracking"

    @property
    def solved(self) -> bool:
        return self.regions is not None

    @property
    def coloring(self) -> Dict[RegionId, Optional[Color]]:
        if self.regions is None:
            return {}
        return {r.id: r.color for r in self.regions}
