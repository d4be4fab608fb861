from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..config import MAX_TRACE_STEPS
from ..palette import Color
from ..regions import Region, RegionId


@dataclass
class RecordedStep:
    index: int  # 1-based
    kind: str  # "assign" | "backtrack"
    region_id: RegionId
    color: Optional[Color]  # placed on assign, removed on backtrack
    regions: List[Region]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.index,
            "kind": self.kind,
            "region_id": self.region_id,
            "color": self.color,
            "coloring": {r.id: r.color for r in self.regions},
        }


@dataclass
class StepRecorder:
    """Step observer that keeps a readable trace of the search.

    A step counts as a backtrack when the touched region is uncolored in the
    snapshot it arrives with; the color it lost is the one last placed on it.
    Only the first `max_steps` steps are retained (None keeps all). `echo`, if
    set, receives every log line as it happens, retained or not.
    """

    max_steps: Optional[int] = MAX_TRACE_STEPS
    echo: Optional[Callable[[str], Any]] = None
    steps: List[RecordedStep] = field(default_factory=list)
    logs: List[str] = field(default_factory=list)
    step_count: int = 0
    backtrack_count: int = 0
    _placed: Dict[RegionId, Color] = field(default_factory=dict, repr=False)

    def __call__(self, regions: List[Region], region_id: RegionId) -> None:
        self.step_count += 1
        region = _find(regions, region_id)
        if region.color is None:
            kind = "backtrack"
            color = self._placed.pop(region_id, None)
            self.backtrack_count += 1
            line = f'Step {self.step_count}: Backtracking from region "{region.name}" - no valid color found'
        else:
            kind = "assign"
            color = self._placed[region_id] = region.color
            line = f'Step {self.step_count}: Trying {region.color} for region "{region.name}"'

        if self.echo is not None:
            self.echo(line)
        if self.max_steps is None or len(self.steps) < self.max_steps:
            self.steps.append(RecordedStep(self.step_count, kind, region_id, color, regions))
            self.logs.append(line)

    @property
    def truncated(self) -> bool:
        return self.step_count > len(self.steps)


def _find(regions: List[Region], region_id: RegionId) -> Region:
    for r in regions:
        if r.id == region_id:
            return r
    raise KeyError(f"Unknown region in step: {region_id!r}")
