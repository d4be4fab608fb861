from __future__ import annotations

import inspect
import time
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from ..config import DEFAULT_MAX_COLORS
from ..logging_utils import get_logger
from ..palette import Color, resolve_palette
from ..regions import Region, RegionId
from .checker import is_color_valid
from .types import AsyncStepObserver, SearchStep, StepObserver

logger = get_logger(__name__)


class SearchInterrupted(Exception):
    pass


class SearchTimeoutError(SearchInterrupted):
    pass


class SearchCancelled(SearchInterrupted):
    pass


class BacktrackingSearch:
    """Depth-first chronological backtracking over region/color assignments.

    Iterating the search runs it, yielding a `SearchStep` after every
    assignment and every reversion. The generator is suspended at each step,
    so `snapshot()` taken there reflects the assignment at that instant.
    Regions are visited in descending order of listed adjacency count (stable
    for ties); palette colors are tried in palette order.
    """

    def __init__(
        self,
        regions: Sequence[Region],
        max_colors: int = DEFAULT_MAX_COLORS,
        *,
        palette: Optional[Sequence[Color]] = None,
    ) -> None:
        self.colors: List[Color] = resolve_palette(max_colors, palette)

        self._input_order: List[RegionId] = [r.id for r in regions]
        if len(set(self._input_order)) != len(self._input_order):
            dupes = sorted({rid for rid in self._input_order if self._input_order.count(rid) > 1})
            raise ValueError(f"Duplicate region ids: {dupes}")

        # Fresh all-uncolored working copy; input colors are ignored.
        self.assignment: Dict[RegionId, Region] = {r.id: r.copy(color=None) for r in regions}
        self.order: List[RegionId] = [r.id for r in sorted(regions, key=lambda r: -len(r.adjacent_regions))]

        self.steps = 0
        self.backtracks = 0
        self.solved: Optional[bool] = None  # None until the search has run to completion

    def __iter__(self) -> Iterator[SearchStep]:
        if self.solved is not None:
            raise RuntimeError("This search has already run")

        n = len(self.order)
        # cursors[i]: palette index of the next color to try at depth i.
        cursors = [0] * n
        index = 0
        while 0 <= index < n:
            region_id = self.order[index]
            region = self.assignment[region_id]

            if region.color is not None:
                # Back from a deeper failure: undo this depth's choice first.
                tried = region.color
                region.color = None
                self.steps += 1
                self.backtracks += 1
                yield SearchStep("backtrack", region_id, tried, index)

            placed = False
            while cursors[index] < len(self.colors):
                color = self.colors[cursors[index]]
                cursors[index] += 1
                if is_color_valid(self.assignment, region_id, color):
                    region.color = color
                    self.steps += 1
                    yield SearchStep("assign", region_id, color, index)
                    placed = True
                    break

            if placed:
                index += 1
            else:
                cursors[index] = 0
                index -= 1

        self.solved = index == n

    def snapshot(self) -> List[Region]:
        """Copy of the current assignment, in input order."""
        return [self.assignment[rid].copy() for rid in self._input_order]

    def result(self) -> Optional[List[Region]]:
        if self.solved is None:
            raise RuntimeError("The search has not finished")
        return self.snapshot() if self.solved else None


def _make_guard(should_stop: Optional[Callable[[], bool]], timeout_ms: Optional[int]) -> Callable[[], None]:
    start_time = time.monotonic()

    def check() -> None:
        if should_stop is not None and should_stop():
            raise SearchCancelled("Search cancelled")
        if timeout_ms is None:
            return
        elapsed_ms = (time.monotonic() - start_time) * 1000.0
        if elapsed_ms > timeout_ms:
            raise SearchTimeoutError(f"Backtracking search timed out after {timeout_ms}ms")

    return check


def run_search(
    search: BacktrackingSearch,
    on_step: Optional[StepObserver] = None,
    *,
    should_stop: Optional[Callable[[], bool]] = None,
    timeout_ms: Optional[int] = None,
) -> Optional[List[Region]]:
    check = _make_guard(should_stop, timeout_ms)
    check()
    for step in search:
        if on_step is not None:
            on_step(search.snapshot(), step.region_id)
        check()

    logger.debug(
        "search finished: solved=%s regions=%d colors=%d steps=%d backtracks=%d",
        search.solved,
        len(search.order),
        len(search.colors),
        search.steps,
        search.backtracks,
    )
    return search.result()


async def run_search_async(
    search: BacktrackingSearch,
    on_step: Optional[AsyncStepObserver] = None,
    *,
    should_stop: Optional[Callable[[], bool]] = None,
    timeout_ms: Optional[int] = None,
) -> Optional[List[Region]]:
    """Like `run_search`, but awaits the observer when it returns an awaitable.

    The search does not resume until the observer has finished with the
    current step.
    """
    check = _make_guard(should_stop, timeout_ms)
    check()
    for step in search:
        if on_step is not None:
            pending = on_step(search.snapshot(), step.region_id)
            if inspect.isawaitable(pending):
                await pending
        check()

    logger.debug(
        "async search finished: solved=%s regions=%d steps=%d backtracks=%d",
        search.solved,
        len(search.order),
        search.steps,
        search.backtracks,
    )
    return search.result()


def solve_map_coloring(
    regions: Sequence[Region],
    max_colors: int = DEFAULT_MAX_COLORS,
    on_step: Optional[StepObserver] = None,
    *,
    palette: Optional[Sequence[Color]] = None,
    should_stop: Optional[Callable[[], bool]] = None,
    timeout_ms: Optional[int] = None,
) -> Optional[List[Region]]:
    """Color `regions` so that no two adjacent regions share a color.

    Returns fresh region copies with colors set, or None when no coloring
    exists with `max_colors` colors.
    """
    search = BacktrackingSearch(regions, max_colors, palette=palette)
    return run_search(search, on_step, should_stop=should_stop, timeout_ms=timeout_ms)


async def solve_map_coloring_async(
    regions: Sequence[Region],
    max_colors: int = DEFAULT_MAX_COLORS,
    on_step: Optional[AsyncStepObserver] = None,
    *,
    palette: Optional[Sequence[Color]] = None,
    should_stop: Optional[Callable[[], bool]] = None,
    timeout_ms: Optional[int] = None,
) -> Optional[List[Region]]:
    search = BacktrackingSearch(regions, max_colors, palette=palette)
    return await run_search_async(search, on_step, should_stop=should_stop, timeout_ms=timeout_ms)
