"""
Tests for the async driver and the cooperative interruption hooks.

Run with: python -m pytest tests/test_async_and_interrupts.py
"""

import asyncio

import pytest

from map_coloring.palette import MAP_COLORS
from map_coloring.samples import sample_map
from map_coloring.solver import (
    BacktrackingSearch,
    SearchCancelled,
    SearchTimeoutError,
    run_search,
    solve_map_coloring,
    solve_map_coloring_async,
)
from map_coloring.solver import backtracking

from map_builders import build_regions, is_proper

TRIANGLE = (["A", "B", "C"], [("A", "B"), ("B", "C"), ("C", "A")])


def test_async_observer_is_awaited_one_step_at_a_time():
    events = []
    in_flight = {"n": 0}

    async def observer(snapshot, region_id):
        assert in_flight["n"] == 0
        in_flight["n"] += 1
        events.append(("start", region_id))
        await asyncio.sleep(0)
        events.append(("end", region_id))
        in_flight["n"] -= 1

    solution = asyncio.run(solve_map_coloring_async(build_regions(*TRIANGLE), 2, observer))
    assert solution is None
    assert len(events) == 16
    for i in range(0, len(events), 2):
        assert events[i][0] == "start"
        assert events[i + 1] == ("end", events[i][1])


def test_async_driver_matches_sync_driver():
    regions = sample_map("australia").regions
    sync_steps = []
    async_steps = []

    sync_solution = solve_map_coloring(regions, 3, lambda snap, rid: sync_steps.append(rid))

    async def observer(snapshot, region_id):
        async_steps.append(region_id)

    async_solution = asyncio.run(solve_map_coloring_async(regions, 3, observer))
    assert sync_steps == async_steps
    assert [r.color for r in sync_solution] == [r.color for r in async_solution]


def test_async_driver_accepts_plain_callables():
    seen = []
    solution = asyncio.run(solve_map_coloring_async(sample_map("usa").regions, 3, lambda snap, rid: seen.append(rid)))
    assert solution is not None
    assert is_proper(solution, MAP_COLORS[:3])
    assert len(seen) >= len(solution)


def test_should_stop_cancels_between_steps():
    seen = []
    with pytest.raises(SearchCancelled):
        solve_map_coloring(
            build_regions(*TRIANGLE),
            2,
            lambda snap, rid: seen.append(rid),
            should_stop=lambda: len(seen) >= 3,
        )
    assert len(seen) == 3


def test_timeout_raises(monkeypatch):
    ticks = iter(range(0, 1000))
    monkeypatch.setattr(backtracking.time, "monotonic", lambda: float(next(ticks)))
    with pytest.raises(SearchTimeoutError):
        solve_map_coloring(build_regions(*TRIANGLE), 2, timeout_ms=500)


def test_interrupted_search_can_be_abandoned():
    """Stepping the generator by hand and dropping it leaves no result."""
    search = BacktrackingSearch(build_regions(*TRIANGLE), 3)
    it = iter(search)
    step = next(it)
    assert step.kind == "assign" and step.region_id == "A"
    assert {r.id: r.color for r in search.snapshot()} == {"A": MAP_COLORS[0], "B": None, "C": None}
    assert search.solved is None


def test_run_search_without_hooks():
    search = BacktrackingSearch(build_regions(*TRIANGLE), 3)
    solution = run_search(search)
    assert solution is not None
    assert search.steps == 3
    assert search.backtracks == 0
