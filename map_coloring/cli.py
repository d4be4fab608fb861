from __future__ import annotations

import argparse
from typing import Optional, Sequence

from .config import DEFAULT_MAX_COLORS, DEFAULT_SOLVER, DEFAULT_TIMEOUT_MS
from .graph import AdjacencyGraph
from .regions import MapData
from .samples import sample_map, sample_names
from .solver import SOLVER_CHOICES, SearchInterrupted, StepRecorder, solve_map

EXIT_OK = 0
EXIT_UNSOLVED = 1
EXIT_BAD_INPUT = 2


def load_map(ref: str) -> MapData:
    """Load `sample:<name>` or a JSON map file."""
    if ref.startswith("sample:"):
        return sample_map(ref.split(":", 1)[1])
    return MapData.from_file(ref)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="map-coloring", description="Backtracking map coloring solver")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("samples", help="List the built-in sample maps")

    p_val = sub.add_parser("validate", help="Report adjacency problems in a map")
    p_val.add_argument("map", type=str, help="Path to a .json map file, or sample:<name>")

    p_solve = sub.add_parser("solve", help="Color a map so no two adjacent regions share a color")
    p_solve.add_argument("map", type=str, help="Path to a .json map file, or sample:<name>")
    p_solve.add_argument("--colors", type=int, default=DEFAULT_MAX_COLORS, help="Number of palette colors to use")
    p_solve.add_argument("--solver", choices=SOLVER_CHOICES, default=DEFAULT_SOLVER, help="Solver backend")
    p_solve.add_argument("--timeout-ms", type=int, default=DEFAULT_TIMEOUT_MS, help="Solver timeout in milliseconds")
    p_solve.add_argument("--trace", action="store_true", help="Print every search step")
    p_solve.add_argument("--symmetrize", action="store_true", help="Mirror one-sided adjacency before solving")
    p_solve.add_argument("--strict", action="store_true", help="Refuse maps with adjacency problems")

    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.cmd == "samples":
        for name in sample_names():
            m = sample_map(name)
            print(f"{name}: regions={len(m)}")
        return EXIT_OK

    try:
        map_data = load_map(args.map)
    except (OSError, KeyError, ValueError) as e:
        print(f"Could not load map {args.map!r}: {e}")
        return EXIT_BAD_INPUT

    if args.cmd == "validate":
        issues = map_data.adjacency_issues()
        graph = AdjacencyGraph.from_map(map_data)
        print(f"{args.map}: regions={len(graph)}, edges={sum(1 for _ in graph.edges())}, issues={len(issues)}")
        for issue in issues:
            print(f"  {issue.kind}: {issue.describe()}")
        return EXIT_OK if not issues else EXIT_BAD_INPUT

    if args.cmd == "solve":
        if args.symmetrize:
            map_data = map_data.symmetrized()
        issues = map_data.adjacency_issues()
        if args.strict and issues:
            print(f"Refusing to solve {args.map}: {len(issues)} adjacency issue(s)")
            for issue in issues:
                print(f"  {issue.kind}: {issue.describe()}")
            return EXIT_BAD_INPUT

        # Lines go straight to stdout; no snapshots are retained.
        recorder = StepRecorder(max_steps=0, echo=print) if args.trace else None
        try:
            res = solve_map(
                map_data,
                solver=args.solver,
                max_colors=args.colors,
                on_step=recorder,
                timeout_ms=args.timeout_ms,
            )
        except (ValueError, SearchInterrupted) as e:
            print(f"Solver error: {e}")
            return EXIT_BAD_INPUT

        if not res.solved:
            print(f"Failed to color {args.map} with {args.colors} colors (steps={res.steps}, backtracks={res.backtracks}).")
            return EXIT_UNSOLVED

        print(f"Colored {args.map} with {args.colors} colors: regions={len(map_data)}, steps={res.steps}, backtracks={res.backtracks}")
        for region in res.regions or []:
            print(f"  {region.id} ({region.name}): {region.color}")
        return EXIT_OK

    raise AssertionError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
