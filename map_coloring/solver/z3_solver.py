from __future__ import annotations

import base64
from typing import List, Optional, Sequence

from ..config import DEFAULT_MAX_COLORS
from ..graph import AdjacencyGraph
from ..logging_utils import get_logger
from ..palette import Color, resolve_palette
from ..regions import MapData, Region
from .backtracking import SearchTimeoutError

logger = get_logger(__name__)


def solve_with_z3(
    regions: Sequence[Region],
    max_colors: int = DEFAULT_MAX_COLORS,
    *,
    palette: Optional[Sequence[Color]] = None,
    timeout_ms: int | None = None,
) -> Optional[List[Region]]:
    """Solve the same coloring problem with Z3.

    One Int var per region in [0, k); one disequality per adjacency edge whose
    endpoints both exist. Returns None when the formula is UNSAT.
    """

    try:
        import z3  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("z3-solver is required. Install with: pip install z3-solver") from e

    colors = resolve_palette(max_colors, palette)
    ids = [r.id for r in regions]
    if len(set(ids)) != len(ids):
        raise ValueError("Duplicate region ids in input")

    graph = AdjacencyGraph.from_map(MapData(regions=list(regions)))
    k = len(colors)

    col = {rid: z3.Int(_z3_name("col", rid)) for rid in ids}

    s = z3.Solver()
    if timeout_ms is not None:
        s.set(timeout=timeout_ms)

    for rid in ids:
        s.add(z3.And(col[rid] >= 0, col[rid] < k))
    for u, v in graph.edges():
        s.add(col[u] != col[v])

    chk = s.check()
    if chk == z3.unknown:
        raise SearchTimeoutError(f"Z3 returned UNKNOWN. Reason: {s.reason_unknown()}")
    if chk != z3.sat:
        logger.debug("z3: no %d-coloring for %d regions", k, len(ids))
        return None

    model = s.model()
    out: List[Region] = []
    for region in regions:
        idx = model.eval(col[region.id], model_completion=True).as_long()
        out.append(region.copy(color=colors[int(idx)]))
    return out


def _z3_name(prefix: str, raw: str) -> str:
    """Encode arbitrary strings into collision-free Z3-safe names."""
    raw_bytes = raw.encode("utf-8")
    enc = base64.urlsafe_b64encode(raw_bytes).decode("ascii").rstrip("=")
    if not enc:
        enc = "empty"
    return f"{prefix}_{enc}"
