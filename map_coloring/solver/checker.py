from __future__ import annotations

from typing import Mapping, Sequence, Union

from ..palette import Color
from ..regions import Region, RegionId

Regions = Union[Sequence[Region], Mapping[RegionId, Region]]


def is_color_valid(regions: Regions, region_id: RegionId, color: Color) -> bool:
    """Return True if no region adjacent to `region_id` currently holds `color`.

    Unknown target ids are reported invalid; adjacency entries that do not
    resolve to a region are ignored.
    """
    by_id = regions if isinstance(regions, Mapping) else _index(regions)
    region = by_id.get(region_id)
    if region is None:
        return False

    for adjacent_id in region.adjacent_regions:
        adjacent = by_id.get(adjacent_id)
        if adjacent is not None and adjacent.color == color:
            return False
    return True


def _index(regions: Sequence[Region]) -> dict:
    # First occurrence wins on duplicate ids.
    out: dict = {}
    for r in regions:
        out.setdefault(r.id, r)
    return out
