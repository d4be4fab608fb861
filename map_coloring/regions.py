from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .palette import Color

RegionId = str


class MapFormatError(ValueError):
    pass


@dataclass
class Region:
    """One area of the map.

    `path` is an opaque shape descriptor (SVG path data in the sample maps);
    the solver never looks at it. `color` is None while uncolored.
    """

    id: RegionId
    name: str
    path: str = ""
    color: Optional[Color] = None
    adjacent_regions: List[RegionId] = field(default_factory=list)

    def copy(self, **changes: Any) -> "Region":
        region = replace(self, **changes)
        if "adjacent_regions" not in changes:
            region.adjacent_regions = list(self.adjacent_regions)
        return region

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "color": self.color,
            "adjacentRegions": list(self.adjacent_regions),
        }

    @staticmethod
    def from_dict(obj: Mapping[str, Any]) -> "Region":
        if not isinstance(obj, Mapping):
            raise MapFormatError(f"Region entry must be an object (got {type(obj).__name__})")
        if "id" not in obj:
            raise MapFormatError("Region entry is missing 'id'")
        adjacent = obj.get("adjacentRegions", obj.get("adjacent_regions", []))
        if not isinstance(adjacent, list):
            raise MapFormatError(f"adjacentRegions for {obj['id']!r} must be a list")
        color = obj.get("color")
        region_id = str(obj["id"])
        return Region(
            id=region_id,
            name=str(obj.get("name", region_id)),
            path=str(obj.get("path", "")),
            color=None if color is None else str(color),
            adjacent_regions=[str(a) for a in adjacent],
        )


@dataclass
class AdjacencyIssue:
    kind: str  # "dangling" | "asymmetric" | "self" | "duplicate"
    region_id: RegionId
    other_id: Optional[RegionId] = None

    def describe(self) -> str:
        if self.kind == "dangling":
            return f"{self.region_id!r} lists unknown region {self.other_id!r} as adjacent"
        if self.kind == "asymmetric":
            return f"{self.region_id!r} lists {self.other_id!r} as adjacent but not the other way round"
        if self.kind == "self":
            return f"{self.region_id!r} lists itself as adjacent"
        return f"region id {self.region_id!r} is used more than once"


@dataclass
class MapData:
    """An ordered collection of regions plus the editing operations of the map editor."""

    regions: List[Region] = field(default_factory=list)

    def ids(self) -> List[RegionId]:
        return [r.id for r in self.regions]

    def region(self, region_id: RegionId) -> Region:
        for r in self.regions:
            if r.id == region_id:
                return r
        raise KeyError(f"Unknown region: {region_id!r}")

    def __len__(self) -> int:
        return len(self.regions)

    def __iter__(self):
        return iter(self.regions)

    def add_region(self, region: Region) -> None:
        if any(r.id == region.id for r in self.regions):
            raise ValueError(f"Region already exists: {region.id!r}")
        self.regions.append(region)

    def remove_region(self, region_id: RegionId) -> Region:
        removed = self.region(region_id)
        self.regions = [r for r in self.regions if r.id != region_id]
        for r in self.regions:
            r.adjacent_regions = [a for a in r.adjacent_regions if a != region_id]
        return removed

    def link(self, a: RegionId, b: RegionId) -> None:
        if a == b:
            raise ValueError("A region cannot be adjacent to itself")
        ra, rb = self.region(a), self.region(b)
        if b not in ra.adjacent_regions:
            ra.adjacent_regions.append(b)
        if a not in rb.adjacent_regions:
            rb.adjacent_regions.append(a)

    def unlink(self, a: RegionId, b: RegionId) -> None:
        ra, rb = self.region(a), self.region(b)
        ra.adjacent_regions = [x for x in ra.adjacent_regions if x != b]
        rb.adjacent_regions = [x for x in rb.adjacent_regions if x != a]

    def rename(self, region_id: RegionId, name: str) -> None:
        self.region(region_id).name = name

    def copy(self) -> "MapData":
        return MapData(regions=[r.copy() for r in self.regions])

    def reset_colors(self) -> "MapData":
        return MapData(regions=[r.copy(color=None) for r in self.regions])

    def adjacency_issues(self) -> List[AdjacencyIssue]:
        issues: List[AdjacencyIssue] = []
        by_id: Dict[RegionId, Region] = {}
        for r in self.regions:
            if r.id in by_id:
                issues.append(AdjacencyIssue("duplicate", r.id))
                continue
            by_id[r.id] = r

        for r in self.regions:
            for other in r.adjacent_regions:
                if other == r.id:
                    issues.append(AdjacencyIssue("self", r.id, other))
                elif other not in by_id:
                    issues.append(AdjacencyIssue("dangling", r.id, other))
                elif r.id not in by_id[other].adjacent_regions:
                    issues.append(AdjacencyIssue("asymmetric", r.id, other))
        return issues

    def symmetrized(self) -> "MapData":
        """Copy with one-sided edges mirrored and dangling/self references dropped."""
        known = {r.id for r in self.regions}
        out = MapData(regions=[r.copy(adjacent_regions=[]) for r in self.regions])
        for r in self.regions:
            for other in r.adjacent_regions:
                if other == r.id or other not in known:
                    continue
                out.link(r.id, other)
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {"regions": [r.to_dict() for r in self.regions]}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @staticmethod
    def from_dict(obj: Any) -> "MapData":
        if isinstance(obj, list):
            raw_regions = obj
        elif isinstance(obj, Mapping):
            raw_regions = obj.get("regions")
            if not isinstance(raw_regions, list):
                raise MapFormatError("Map document must contain a 'regions' list")
        else:
            raise MapFormatError(f"Map document must be an object or a list (got {type(obj).__name__})")
        return MapData(regions=[Region.from_dict(r) for r in raw_regions])

    @staticmethod
    def from_json(text: str) -> "MapData":
        try:
            obj = json.loads(text)
        except json.JSONDecodeError as e:
            raise MapFormatError(f"Invalid map JSON: {e}") from e
        return MapData.from_dict(obj)

    @staticmethod
    def from_file(path: str | Path) -> "MapData":
        path = Path(path)
        return MapData.from_json(path.read_text(encoding="utf-8"))
