from __future__ import annotations

from typing import Dict, Iterator, List, Set, Tuple

from .regions import MapData, RegionId


class AdjacencyGraph:
    """Undirected view of a map's adjacency lists.

    Edges are taken as listed: a one-sided entry still produces an edge, and
    entries naming unknown regions are collected in `dangling` instead of
    being added. Self references are dropped.
    """

    def __init__(self) -> None:
        self.names: Dict[RegionId, str] = {}
        self.dangling: List[Tuple[RegionId, RegionId]] = []
        self._edges: Set[Tuple[RegionId, RegionId]] = set()

    @staticmethod
    def from_map(map_data: MapData) -> "AdjacencyGraph":
        g = AdjacencyGraph()
        for region in map_data.regions:
            g.names.setdefault(region.id, region.name or region.id)
        for region in map_data.regions:
            for other in region.adjacent_regions:
                if other == region.id:
                    continue
                if other not in g.names:
                    g.dangling.append((region.id, other))
                    continue
                g._edges.add((region.id, other) if region.id < other else (other, region.id))
        return g

    def edges(self) -> Iterator[Tuple[RegionId, RegionId]]:
        """Yield undirected edges once, as sorted (u, v) pairs with u < v."""
        yield from sorted(self._edges)

    def __len__(self) -> int:
        return len(self.names)

    def to_networkx(self):
        """Convert to a networkx.Graph for ad-hoc experimentation."""
        import networkx as nx

        g = nx.Graph()
        for region_id, name in self.names.items():
            g.add_node(region_id, name=name)
        g.add_edges_from(self.edges())
        return g
