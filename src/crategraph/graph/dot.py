"""DOT serialization of workspace crate graphs."""

import io

from ..models import CrateGraph, CrateId, Dependency
from .framework import DotGraph, DotId, render_dot

GRAPH_ID = "crate_graph"

Edge = tuple[CrateId, Dependency]


class DotCrateGraph(DotGraph[CrateId, Edge]):
    """Crate graph restricted to a set of crates, walkable as DOT.

    Edges leaving the set are dropped, so every edge has both endpoints
    among the rendered nodes.
    """

    def __init__(self, graph: CrateGraph, crates_to_render: frozenset[CrateId]):
        self.graph = graph
        self.crates_to_render = crates_to_render

    def nodes(self) -> list[CrateId]:
        return sorted(self.crates_to_render)

    def edges(self) -> list[Edge]:
        edges: list[Edge] = []
        seen: set[tuple[CrateId, CrateId]] = set()
        for krate in self.nodes():
            for dep in self.graph[krate].dependencies:
                if dep.crate_id not in self.crates_to_render:
                    continue
                # A crate may depend on the same crate under two names
                if (krate, dep.crate_id) in seen:
                    continue
                seen.add((krate, dep.crate_id))
                edges.append((krate, dep))
        return edges

    def source(self, edge: Edge) -> CrateId:
        return edge[0]

    def target(self, edge: Edge) -> CrateId:
        return edge[1].crate_id

    def graph_id(self) -> DotId:
        return DotId(GRAPH_ID)

    def node_id(self, node: CrateId) -> DotId:
        return DotId(f"{self.graph[node].label}_{node.raw}")

    def node_label(self, node: CrateId) -> str:
        return self.graph[node].label


def serialize(graph: CrateGraph, crates_to_render: frozenset[CrateId]) -> bytes:
    """Serialize the selected part of graph to DOT bytes."""
    buffer = io.BytesIO()
    render_dot(DotCrateGraph(graph, crates_to_render), buffer)
    return buffer.getvalue()
