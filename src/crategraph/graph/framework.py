"""Graph walking and labelling interfaces used by the DOT writer."""

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import BinaryIO, Generic, TypeVar

logger = logging.getLogger(__name__)

N = TypeVar("N")
E = TypeVar("E")

_BARE_ID = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_KEYWORDS = frozenset({"node", "edge", "graph", "digraph", "subgraph", "strict"})


class DotId:
    """An identifier in the DOT language.

    Any string is accepted. Strings that are not plain DOT identifiers are
    written as quoted strings instead of being rejected.
    """

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    @property
    def is_bare(self) -> bool:
        return bool(_BARE_ID.fullmatch(self.name)) and self.name.lower() not in _KEYWORDS

    def to_dot(self) -> str:
        if self.is_bare:
            return self.name
        return quote(self.name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DotId) and other.name == self.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"DotId({self.name!r})"


def quote(text: str) -> str:
    """Return text as a double-quoted DOT string."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
        .replace("\r", "\\n")
    )
    return f'"{escaped}"'


class GraphWalk(ABC, Generic[N, E]):
    """Enumerates the nodes and edges of a graph."""

    @abstractmethod
    def nodes(self) -> Sequence[N]:
        """Nodes in output order."""
        pass

    @abstractmethod
    def edges(self) -> Sequence[E]:
        """Edges in output order."""
        pass

    @abstractmethod
    def source(self, edge: E) -> N:
        pass

    @abstractmethod
    def target(self, edge: E) -> N:
        pass


class Labeller(ABC, Generic[N]):
    """Names the graph and its nodes."""

    @abstractmethod
    def graph_id(self) -> DotId:
        pass

    @abstractmethod
    def node_id(self, node: N) -> DotId:
        pass

    def node_label(self, node: N) -> str | None:
        """Optional human-readable label; None emits no label attribute."""
        return None


class DotGraph(GraphWalk[N, E], Labeller[N], ABC):
    """A graph that can be written as DOT."""


def render_dot(graph: DotGraph, out: BinaryIO) -> None:
    """Write graph to out as a directed DOT graph, UTF-8 encoded."""
    lines = [f"digraph {graph.graph_id().to_dot()} {{"]

    nodes = graph.nodes()
    for node in nodes:
        node_id = graph.node_id(node).to_dot()
        label = graph.node_label(node)
        if label is None:
            lines.append(f"    {node_id};")
        else:
            lines.append(f"    {node_id} [label={quote(label)}];")

    edges = graph.edges()
    for edge in edges:
        source = graph.node_id(graph.source(edge)).to_dot()
        target = graph.node_id(graph.target(edge)).to_dot()
        lines.append(f"    {source} -> {target};")

    lines.append("}")
    # Lone surrogates cannot be encoded; write them as \udcXX escapes
    out.write(("\n".join(lines) + "\n").encode("utf-8", errors="backslashreplace"))
    logger.debug(f"Wrote DOT graph with {len(nodes)} nodes and {len(edges)} edges")
