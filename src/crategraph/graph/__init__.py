"""Crate graph filtering and DOT serialization."""

from .dot import GRAPH_ID, DotCrateGraph, serialize
from .filter import workspace_crates
from .framework import DotGraph, DotId, GraphWalk, Labeller, render_dot

__all__ = [
    "GRAPH_ID",
    "DotCrateGraph",
    "DotGraph",
    "DotId",
    "GraphWalk",
    "Labeller",
    "render_dot",
    "serialize",
    "workspace_crates",
]
