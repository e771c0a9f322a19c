"""crategraph - render the workspace part of a crate dependency graph.

crategraph selects the crates a workspace owns, writes them as a Graphviz DOT
description and lets the `dot` tool turn that into an SVG diagram.
"""

__version__ = "0.1.0"
__description__ = "Render workspace crate dependency graphs with Graphviz"

from crategraph.config import CrateGraphConfig
from crategraph.errors import (
    CrateGraphError,
    GraphInvariantError,
    RenderError,
    RendererIOError,
    RendererNotFoundError,
    RendererTimeoutError,
)
from crategraph.render import GraphvizRenderer
from crategraph.view import crate_graph_dot, view_crate_graph

__all__ = [
    "__version__",
    "__description__",
    "CrateGraphConfig",
    "CrateGraphError",
    "GraphInvariantError",
    "GraphvizRenderer",
    "RenderError",
    "RendererIOError",
    "RendererNotFoundError",
    "RendererTimeoutError",
    "crate_graph_dot",
    "view_crate_graph",
]
