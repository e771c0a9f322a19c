"""View Crate Graph: render the workspace part of a crate graph as SVG.

Only workspace crates are included. Registry dependencies and sysroot crates
live in library source roots and are left out, together with every edge
pointing at them.
"""

import logging

from .graph import serialize, workspace_crates
from .models import SourceDatabase
from .render import GraphvizRenderer

logger = logging.getLogger(__name__)


def crate_graph_dot(db: SourceDatabase) -> bytes:
    """Return the DOT description of the workspace crates in db."""
    crate_graph = db.crate_graph()
    crates_to_render = workspace_crates(db)
    return serialize(crate_graph, crates_to_render)


def view_crate_graph(db: SourceDatabase, renderer: GraphvizRenderer | None = None) -> str:
    """Render the workspace crates in db as an SVG document.

    Args:
        db: Workspace to render, read for the duration of the call
        renderer: Renderer to use (default: `dot` from PATH)

    Returns:
        SVG text

    Raises:
        RenderError: If the external renderer fails
        GraphInvariantError: If db maps a crate to no source root
    """
    if renderer is None:
        renderer = GraphvizRenderer()

    dot = crate_graph_dot(db)
    logger.info(f"Rendering crate graph ({len(dot)} bytes of DOT) with {renderer.executable}")
    return renderer.render(dot)
