"""Selection of the crates that belong to the user's workspace."""

import logging

from ..models import CrateId, SourceDatabase

logger = logging.getLogger(__name__)


def workspace_crates(db: SourceDatabase) -> frozenset[CrateId]:
    """Return the crates whose root file lives in a non-library source root.

    Library roots hold external code (registry dependencies, the standard
    library), so their crates are left out of rendered diagrams.
    """
    graph = db.crate_graph()
    selected = set()
    for crate_id in graph:
        root_id = db.file_source_root(graph[crate_id].root_file_id)
        if not db.source_root(root_id).is_library:
            selected.add(crate_id)

    logger.debug(f"Selected {len(selected)} of {len(graph)} crates as workspace crates")
    return frozenset(selected)
