"""Unit tests for workspace crate selection."""

import pytest

from crategraph.errors import GraphInvariantError
from crategraph.graph import workspace_crates
from crategraph.models import (
    CrateData,
    CrateGraph,
    CrateId,
    FileId,
    SourceRoot,
    SourceRootId,
    WorkspaceSnapshot,
)


class TestWorkspaceCrates:
    """Test workspace_crates()."""

    def test_library_crates_excluded(self, three_crate_db):
        assert workspace_crates(three_crate_db) == frozenset({CrateId(0), CrateId(1)})

    def test_all_library(self, make_db):
        db = make_db([("std", []), ("core", [])], library={0, 1})
        assert workspace_crates(db) == frozenset()

    def test_empty_graph(self, make_db):
        assert workspace_crates(make_db([])) == frozenset()

    def test_shared_source_root(self):
        """Crates whose files share one root get that root's classification."""
        graph = CrateGraph.from_crates([
            CrateData(root_file_id=FileId(0), display_name="a"),
            CrateData(root_file_id=FileId(1), display_name="b"),
            CrateData(root_file_id=FileId(2), display_name="vendored"),
        ])
        db = WorkspaceSnapshot(graph, {
            SourceRootId(0): SourceRoot(is_library=False, files=frozenset({FileId(0), FileId(1)})),
            SourceRootId(1): SourceRoot(is_library=True, files=frozenset({FileId(2)})),
        })
        assert workspace_crates(db) == frozenset({CrateId(0), CrateId(1)})

    def test_unmapped_root_file_propagates(self):
        graph = CrateGraph.from_crates([CrateData(root_file_id=FileId(3), display_name="lost")])
        db = WorkspaceSnapshot(graph, {})
        with pytest.raises(GraphInvariantError):
            workspace_crates(db)

    def test_recomputed_per_call(self, make_db):
        """The set reflects whichever snapshot is passed in."""
        before = make_db([("a", []), ("b", [])])
        after = make_db([("a", []), ("b", [])], library={1})
        assert workspace_crates(before) == frozenset({CrateId(0), CrateId(1)})
        assert workspace_crates(after) == frozenset({CrateId(0)})
