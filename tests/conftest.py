"""Shared fixtures for crategraph tests."""

import os
import stat
from pathlib import Path

import pytest

from crategraph.models import (
    CrateData,
    CrateGraph,
    CrateId,
    Dependency,
    FileId,
    SourceRoot,
    SourceRootId,
    WorkspaceSnapshot,
)


def _build_snapshot(crates, library=()):
    """Build a snapshot where every crate has its own file and source root.

    crates is a list of (display_name, [(dep_index, dep_name), ...]) and
    library holds the indices of crates living in library roots.
    """
    data = []
    roots = {}
    for index, (name, deps) in enumerate(crates):
        data.append(CrateData(
            root_file_id=FileId(index),
            display_name=name,
            dependencies=tuple(Dependency(CrateId(target), dep_name) for target, dep_name in deps),
        ))
        roots[SourceRootId(index)] = SourceRoot(
            is_library=index in library,
            files=frozenset({FileId(index)}),
        )
    return WorkspaceSnapshot(CrateGraph.from_crates(data), roots)


@pytest.fixture
def make_db():
    """Factory for WorkspaceSnapshot instances."""
    return _build_snapshot


@pytest.fixture
def three_crate_db():
    """app (workspace) depends on util (workspace) and serde (library)."""
    return _build_snapshot(
        [
            ("app", [(1, "util"), (2, "serde")]),
            ("util", []),
            ("serde", []),
        ],
        library={2},
    )


@pytest.fixture
def fake_renderer(tmp_path):
    """Factory writing an executable shell script that stands in for dot."""
    if os.name != "posix":
        pytest.skip("fake renderers are shell scripts")

    def _make(body: str, name: str = "fake-dot") -> Path:
        script = tmp_path / name
        script.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make
