"""Crate graph snapshot models.

A snapshot is owned by whoever produced it (an IDE session, a build tool, or
:mod:`crategraph.project`). The rendering pipeline only reads it for the
duration of one request.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Protocol

from .errors import GraphInvariantError

MISSING_NAME = "_missing_name_"


@dataclass(frozen=True, order=True)
class CrateId:
    """Handle of a crate inside one CrateGraph snapshot."""
    raw: int

    def __str__(self) -> str:
        return str(self.raw)


@dataclass(frozen=True, order=True)
class FileId:
    """Handle of a source file."""
    raw: int


@dataclass(frozen=True, order=True)
class SourceRootId:
    """Handle of a source root."""
    raw: int


@dataclass(frozen=True)
class Dependency:
    """Edge from a dependent crate to the crate it depends on."""
    crate_id: CrateId
    name: str  # Name the dependency is declared under


@dataclass(frozen=True)
class CrateData:
    """Attributes of a single crate."""
    root_file_id: FileId
    display_name: str | None = None
    dependencies: tuple[Dependency, ...] = ()

    @property
    def label(self) -> str:
        """Display name, or a fixed placeholder when the crate has none."""
        return self.display_name or MISSING_NAME


@dataclass(frozen=True)
class SourceRoot:
    """A group of files that are either library (external) or workspace code."""
    is_library: bool
    files: frozenset[FileId] = field(default_factory=frozenset)


class CrateGraph:
    """Immutable crate dependency graph."""

    def __init__(self, crates: Iterable[CrateData] = ()):
        self._crates: tuple[CrateData, ...] = tuple(crates)
        for index, crate in enumerate(self._crates):
            for dep in crate.dependencies:
                if not 0 <= dep.crate_id.raw < len(self._crates):
                    raise ValueError(
                        f"Crate {index} depends on unknown crate {dep.crate_id.raw} ('{dep.name}')"
                    )

    @classmethod
    def from_crates(cls, crates: Iterable[CrateData]) -> "CrateGraph":
        """Build a graph, assigning ids 0..n-1 in iteration order."""
        return cls(crates)

    def __iter__(self) -> Iterator[CrateId]:
        return (CrateId(index) for index in range(len(self._crates)))

    def __len__(self) -> int:
        return len(self._crates)

    def __contains__(self, crate_id: object) -> bool:
        return isinstance(crate_id, CrateId) and 0 <= crate_id.raw < len(self._crates)

    def __getitem__(self, crate_id: CrateId) -> CrateData:
        if crate_id not in self:
            raise KeyError(crate_id)
        return self._crates[crate_id.raw]

    def __repr__(self) -> str:
        return f"CrateGraph({len(self._crates)} crates)"


class SourceDatabase(Protocol):
    """Read-only view of a workspace consumed by the rendering pipeline."""

    def crate_graph(self) -> CrateGraph: ...

    def file_source_root(self, file_id: FileId) -> SourceRootId: ...

    def source_root(self, root_id: SourceRootId) -> SourceRoot: ...


class WorkspaceSnapshot:
    """In-memory SourceDatabase over a fixed crate graph and its source roots."""

    def __init__(
        self,
        graph: CrateGraph,
        source_roots: Mapping[SourceRootId, SourceRoot],
    ):
        self._graph = graph
        self._source_roots = MappingProxyType(dict(source_roots))
        self._file_roots: dict[FileId, SourceRootId] = {}
        for root_id, root in self._source_roots.items():
            for file_id in root.files:
                self._file_roots[file_id] = root_id

    def crate_graph(self) -> CrateGraph:
        return self._graph

    def file_source_root(self, file_id: FileId) -> SourceRootId:
        try:
            return self._file_roots[file_id]
        except KeyError:
            raise GraphInvariantError(f"File {file_id.raw} does not belong to any source root") from None

    def source_root(self, root_id: SourceRootId) -> SourceRoot:
        try:
            return self._source_roots[root_id]
        except KeyError:
            raise GraphInvariantError(f"Unknown source root {root_id.raw}") from None

    @property
    def source_roots(self) -> Mapping[SourceRootId, SourceRoot]:
        return self._source_roots
