"""Loading crate graphs from rust-project.json style workspace files."""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .models import (
    CrateData,
    CrateGraph,
    CrateId,
    Dependency,
    FileId,
    SourceRoot,
    SourceRootId,
    WorkspaceSnapshot,
)

logger = logging.getLogger(__name__)

PROJECT_FILE_NAME = "rust-project.json"


class DepSpec(BaseModel):
    """A dependency entry of a crate."""
    crate: int = Field(ge=0)  # Index into the crates list
    name: str


class CrateSpec(BaseModel):
    """A crate entry of the workspace file."""
    display_name: str | None = None
    root_module: str
    deps: list[DepSpec] = Field(default_factory=list)
    is_workspace_member: bool = True


class ProjectJson(BaseModel):
    """Top level of the workspace file."""
    crates: list[CrateSpec] = Field(default_factory=list)


class ProjectLoader:
    """Builds WorkspaceSnapshot instances from workspace files."""

    @staticmethod
    def find_project_file(project_root: Path) -> Path | None:
        """Find rust-project.json in the given directory.

        Args:
            project_root: Directory to search

        Returns:
            Path to the file if found, None otherwise
        """
        project_file = project_root / PROJECT_FILE_NAME
        if project_file.exists() and project_file.is_file():
            return project_file
        return None

    @classmethod
    def load(cls, path: Path) -> WorkspaceSnapshot:
        """Load a workspace from a project file or a directory containing one.

        Raises:
            FileNotFoundError: If no project file exists at path
            ValueError: If the file is not valid JSON or has an invalid structure
        """
        if path.is_dir():
            project_file = cls.find_project_file(path)
            if project_file is None:
                raise FileNotFoundError(f"No {PROJECT_FILE_NAME} found in {path}")
        else:
            project_file = path

        if not project_file.exists():
            raise FileNotFoundError(f"Project file not found: {project_file}")

        try:
            with open(project_file, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in project file {project_file}: {e}")

        try:
            project = ProjectJson(**data)
        except (ValidationError, TypeError) as e:
            raise ValueError(f"Invalid project structure in {project_file}: {e}")

        logger.info(f"Loaded {len(project.crates)} crates from {project_file}")
        return cls.build_snapshot(project, project_file.parent)

    @staticmethod
    def build_snapshot(project: ProjectJson, base_dir: Path) -> WorkspaceSnapshot:
        """Turn a parsed project into a crate graph with source roots.

        Every distinct root module is a file, and every directory holding a
        root module is a source root. A root is a library root when its
        crates are not workspace members.
        """
        file_ids: dict[Path, FileId] = {}
        root_ids: dict[Path, SourceRootId] = {}
        root_files: dict[SourceRootId, set[FileId]] = {}
        root_is_library: dict[SourceRootId, bool] = {}
        crates = []

        for index, crate_spec in enumerate(project.crates):
            root_module = base_dir / crate_spec.root_module
            file_id = file_ids.setdefault(root_module, FileId(len(file_ids)))
            root_id = root_ids.setdefault(root_module.parent, SourceRootId(len(root_ids)))

            is_library = not crate_spec.is_workspace_member
            known = root_is_library.setdefault(root_id, is_library)
            if known != is_library:
                raise ValueError(
                    f"Crate {index} ('{crate_spec.display_name}') disagrees with other crates in "
                    f"{root_module.parent} about workspace membership"
                )
            root_files.setdefault(root_id, set()).add(file_id)

            crates.append(CrateData(
                root_file_id=file_id,
                display_name=crate_spec.display_name,
                dependencies=tuple(Dependency(CrateId(dep.crate), dep.name) for dep in crate_spec.deps),
            ))

        source_roots = {
            root_id: SourceRoot(is_library=root_is_library[root_id], files=frozenset(files))
            for root_id, files in root_files.items()
        }
        return WorkspaceSnapshot(CrateGraph.from_crates(crates), source_roots)
