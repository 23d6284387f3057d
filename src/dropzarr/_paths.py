"""Locate Zarr datasets on the local filesystem from an arbitrary dropped path.

None of these functions read chunk data.  Apart from `list_array_paths`, they
only check for well-known metadata files and list directory entries.
"""

from __future__ import annotations

import json
import os
from pathlib import Path, PurePath
from typing import TYPE_CHECKING

from pydantic import Field

from ._base import _BaseModel
from ._errors import NotADescendantError
from ._util import ignored_subfolders

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = [
    "ZARR_MARKER_FILES",
    "ZarrPathInfo",
    "find_highest_resolution_by_name",
    "find_highest_resolution_dataset",
    "find_image_root_folder",
    "find_root_folder",
    "is_zarr_folder",
    "list_array_paths",
    "relative_path_elements",
    "resolve_zarr_path",
]

ZARR_MARKER_FILES = (".zgroup", ".zarray", ".zattrs", "zarr.json")
"""Files whose presence makes a folder part of a Zarr hierarchy (v2 and v3)."""


def is_zarr_folder(folder: str | os.PathLike) -> bool:
    """Return True if `folder` directly contains any Zarr metadata file."""
    folder = Path(folder)
    return any((folder / marker).exists() for marker in ZARR_MARKER_FILES)


def _zarr_lineage(start: Path) -> list[Path]:
    """Zarr folders visited walking up from `start`, innermost first."""
    visited: list[Path] = []
    # a relative path has no parents beyond its own first component
    current = start.absolute()
    while is_zarr_folder(current):
        visited.append(current)
        if current.parent == current:  # filesystem root
            break
        current = current.parent
    return visited


def find_root_folder(path: str | os.PathLike) -> Path | None:
    """Return the outermost Zarr folder containing `path`.

    Walks up the folder tree for as long as `is_zarr_folder` holds.  Returns None
    if `path` itself is not a Zarr folder.
    """
    lineage = _zarr_lineage(Path(path))
    return lineage[-1] if lineage else None


def find_image_root_folder(path: str | os.PathLike) -> Path | None:
    """Return the folder holding the single image that `path` points into.

    If `path` lies below the top-level Zarr folder, the folder directly below the
    top level (on the way to `path`) is the image folder.  If `path` *is* the
    top-level folder, its only subfolder is the image folder, ignoring folders
    named "OME" (and any listed in DROPZARR_IGNORED_SUBFOLDERS).

    Returns None if `path` is not inside a Zarr hierarchy, if the top-level folder
    holds zero or several candidate subfolders, or if listing it fails.
    """
    lineage = _zarr_lineage(Path(path))
    if not lineage:
        return None
    if len(lineage) > 1:
        return lineage[-2]

    top_level = lineage[0]
    ignored = ignored_subfolders()
    try:
        candidates = [
            child
            for child in top_level.iterdir()
            if child.is_dir() and child.name not in ignored
        ]
    except OSError:
        return None
    return candidates[0] if len(candidates) == 1 else None


def relative_path_elements(
    ancestor: str | os.PathLike, descendant: str | os.PathLike
) -> list[str]:
    """Return the folder names leading from `ancestor` down to `descendant`.

    >>> relative_path_elements("/a/b", "/a/b/c/d")
    ['c', 'd']

    Paths are compared as given, without resolving symlinks or "..".

    Raises
    ------
    NotADescendantError
        If `descendant` is not nested under (or equal to) `ancestor`.
    """
    ancestor, descendant = PurePath(ancestor), PurePath(descendant)
    if descendant == ancestor:
        return []
    if not descendant.is_relative_to(ancestor):
        raise NotADescendantError(ancestor, descendant)
    return list(descendant.relative_to(ancestor).parts)


def find_highest_resolution_by_name(names: Sequence[str]) -> str:
    """Return the first name ending with "s0", else the first name.

    Resolution pyramids are commonly written as sibling datasets "s0", "s1", ...
    with "s0" the finest level.  Scale metadata is not consulted.
    """
    if not names:
        raise ValueError("At least one dataset name is required.")
    return next((name for name in names if name.endswith("s0")), names[0])


def _is_zarr_array(folder: Path) -> bool:
    if (folder / ".zarray").is_file():
        return True
    zarr_json = folder / "zarr.json"
    if not zarr_json.is_file():
        return False
    try:
        return json.loads(zarr_json.read_text()).get("node_type") == "array"
    except (OSError, ValueError, AttributeError):
        return False


def list_array_paths(root: str | os.PathLike) -> list[str]:
    """Return "/"-joined paths, relative to `root`, of every Zarr array below it.

    Only Zarr folders (see `is_zarr_folder`) are searched, recursively and in
    sorted order; array folders themselves are not descended into.  Each folder is
    visited once, even when symlinks point back up the tree.  A `root` that is
    itself an array yields `[""]`.
    """
    root = Path(root)
    found: list[str] = []
    visited: set[Path] = set()

    def _walk(folder: Path) -> None:
        real = folder.resolve()
        if real in visited:
            return
        visited.add(real)
        if _is_zarr_array(folder):
            found.append("/".join(relative_path_elements(root, folder)))
            return
        try:
            children = sorted(
                child
                for child in folder.iterdir()
                if child.is_dir() and is_zarr_folder(child)
            )
        except OSError:
            return
        for child in children:
            _walk(child)

    _walk(root)
    return found


def find_highest_resolution_dataset(root: str | os.PathLike) -> str | None:
    """Pick the finest dataset below `root` by name, or None if there are none."""
    datasets = list_array_paths(root)
    return find_highest_resolution_by_name(datasets) if datasets else None


class ZarrPathInfo(_BaseModel):
    """Where a dropped-in path sits inside a Zarr hierarchy."""

    root_folder: Path = Field(description="The outermost Zarr folder.")
    image_folder: Path | None = Field(
        default=None,
        description="The folder holding a single image, None when ambiguous.",
    )
    relative_segments: tuple[str, ...] = Field(
        default=(),
        description="Folder names leading from root_folder to the dropped path.",
    )

    @property
    def relative_path(self) -> str:
        return "/".join(self.relative_segments)

    @property
    def is_ambiguous(self) -> bool:
        """True when no single image folder could be determined."""
        return self.image_folder is None


def resolve_zarr_path(path: str | os.PathLike) -> ZarrPathInfo | None:
    """Resolve a dropped-in `path`, or return None if it is not inside a Zarr."""
    path = Path(path).absolute()
    root = find_root_folder(path)
    if root is None:
        return None
    return ZarrPathInfo(
        root_folder=root,
        image_folder=find_image_root_folder(path),
        relative_segments=tuple(relative_path_elements(root, path)),
    )
