"""Fixtures building small on-disk Zarr hierarchies."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

Y_AXIS = {"name": "y", "type": "space", "unit": "micrometer"}
X_AXIS = {"name": "x", "type": "space", "unit": "micrometer"}


def two_level_multiscales(version: str = "0.4") -> dict[str, Any]:
    """A 2D pyramid: level 1 is downsampled by 2 and shifted by half a pixel."""
    return {
        "version": version,
        "name": "image",
        "axes": [Y_AXIS, X_AXIS],
        "datasets": [
            {
                "path": "0",
                "coordinateTransformations": [{"type": "scale", "scale": [1, 1]}],
            },
            {
                "path": "1",
                "coordinateTransformations": [
                    {"type": "scale", "scale": [2, 2]},
                    {"type": "translation", "translation": [0.5, 0.5]},
                ],
            },
        ],
    }


def _write_json(path: Path, doc: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(doc))


def write_v2_group(folder: Path, attrs: dict[str, Any] | None = None) -> Path:
    _write_json(folder / ".zgroup", {"zarr_format": 2})
    if attrs is not None:
        _write_json(folder / ".zattrs", attrs)
    return folder


def write_v2_array(folder: Path, shape: list[int]) -> Path:
    _write_json(
        folder / ".zarray",
        {
            "zarr_format": 2,
            "shape": shape,
            "chunks": shape,
            "dtype": "<u2",
            "compressor": None,
            "fill_value": 0,
            "order": "C",
            "filters": None,
            "dimension_separator": "/",
        },
    )
    # a nested chunk, so the array folder has a plain (non-zarr) subfolder
    chunk = folder.joinpath(*["0"] * len(shape))
    chunk.parent.mkdir(parents=True, exist_ok=True)
    chunk.write_bytes(b"\x00")
    return folder


def write_v3_group(folder: Path, attrs: dict[str, Any] | None = None) -> Path:
    _write_json(
        folder / "zarr.json",
        {"zarr_format": 3, "node_type": "group", "attributes": attrs or {}},
    )
    return folder


def write_v3_array(folder: Path, shape: list[int]) -> Path:
    _write_json(
        folder / "zarr.json",
        {
            "zarr_format": 3,
            "node_type": "array",
            "shape": shape,
            "data_type": "uint16",
            "chunk_grid": {
                "name": "regular",
                "configuration": {"chunk_shape": shape},
            },
            "chunk_key_encoding": {"name": "default"},
            "fill_value": 0,
            "codecs": [{"name": "bytes"}],
        },
    )
    chunk = folder.joinpath("c", *["0"] * len(shape))
    chunk.parent.mkdir(parents=True, exist_ok=True)
    chunk.write_bytes(b"\x00")
    return folder


@pytest.fixture
def v2_image(tmp_path: Path) -> Path:
    """A v0.4 image group (Zarr v2) with arrays "0" and "1"."""
    root = write_v2_group(
        tmp_path / "image.zarr", {"multiscales": [two_level_multiscales()]}
    )
    write_v2_array(root / "0", [1000, 1000])
    write_v2_array(root / "1", [500, 500])
    return root


@pytest.fixture
def v3_image(tmp_path: Path) -> Path:
    """A v0.5 image group (Zarr v3) with arrays "0" and "1"."""
    ms = two_level_multiscales()
    del ms["version"]
    root = write_v3_group(
        tmp_path / "image_v3.zarr",
        {"ome": {"version": "0.5", "multiscales": [ms]}},
    )
    write_v3_array(root / "0", [1000, 1000])
    write_v3_array(root / "1", [500, 500])
    return root


@pytest.fixture
def bf2raw_store(tmp_path: Path) -> Path:
    """A bioformats2raw layout: one image group "0" next to an "OME" group."""
    root = write_v2_group(tmp_path / "converted.zarr", {"bioformats2raw.layout": 3})
    write_v2_group(root / "OME", {"series": ["0"]})
    image = write_v2_group(root / "0", {"multiscales": [two_level_multiscales()]})
    write_v2_array(image / "0", [1000, 1000])
    write_v2_array(image / "1", [500, 500])
    return root

