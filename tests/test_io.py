from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

pytest.importorskip("fsspec")

from dropzarr import (  # noqa: E402
    InvalidMultiscalesError,
    UnsupportedVersionError,
    open_multiscales,
    v04,
)
from dropzarr._io import read_array_ndim, read_attributes  # noqa: E402

if TYPE_CHECKING:
    from pathlib import Path


def test_read_attributes_v2(v2_image: Path) -> None:
    attrs = read_attributes(v2_image)
    assert attrs["multiscales"][0]["version"] == "0.4"
    assert read_attributes(v2_image / ".zattrs") == attrs
    assert read_attributes(str(v2_image) + "/") == attrs


def test_read_attributes_v3(v3_image: Path) -> None:
    attrs = read_attributes(v3_image)
    assert attrs["ome"]["version"] == "0.5"
    assert read_attributes(v3_image / "zarr.json") == attrs


def test_read_attributes_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Could not find zarr group"):
        read_attributes(tmp_path)


def test_read_array_ndim(v2_image: Path, v3_image: Path) -> None:
    assert read_array_ndim(v2_image / "0") == 2
    assert read_array_ndim(v3_image / "1") == 2
    # a group has no shape
    assert read_array_ndim(v2_image) is None
    assert read_array_ndim(v3_image) is None


def test_open_multiscales(v2_image: Path) -> None:
    ms = open_multiscales(v2_image)
    assert isinstance(ms, v04.Multiscale)
    assert ms.scale_factors(1) == (2, 2)
    assert ms.offsets(1) == (0.5, 0.5)


def test_open_multiscales_nested(bf2raw_store: Path) -> None:
    assert open_multiscales(bf2raw_store / "0").dataset_paths == ["0", "1"]
    with pytest.raises(InvalidMultiscalesError, match="'multiscales'"):
        open_multiscales(bf2raw_store)


def test_open_multiscales_v05_unsupported(v3_image: Path) -> None:
    with pytest.raises(UnsupportedVersionError):
        open_multiscales(v3_image)


def test_open_multiscales_rank_mismatch(v2_image: Path) -> None:
    zarray = v2_image / "0" / ".zarray"
    meta = json.loads(zarray.read_text())
    meta["shape"] = [3, 1000, 1000]
    zarray.write_text(json.dumps(meta))
    with pytest.raises(InvalidMultiscalesError, match="3 dimensions"):
        open_multiscales(v2_image)


def test_open_multiscales_missing_level_array(v2_image: Path) -> None:
    # without array metadata the rank is not checked
    (v2_image / "0" / ".zarray").unlink()
    assert open_multiscales(v2_image).ndim == 2
