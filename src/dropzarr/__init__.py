"""Find OME-Zarr images from a dropped path and read their multiscales metadata."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("dropzarr")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "uninstalled"

from . import v04
from ._axis import Axis, AxisType, ChannelAxis, CustomAxis, SpaceAxis, TimeAxis
from ._errors import (
    DropZarrError,
    InvalidMultiscalesError,
    MultiscalesError,
    NotADescendantError,
    UnsupportedVersionError,
)
from ._multiscales import (
    Dataset,
    Multiscales,
    Scale,
    ScaleTransformation,
    TranslationTransformation,
)
from ._order import InMemoryOrder, OnDiskOrder
from ._parse import (
    SUPPORTED_VERSIONS,
    open_multiscales,
    parse_multiscales,
    parse_multiscales_json,
)
from ._paths import (
    ZarrPathInfo,
    find_highest_resolution_by_name,
    find_highest_resolution_dataset,
    find_image_root_folder,
    find_root_folder,
    is_zarr_folder,
    list_array_paths,
    relative_path_elements,
    resolve_zarr_path,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "Axis",
    "AxisType",
    "ChannelAxis",
    "CustomAxis",
    "Dataset",
    "DropZarrError",
    "InMemoryOrder",
    "InvalidMultiscalesError",
    "Multiscales",
    "MultiscalesError",
    "NotADescendantError",
    "OnDiskOrder",
    "Scale",
    "ScaleTransformation",
    "SpaceAxis",
    "TimeAxis",
    "TranslationTransformation",
    "UnsupportedVersionError",
    "ZarrPathInfo",
    "find_highest_resolution_by_name",
    "find_highest_resolution_dataset",
    "find_image_root_folder",
    "find_root_folder",
    "is_zarr_folder",
    "list_array_paths",
    "open_multiscales",
    "parse_multiscales",
    "parse_multiscales_json",
    "relative_path_elements",
    "resolve_zarr_path",
    "v04",
]
