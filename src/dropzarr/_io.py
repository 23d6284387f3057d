import json
import logging
import os
from functools import wraps
from typing import TYPE_CHECKING, Any, Callable, TypeVar, cast

if TYPE_CHECKING:
    import fsspec
else:
    try:
        import fsspec
    except ImportError:
        fsspec = None

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., object])


def _require_fsspec(func: F) -> F:
    """Decorator to ensure fsspec is available for functions that need it."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        if fsspec is None:  # pragma: no cover
            msg = (
                f"fsspec is required for {func.__name__!r}.\n"
                "Install with: 'pip install dropzarr[io]' or 'pip install fsspec'"
            )
            raise ImportError(msg)
        return func(*args, **kwargs)

    return cast("F", wrapper)


def _read_json(uri: str) -> dict[str, Any] | None:
    """Return the JSON document at `uri`, or None if there is no such file."""
    fs, path = fsspec.core.url_to_fs(uri)
    if not fs.exists(path):
        return None
    with fs.open(path, "r") as f:
        doc = json.load(f)
    logger.debug("Read %s", uri)
    if not isinstance(doc, dict):
        raise ValueError(f"Expected a JSON object in {uri}, got {type(doc).__name__}")
    return doc


@_require_fsspec
def read_attributes(uri: str | os.PathLike) -> dict[str, Any]:
    """Return the user attributes of the Zarr group at `uri` (local or remote).

    Zarr v3 groups keep them under "attributes" in `zarr.json`, Zarr v2 groups in
    `.zattrs`.  `uri` may also point straight at one of those two files.

    Raises
    ------
    FileNotFoundError
        If neither metadata file exists.
    """
    uri_str = os.fspath(uri).rstrip("/")
    if uri_str.endswith("zarr.json"):
        uri_str = uri_str[: -len("zarr.json")].rstrip("/")
    elif uri_str.endswith(".zattrs"):
        uri_str = uri_str[: -len(".zattrs")].rstrip("/")

    if (zarr_json := _read_json(f"{uri_str}/zarr.json")) is not None:
        return dict(zarr_json.get("attributes") or {})
    if (zattrs := _read_json(f"{uri_str}/.zattrs")) is not None:
        return zattrs
    raise FileNotFoundError(f"Could not find zarr group attributes in: {uri_str}")


@_require_fsspec
def read_array_ndim(uri: str | os.PathLike) -> int | None:
    """Return the rank of the Zarr array at `uri`, or None if it is not an array."""
    uri_str = os.fspath(uri).rstrip("/")
    for name in ("zarr.json", ".zarray"):
        doc = _read_json(f"{uri_str}/{name}")
        if doc is not None and isinstance(doc.get("shape"), list):
            return len(doc["shape"])
    logger.debug("No array metadata found at %s", uri_str)
    return None
