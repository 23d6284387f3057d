import json
import os
from collections.abc import Mapping
from typing import Any, Literal, TypeAlias

from pydantic import ValidationError

from . import v04
from ._errors import InvalidMultiscalesError, UnsupportedVersionError
from ._multiscales import Multiscales

SupportedVersion: TypeAlias = Literal["0.4"]

# the closed set of parsable versions; everything else is UnsupportedVersionError
_MODELS: dict[SupportedVersion, type[Multiscales]] = {
    "0.4": v04.Multiscale,
}

SUPPORTED_VERSIONS: tuple[str, ...] = tuple(_MODELS)


def _first_multiscales_entry(attributes: Mapping[str, Any]) -> Mapping[str, Any]:
    entries = attributes.get("multiscales")
    if not isinstance(entries, (list, tuple)) or not entries:
        raise InvalidMultiscalesError(
            "The attributes do not contain a non-empty 'multiscales' list. "
            "Is this an OME-NGFF image group?"
        )
    # only the first pyramid of a multi-series document is used
    entry = entries[0]
    if not isinstance(entry, Mapping):
        raise InvalidMultiscalesError(
            f"multiscales[0] must be a JSON object, got {type(entry).__name__}."
        )
    return entry


def parse_multiscales(attributes: Any, ndim: int | None = None) -> Multiscales:
    """Build a validated `Multiscales` from the attributes of an image group.

    Parameters
    ----------
    attributes : Mapping
        The parsed attributes document (the `.zattrs` content, or the
        `attributes` of a `zarr.json`).  An enclosing ``"ome"`` key is unwrapped.
    ndim : int, optional
        Rank of the image arrays, if known.  It must equal the number of axes.

    Returns
    -------
    Multiscales
        The first entry of the `multiscales` list, as a version specific model
        (e.g. `dropzarr.v04.Multiscale`).

    Raises
    ------
    UnsupportedVersionError
        If the declared version is not one of `SUPPORTED_VERSIONS`.
    InvalidMultiscalesError
        If a required field is missing or the metadata is otherwise invalid.
    """
    if not isinstance(attributes, Mapping):
        raise InvalidMultiscalesError(
            f"Attributes must be a JSON object, got {type(attributes).__name__}."
        )
    if isinstance(attributes.get("ome"), Mapping):
        attributes = attributes["ome"]

    entry = _first_multiscales_entry(attributes)
    version = entry.get("version", attributes.get("version"))
    if version is None:
        raise InvalidMultiscalesError(
            "Missing required field 'version' in multiscales[0]."
        )
    version = str(version)

    model = _MODELS.get(version)  # type: ignore[call-overload]
    if model is None:
        raise UnsupportedVersionError(version, SUPPORTED_VERSIONS)

    try:
        multiscales = model.model_validate({**entry, "version": version})
    except ValidationError as e:
        raise InvalidMultiscalesError(
            f"Invalid OME-NGFF {version} multiscales metadata:\n{e}"
        ) from e

    if ndim is not None and ndim != multiscales.ndim:
        raise InvalidMultiscalesError(
            f"The multiscales declares {multiscales.ndim} axes, but the image "
            f"arrays have {ndim} dimensions."
        )
    return multiscales


def parse_multiscales_json(
    data: str | bytes | bytearray, ndim: int | None = None
) -> Multiscales:
    """Same as `parse_multiscales`, for an attributes document given as JSON."""
    try:
        attributes = json.loads(data)
    except ValueError as e:
        raise InvalidMultiscalesError(f"Attributes are not valid JSON: {e}") from e
    return parse_multiscales(attributes, ndim=ndim)


def open_multiscales(uri: str | os.PathLike) -> Multiscales:
    """Read and parse the multiscales metadata of the image group at `uri`.

    !!!important
        This requires fsspec, e.g. `pip install dropzarr[io]`.

    The rank of the first resolution level's array is checked against the axes
    when that array's metadata can be found.
    """
    from ._io import read_array_ndim, read_attributes

    uri_str = os.fspath(uri).rstrip("/")
    attributes = read_attributes(uri_str)
    first_path = _first_dataset_path(attributes)
    ndim = read_array_ndim(f"{uri_str}/{first_path}") if first_path else None
    return parse_multiscales(attributes, ndim=ndim)


def _first_dataset_path(attributes: Mapping[str, Any]) -> str | None:
    ome = attributes.get("ome", attributes)
    try:
        path = _first_multiscales_entry(ome)["datasets"][0]["path"]
    except (AttributeError, KeyError, IndexError, TypeError, InvalidMultiscalesError):
        # left to parse_multiscales to report
        return None
    return path if isinstance(path, str) else None
