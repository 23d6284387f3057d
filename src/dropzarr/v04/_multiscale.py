from typing import Annotated, Literal, TypeAlias

from annotated_types import MinLen
from pydantic import AfterValidator, Field

from dropzarr._multiscales import (
    CoordinateTransformation,
    Multiscales,
    ScaleTransformation,
    TranslationTransformation,
)
from dropzarr._multiscales import Dataset as _Dataset
from dropzarr._types import unique_by

# ------------------------------------------------------------------------------
# Transformations
# ------------------------------------------------------------------------------


def _validate_transforms(
    transforms: tuple[CoordinateTransformation, ...],
) -> tuple[CoordinateTransformation, ...]:
    kinds = [t.type for t in transforms]
    if kinds.count("scale") != 1:
        raise ValueError(
            "There must be exactly one scale transformation in the list of transforms. "
            f"Found {kinds.count('scale')}."
        )
    if kinds.count("translation") > 1:
        raise ValueError(
            "There can be at most one translation transformation. "
            f"Found {kinds.count('translation')}."
        )
    # a translation is given in physical coordinates, so it follows the scale
    if "translation" in kinds and kinds.index("translation") < kinds.index("scale"):
        raise ValueError(
            "If a translation transformation is given, it must be listed after "
            "the scale transformation."
        )
    return transforms


CoordinateTransformsTuple: TypeAlias = Annotated[
    tuple[CoordinateTransformation, ...],
    MinLen(1),
    AfterValidator(_validate_transforms),
]

# ------------------------------------------------------------------------------
# Dataset, Multiscale
# ------------------------------------------------------------------------------


class Dataset(_Dataset):
    coordinateTransformations: CoordinateTransformsTuple = Field(
        description=(
            "Transformations mapping data coordinates to physical coordinates "
            "for this resolution level: one scale, then an optional translation."
        )
    )


class Multiscale(Multiscales):
    """A version 0.4 multiscales entry."""

    datasets: Annotated[
        tuple[Dataset, ...], MinLen(1), unique_by("path")
    ] = Field(
        description="The arrays storing the individual resolution levels."
    )
    coordinateTransformations: CoordinateTransformsTuple | None = Field(
        default=None,
        description="Transformations applied to all resolution levels alike.",
    )
    version: Literal["0.4"] = "0.4"


__all__ = [
    "Dataset",
    "Multiscale",
    "ScaleTransformation",
    "TranslationTransformation",
]
