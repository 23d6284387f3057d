"""Version-independent model of one OME-NGFF multiscales entry.

The models here describe what every supported NGFF version has in common: the
axes, one dataset per resolution level, and coordinate transformations at the
level and at the multiscales scope.  Version specific rules live in the
``dropzarr.vXX`` subpackages, which subclass these models.

All per-axis values are stored in on-disk order, exactly as written in the
metadata.  Every derived per-axis quantity is handed out as an `InMemoryOrder`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Literal, TypeAlias

from annotated_types import MinLen
from pydantic import Discriminator, Field, model_validator
from typing_extensions import Self

from ._axis import AxesTuple, AxisType
from ._base import _BaseModel
from ._order import InMemoryOrder, OnDiskOrder
from ._paths import find_highest_resolution_by_name
from ._types import unique_by
from ._util import SuggestDatasetPath

__all__ = [
    "CoordinateTransformation",
    "Dataset",
    "Multiscales",
    "Scale",
    "ScaleTransformation",
    "TranslationTransformation",
]

# ------------------------------------------------------------------------------
# Transformations
# ------------------------------------------------------------------------------


class ScaleTransformation(_BaseModel):
    type: Literal["scale"] = "scale"
    scale: Annotated[tuple[float, ...], MinLen(1)]

    @property
    def ndim(self) -> int:
        return len(self.scale)


class TranslationTransformation(_BaseModel):
    type: Literal["translation"] = "translation"
    translation: Annotated[tuple[float, ...], MinLen(1)]

    @property
    def ndim(self) -> int:
        return len(self.translation)


CoordinateTransformation: TypeAlias = Annotated[
    ScaleTransformation | TranslationTransformation, Discriminator("type")
]


def _compose_offsets(
    offsets: list[float], transforms: tuple[CoordinateTransformation, ...]
) -> list[float]:
    for tform in transforms:
        if isinstance(tform, ScaleTransformation):
            offsets = [o * s for o, s in zip(offsets, tform.scale)]
        else:
            offsets = [o + t for o, t in zip(offsets, tform.translation)]
    return offsets


# ------------------------------------------------------------------------------
# Datasets
# ------------------------------------------------------------------------------


class Dataset(_BaseModel):
    path: Annotated[str, SuggestDatasetPath] = Field(
        description=(
            "The path to the array for this resolution, "
            "relative to the multiscales group."
        )
    )
    coordinateTransformations: Annotated[
        tuple[CoordinateTransformation, ...], MinLen(1)
    ] = Field(
        description=(
            "Transformations mapping data coordinates to physical coordinates "
            "for this resolution level."
        )
    )


@dataclass(frozen=True)
class Scale:
    """Calibration of one resolution level, in in-memory axis order."""

    path: str
    scale_factors: InMemoryOrder
    offsets: InMemoryOrder


# ------------------------------------------------------------------------------
# Multiscales
# ------------------------------------------------------------------------------


class Multiscales(_BaseModel):
    """One resolution pyramid: the first entry of an NGFF ``multiscales`` list.

    Index 0 of `datasets` is the finest level by convention only.  Use
    `highest_resolution_path` or compare `scale_factors` when it matters.
    """

    name: str | None = None
    axes: AxesTuple = Field(description="The axes of the image, in on-disk order.")
    datasets: Annotated[
        tuple[Dataset, ...], MinLen(1), unique_by("path")
    ] = Field(
        description="The arrays storing the individual resolution levels."
    )
    coordinateTransformations: (
        Annotated[tuple[CoordinateTransformation, ...], MinLen(1)] | None
    ) = Field(
        default=None,
        description="Transformations applied to all resolution levels alike.",
    )
    version: str
    type: str | None = Field(
        default=None,
        description="Downscaling method used to generate the pyramid.",
    )
    metadata: dict[str, Any] | None = Field(
        default=None,
        description="Unstructured information about the downscaling method.",
    )

    @model_validator(mode="after")
    def _check_ndim(self) -> Self:
        for _id, ds in enumerate(self.datasets):
            for _it, tform in enumerate(ds.coordinateTransformations):
                if tform.ndim != self.ndim:
                    raise ValueError(
                        f"at datasets.[{_id}].coordinateTransformations[{_it}]:\n"
                        f"  The length of the transformation ({tform.ndim}) does "
                        f"not match the number of axes ({self.ndim})."
                    )
        for _it, tform in enumerate(self.coordinateTransformations or ()):
            if tform.ndim != self.ndim:
                raise ValueError(
                    f"at coordinateTransformations[{_it}]:\n"
                    f"  The length of the transformation ({tform.ndim}) "
                    f"does not match the number of axes ({self.ndim})."
                )
        return self

    @property
    def ndim(self) -> int:
        return len(self.axes)

    @property
    def num_levels(self) -> int:
        return len(self.datasets)

    @property
    def axes_in_memory(self) -> InMemoryOrder:
        return OnDiskOrder(self.axes).to_in_memory()

    @property
    def dataset_paths(self) -> list[str]:
        return [ds.path for ds in self.datasets]

    @property
    def highest_resolution_path(self) -> str:
        """Path of the finest level, judged by the "s0" naming convention."""
        return find_highest_resolution_by_name(self.dataset_paths)

    # -------------------------------------------------------------- axis lookup

    def axis_index(self, type: AxisType, name: str | None = None) -> int | None:
        """Return the on-disk index of an axis, or None if there is no such axis.

        `time` and `channel` axes are unique, so only `type` is needed.  `space`
        axes are looked up by exact (case-sensitive) `name`.
        """
        if type == "space":
            if name is None:
                raise ValueError("A name is required to look up a 'space' axis.")
            matches = (ax.type == "space" and ax.name == name for ax in self.axes)
        else:
            matches = (ax.type == type for ax in self.axes)
        return next((i for i, hit in enumerate(matches) if hit), None)

    @property
    def channel_axis_index(self) -> int | None:
        return self.axis_index("channel")

    @property
    def time_axis_index(self) -> int | None:
        return self.axis_index("time")

    def spatial_axis_index(self, name: str) -> int | None:
        return self.axis_index("space", name)

    def in_memory_index(self, index: int) -> int:
        """Convert an on-disk axis index (see `axis_index`) to in-memory order."""
        return OnDiskOrder(self.axes).index_in_memory(index)

    # -------------------------------------------------------------- calibration

    def _dataset(self, level: int) -> Dataset:
        # no negative indexing
        if not 0 <= level < self.num_levels:
            raise IndexError(
                f"level {level} out of range for {self.num_levels} resolution levels"
            )
        return self.datasets[level]

    def scale_factors(self, level: int) -> InMemoryOrder:
        """Per-axis voxel size of resolution `level`, in in-memory axis order.

        The multiscales-scope scales and the level's own scales are multiplied
        together, starting from 1 on every axis.
        """
        factors = [1.0] * self.ndim
        for tform in (
            *(self.coordinateTransformations or ()),
            *self._dataset(level).coordinateTransformations,
        ):
            if isinstance(tform, ScaleTransformation):
                factors = [f * s for f, s in zip(factors, tform.scale)]
        return OnDiskOrder(factors).to_in_memory()

    def offsets(self, level: int) -> InMemoryOrder:
        """Physical position of voxel 0 of resolution `level`, in-memory order.

        The level's transformation chain is applied first, then the
        multiscales-scope one: scales multiply the running offset and
        translations add to it.
        """
        level_tforms = self._dataset(level).coordinateTransformations
        offsets = _compose_offsets([0.0] * self.ndim, level_tforms)
        offsets = _compose_offsets(offsets, self.coordinateTransformations or ())
        return OnDiskOrder(offsets).to_in_memory()

    def scale(self, level: int) -> Scale:
        return Scale(
            path=self._dataset(level).path,
            scale_factors=self.scale_factors(level),
            offsets=self.offsets(level),
        )

    @property
    def scales(self) -> tuple[Scale, ...]:
        return tuple(self.scale(level) for level in range(self.num_levels))
