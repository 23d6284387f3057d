import warnings
from typing import TYPE_CHECKING, Annotated, Any, Literal, TypeAlias, get_args

from annotated_types import Len
from pydantic import (
    AfterValidator,
    Discriminator,
    Field,
    Tag,
    WrapValidator,
    model_validator,
)

from ._base import _BaseModel

AxisType: TypeAlias = Literal["space", "time", "channel"]

SpaceUnits: TypeAlias = Literal[
    "angstrom",
    "attometer",
    "centimeter",
    "decimeter",
    "exameter",
    "femtometer",
    "foot",
    "gigameter",
    "hectometer",
    "inch",
    "kilometer",
    "megameter",
    "meter",
    "micrometer",
    "mile",
    "millimeter",
    "nanometer",
    "parsec",
    "petameter",
    "picometer",
    "terameter",
    "yard",
    "yoctometer",
    "yottameter",
    "zeptometer",
    "zettameter",
]

TimeUnits: TypeAlias = Literal[
    "attosecond",
    "centisecond",
    "day",
    "decisecond",
    "exasecond",
    "femtosecond",
    "gigasecond",
    "hectosecond",
    "hour",
    "kilosecond",
    "megasecond",
    "microsecond",
    "millisecond",
    "minute",
    "nanosecond",
    "petasecond",
    "picosecond",
    "second",
    "terasecond",
    "yoctosecond",
    "yottasecond",
    "zeptosecond",
    "zettasecond",
]


def _unit_checker(vocabulary: Any, kind: str) -> AfterValidator:
    known = frozenset(get_args(vocabulary))

    def _check(unit: str | None) -> str | None:
        # writers in the wild use "micron", "um", ... keep them, but say so
        if unit is not None and unit not in known:
            warnings.warn(
                f"{unit!r} is not a recognized OME-NGFF {kind} unit.",
                UserWarning,
                stacklevel=2,
            )
        return unit

    return AfterValidator(_check)


class _AxisBase(_BaseModel):
    name: str = Field(description="The name of the axis.")


# "type" discriminates the Axis union, falling back to CustomAxis when it is
# missing or unrecognized.  The typed classes may be constructed without "type".


class CustomAxis(_AxisBase):
    type: str | None = None
    unit: str | None = None


class SpaceAxis(_AxisBase):
    if TYPE_CHECKING:
        type: Literal["space"] = "space"
    else:
        type: Literal["space"]
    unit: Annotated[str | None, _unit_checker(SpaceUnits, "space")] = None

    @model_validator(mode="before")
    @classmethod
    def _inject_type_if_missing(cls, v: Any) -> Any:
        if isinstance(v, dict) and "type" not in v:
            v = {**v, "type": "space"}
        return v


class TimeAxis(_AxisBase):
    if TYPE_CHECKING:
        type: Literal["time"] = "time"
    else:
        type: Literal["time"]
    unit: Annotated[str | None, _unit_checker(TimeUnits, "time")] = None

    @model_validator(mode="before")
    @classmethod
    def _inject_type_if_missing(cls, v: Any) -> Any:
        if isinstance(v, dict) and "type" not in v:
            v = {**v, "type": "time"}
        return v


class ChannelAxis(_AxisBase):
    if TYPE_CHECKING:
        type: Literal["channel"] = "channel"
    else:
        type: Literal["channel"]
    unit: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _inject_type_if_missing(cls, v: Any) -> Any:
        if isinstance(v, dict) and "type" not in v:
            v = {**v, "type": "channel"}
        return v


def _axis_discriminator(v: Any) -> str:
    if isinstance(v, dict):
        t = v.get("type")
    else:
        t = getattr(v, "type", None)

    if t in ("space", "time", "channel"):
        return t
    return "custom"


Axis: TypeAlias = Annotated[
    Annotated[SpaceAxis, Tag("space")]
    | Annotated[TimeAxis, Tag("time")]
    | Annotated[ChannelAxis, Tag("channel")]
    | Annotated[CustomAxis, Tag("custom")],
    Discriminator(_axis_discriminator),
]


def _validate_axes(axes: tuple[Axis, ...]) -> tuple[Axis, ...]:
    """Validate the axes of a multiscales entry."""
    names = [ax.name for ax in axes]
    if len(names) != len(set(names)):
        raise ValueError(f"Axis names must be unique. Found duplicates in {names}")

    # a second time or channel axis makes the dataset ambiguous to consumers
    if len([ax for ax in axes if ax.type == "time"]) > 1:
        raise ValueError("There can be at most 1 axis of type 'time'.")
    if len([ax for ax in axes if ax.type == "channel"]) > 1:
        raise ValueError("There can be at most 1 axis of type 'channel'.")
    return axes


AxesTuple: TypeAlias = Annotated[
    tuple[Axis, ...],
    Len(min_length=2, max_length=5),
    # run after the length check
    WrapValidator(lambda v, h: _validate_axes(h(v))),
]
