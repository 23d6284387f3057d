from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import VERSION, BaseModel, ConfigDict

__all__ = ["_BaseModel"]

# validate_by_name added in pydantic 2.9, populate_by_name deprecated in 2.11
_PYDANTIC_V2_9 = tuple(int(x) for x in VERSION.split(".")[:2]) >= (2, 9)
_by_name_key = "validate_by_name" if _PYDANTIC_V2_9 else "populate_by_name"


class _BaseModel(BaseModel):
    """Immutable base for every metadata model in dropzarr.

    Parsed metadata is shared between threads without copying, so instances are
    frozen and unknown keys from the JSON document are dropped.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="ignore",
        frozen=True,
        validate_default=True,
        serialize_by_alias=True,
        **{_by_name_key: True},  # type: ignore[typeddict-item]
    )

    if not TYPE_CHECKING:
        # "by_alias" is required for round-tripping on pydantic <2.10.0
        def model_dump_json(self, **kwargs: Any) -> str:
            kwargs.setdefault("by_alias", True)
            return super().model_dump_json(**kwargs)

        def model_dump(self, **kwargs: Any) -> dict[str, Any]:  # pragma: no cover
            kwargs.setdefault("by_alias", True)
            return super().model_dump(**kwargs)
