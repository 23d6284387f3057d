from typing import Any, TypeVar

from pydantic import AfterValidator
from pydantic_core import PydanticCustomError

T = TypeVar("T")


def unique_by(attr: str) -> AfterValidator:
    """Validator requiring that no two items share the same value of `attr`."""

    def _check(v: tuple[T, ...]) -> tuple[T, ...]:
        seen: dict[Any, int] = {}
        for j, item in enumerate(v):
            key = getattr(item, attr)
            if (i := seen.setdefault(key, j)) != j:
                raise PydanticCustomError(
                    "itemsNotUnique",
                    "Items must have a unique '{attr}'. {value} is used at "
                    "indices {idx}",
                    {"attr": attr, "value": repr(key), "idx": (i, j)},
                )
        return v

    return AfterValidator(_check)
