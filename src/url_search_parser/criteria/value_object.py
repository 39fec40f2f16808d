"""Immutable Value Object base classes shared by sort and filter criteria."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from collections.abc import Iterator


class ValueObject(BaseModel):
    """Base class for criteria Value Objects.

    Value objects are immutable and defined by their attributes.
    Equality is structural (all fields compared).
    """

    model_config = ConfigDict(frozen=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        # model_dump() holds nested tuples of dicts, which are unhashable.
        return hash(self.model_dump_json())


class CriteriaParam(ValueObject):
    """One condition of a criteria object, bound to a field name."""

    field: str


ParamT = TypeVar("ParamT", bound=CriteriaParam)


class Criteria(ValueObject, Generic[ParamT]):
    """Ordered, immutable collection of criteria params.

    Iterating yields the params in input order; an instance with no
    params is falsy.
    """

    params: tuple[ParamT, ...] = ()

    def __iter__(self) -> Iterator[ParamT]:  # type: ignore[override]
        return iter(self.params)

    def __len__(self) -> int:
        return len(self.params)

    def __bool__(self) -> bool:
        return bool(self.params)

    def is_empty(self) -> bool:
        return not self.params

    def fields(self) -> list[str]:
        """Distinct field names, in first-seen order."""
        return list(dict.fromkeys(param.field for param in self.params))
