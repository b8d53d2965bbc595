"""Filter primitives and a small query builder over the document tables.

Call sites describe what they want with ``Equals``, ``Prefix`` and ``AnyOf``
filters; a ``Query`` is the conjunction of its filters. Scalar filters are
compiled to SQL. ``AnyOf`` on a list-valued field (stored as ``<field>_json``
text) cannot be expressed portably in SQL, so it is applied to the fetched
rows instead.
"""

from dataclasses import dataclass
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from tailless.storage.db import Base
from tailless.storage.json_utils import load_str_list

# Highest code point in the BMP private use area; "starts with v" is the
# range [v, v + PREFIX_SENTINEL].
PREFIX_SENTINEL = "\uf8ff"

ModelT = TypeVar("ModelT", bound=Base)


@dataclass(frozen=True)
class Equals:
    """Field equals value."""

    field: str
    value: Any


@dataclass(frozen=True)
class Prefix:
    """Text field starts with value."""

    field: str
    value: str


@dataclass(frozen=True)
class AnyOf:
    """Field (scalar or list) shares at least one value with ``values``."""

    field: str
    values: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))


Filter = Equals | Prefix | AnyOf


class Query(Generic[ModelT]):
    """Conjunction of filters against one table."""

    def __init__(self, model: type[ModelT], filters: Sequence[Filter] = ()) -> None:
        self.model = model
        self.filters: tuple[Filter, ...] = tuple(filters)
        for flt in self.filters:
            self._check(flt)

    def where(self, *filters: Filter) -> "Query[ModelT]":
        """Return a new query with additional filters."""
        return Query(self.model, self.filters + filters)

    def _is_list_field(self, field: str) -> bool:
        return hasattr(self.model, f"{field}_json")

    def _column(self, field: str):
        if not hasattr(self.model, field):
            raise ValueError(f"{self.model.__name__} has no field '{field}'")
        return getattr(self.model, field)

    def _check(self, flt: Filter) -> None:
        if isinstance(flt, AnyOf):
            if not self._is_list_field(flt.field):
                self._column(flt.field)
            return
        if self._is_list_field(flt.field):
            raise ValueError(f"{type(flt).__name__} is not supported on list field '{flt.field}'")
        self._column(flt.field)

    def statement(self) -> Select:
        """Compile the SQL-expressible filters."""
        stmt = select(self.model)
        for flt in self.filters:
            if isinstance(flt, Equals):
                stmt = stmt.where(self._column(flt.field) == flt.value)
            elif isinstance(flt, Prefix):
                column = self._column(flt.field)
                stmt = stmt.where(column >= flt.value, column <= flt.value + PREFIX_SENTINEL)
            elif isinstance(flt, AnyOf) and not self._is_list_field(flt.field):
                stmt = stmt.where(self._column(flt.field).in_(flt.values))
        return stmt

    def matches(self, row: ModelT) -> bool:
        """Apply the filters that run after the fetch (list membership)."""
        for flt in self.filters:
            if isinstance(flt, AnyOf) and self._is_list_field(flt.field):
                stored = load_str_list(getattr(row, f"{flt.field}_json"))
                if not set(stored) & set(flt.values):
                    return False
        return True

    async def all(self, session: AsyncSession) -> list[ModelT]:
        """Run the query and return matching rows in fetch order."""
        result = await session.execute(self.statement())
        return [row for row in result.scalars().all() if self.matches(row)]
