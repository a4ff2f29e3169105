"""
Dynamic filter and pagination query building for list endpoints.

Filters arrive as a flat mapping of field name to scalar value. Each pair
becomes one equality predicate on a known column, an optional keyword becomes
a substring match on the name column, and all predicates are AND-combined.
Values are always bound parameters.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Sequence, Tuple

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from fin_api.errors import BadParamInput
from fin_api.models.base import MAX_INTEGER, MIN_INTEGER
from fin_api.repository.interfaces import Filters


def bounded_int(value: Any) -> int:
    number = int(value)
    if not MIN_INTEGER <= number <= MAX_INTEGER:
        raise ValueError(f"{number} is out of range")
    return number


@dataclass(frozen=True)
class FilterField:
    column: Any
    cast: Callable[[Any], Any] = str


@dataclass(frozen=True)
class FilterSpec:
    """Accepted filter keys of one entity and the column searched by keyword"""
    fields: Dict[str, FilterField]
    keyword_column: Any
    aliases: Dict[str, str] = field(default_factory=dict)

    def resolve(self, key: str) -> FilterField:
        name = self.aliases.get(key, key)
        try:
            return self.fields[name]
        except KeyError:
            raise BadParamInput(f"Unknown filter: {key}") from None


def build_predicates(spec: FilterSpec, filters: Filters, keyword: str = "") -> List[ColumnElement[bool]]:
    predicates = []
    for key, raw_value in filters.items():
        filter_field = spec.resolve(key)
        try:
            value = filter_field.cast(raw_value)
        except (TypeError, ValueError):
            raise BadParamInput(f"Invalid value for filter {key}: {raw_value!r}") from None
        predicates.append(filter_field.column == value)

    if keyword:
        predicates.append(spec.keyword_column.contains(keyword, autoescape=True))

    return predicates


def check_page(limit: int, offset: int) -> None:
    if limit < 0 or offset < 0:
        raise BadParamInput("limit and offset must not be negative")
    if limit > MAX_INTEGER or offset > MAX_INTEGER:
        raise BadParamInput("limit and offset are out of range")


async def fetch_page(
    session: AsyncSession,
    statement: Select,
    count_statement: Select,
    predicates: Sequence[ColumnElement[bool]],
    limit: int,
    offset: int,
) -> Tuple[Sequence[Any], int]:
    """Run the count query, then the bounded data query, over the same predicates"""
    check_page(limit, offset)

    count_result = await session.execute(count_statement.where(*predicates))
    total = count_result.scalar() or 0

    result = await session.execute(statement.where(*predicates).limit(limit).offset(offset))
    return result.all(), total
