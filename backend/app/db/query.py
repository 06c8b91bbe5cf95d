"""Composable query specifications.

A :class:`QuerySpec` collects typed conditions and orderings against model
attribute names and is compiled once into a SQLAlchemy ``Select``. Callers
describe *what* to filter on; only :meth:`QuerySpec.compile` knows about
SQLAlchemy expressions.

    spec = (
        QuerySpec()
        .eq("owner_id", 7)
        .any_of(Contains("name", "foo"), Contains("description", "foo"))
        .order_by("sort_code")
    )
    stmt = spec.compile(Template)
"""
from dataclasses import dataclass
from typing import Any, List, Tuple, Union

from sqlalchemy import Select, and_, func, or_, select


@dataclass(frozen=True)
class Eq:
    field: str
    value: Any


@dataclass(frozen=True)
class Contains:
    """Case-sensitive substring match. LIKE wildcards in ``value`` are literal."""

    field: str
    value: str


@dataclass(frozen=True)
class AnyOf:
    conditions: Tuple["Condition", ...]


Condition = Union[Eq, Contains, AnyOf]


@dataclass(frozen=True)
class OrderBy:
    field: str
    descending: bool = False


class QuerySpec:
    def __init__(self):
        self.conditions: List[Condition] = []
        self.ordering: List[OrderBy] = []

    def eq(self, field: str, value: Any) -> "QuerySpec":
        self.conditions.append(Eq(field, value))
        return self

    def contains(self, field: str, value: str) -> "QuerySpec":
        self.conditions.append(Contains(field, value))
        return self

    def any_of(self, *conditions: Condition) -> "QuerySpec":
        if not conditions:
            raise ValueError("any_of() needs at least one condition")
        self.conditions.append(AnyOf(tuple(conditions)))
        return self

    def order_by(self, field: str, descending: bool = False) -> "QuerySpec":
        self.ordering.append(OrderBy(field, descending))
        return self

    def compile(self, model) -> Select:
        stmt = select(model)
        if self.conditions:
            stmt = stmt.where(and_(*(_compile_condition(model, c) for c in self.conditions)))
        for o in self.ordering:
            col = _column(model, o.field)
            stmt = stmt.order_by(col.desc() if o.descending else col.asc())
        return stmt

    def compile_count(self, model) -> Select:
        stmt = select(func.count()).select_from(model)
        if self.conditions:
            stmt = stmt.where(and_(*(_compile_condition(model, c) for c in self.conditions)))
        return stmt


def _column(model, field: str):
    col = getattr(model, field, None)
    if col is None or not hasattr(col, "property"):
        raise ValueError(f"{model.__name__} has no column {field!r}")
    return col


def _compile_condition(model, cond: Condition):
    if isinstance(cond, Eq):
        return _column(model, cond.field) == cond.value
    if isinstance(cond, Contains):
        return _column(model, cond.field).contains(cond.value, autoescape=True)
    if isinstance(cond, AnyOf):
        return or_(*(_compile_condition(model, c) for c in cond.conditions))
    raise TypeError(f"Unsupported condition {cond!r}")
