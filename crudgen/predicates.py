"""
The repository query as data.

A QueryPlan is the ordered conjunction of predicates plus the ordering
clause. The repository emitter renders it; tests inspect it directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .model import EntityDescriptor, camel


class Operator(Enum):
    EQ = "eq"
    GE = "ge"
    LE = "le"


@dataclass(frozen=True)
class Predicate:
    column: str
    operator: Operator
    # getter on the query object supplying the value
    accessor: str

    def render(self, refs_var: str, query_var: str = "query") -> str:
        return f"{refs_var}.{self.column}.{self.operator.value}({query_var}.{self.accessor}())"


@dataclass(frozen=True)
class Ordering:
    """Query-supplied ordering when present, else ``primary_key`` descending."""

    primary_key: Optional[str] = None

    @property
    def has_default(self) -> bool:
        return self.primary_key is not None


@dataclass(frozen=True)
class QueryPlan:
    predicates: Tuple[Predicate, ...]
    ordering: Ordering

    def columns(self) -> Tuple[str, ...]:
        return tuple(p.column for p in self.predicates)


RANGE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("minCreatedAt", "maxCreatedAt"),
    ("minUpdatedAt", "maxUpdatedAt"),
)


def range_predicates() -> Tuple[Predicate, ...]:
    """createdAt >= min, createdAt <= max, updatedAt >= min, updatedAt <= max."""
    out = []
    for lo, hi in RANGE_FIELDS:
        column = lo[len("min"):]
        column = column[:1].lower() + column[1:]
        out.append(Predicate(column, Operator.GE, "get" + camel(lo)))
        out.append(Predicate(column, Operator.LE, "get" + camel(hi)))
    return tuple(out)


def build_query_plan(entity: EntityDescriptor) -> QueryPlan:
    preds = [
        # query objects carry boxed types, so the getter is always getX
        Predicate(f.name, Operator.EQ, "get" + camel(f.name))
        for f in entity.fields
        if not f.type_name.is_collection
    ]
    preds.extend(range_predicates())

    pk = entity.primary_key
    return QueryPlan(tuple(preds), Ordering(pk.name if pk is not None else None))
