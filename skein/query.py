"""
Query predicates
================
A closed set of filters over stored knots. Each predicate renders itself
to an SQL fragment against the `knots k` table (and, for MetaEquals, a
join on knot_metadata). SkeinDB.query() ANDs them together.

    db.query(Range("crossing_number", 3, 7), Equals("writhe", 0))
    db.query(MetaEquals("family", "torus"))
    db.query(*predicates_from_kwargs(crossing_number=range(3, 8)))
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

FIELDS = ("name", "crossing_number", "writhe", "gauss_hash")


def _column(field: str) -> str:
    if field not in FIELDS:
        raise ValueError(f"Unknown query field {field!r} (expected one of {', '.join(FIELDS)})")
    return f"k.{field}"


@dataclass(frozen=True)
class Equals:
    field: str
    value: Any

    def to_sql(self, alias: str) -> Tuple[Optional[str], str, List[Any]]:
        return None, f"{_column(self.field)} = ?", [self.value]


@dataclass(frozen=True)
class Range:
    """Inclusive on both ends."""
    field: str
    low: int
    high: int

    def to_sql(self, alias: str):
        return None, f"{_column(self.field)} BETWEEN ? AND ?", [self.low, self.high]


@dataclass(frozen=True)
class OneOf:
    field: str
    values: Tuple[Any, ...]

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))

    def to_sql(self, alias: str):
        if not self.values:
            return None, "0", []
        placeholders = ", ".join("?" for _ in self.values)
        return None, f"{_column(self.field)} IN ({placeholders})", list(self.values)


@dataclass(frozen=True)
class Pattern:
    """SQL LIKE match, e.g. Pattern("name", "torus%")."""
    field: str
    pattern: str

    def to_sql(self, alias: str):
        return None, f"{_column(self.field)} LIKE ?", [self.pattern]


@dataclass(frozen=True)
class MetaEquals:
    key: str
    value: str

    def to_sql(self, alias: str):
        join = f"JOIN knot_metadata {alias} ON k.id = {alias}.knot_id"
        return join, f"{alias}.key = ? AND {alias}.value = ?", [self.key, self.value]


Predicate = (Equals, Range, OneOf, Pattern, MetaEquals)


def build_where(predicates: Sequence) -> Tuple[str, str, List[Any]]:
    """
    Render predicates into (join_clause, where_clause, params).

    Each MetaEquals gets its own alias so several metadata pairs can be
    required at once.
    """
    joins: List[str] = []
    conditions: List[str] = []
    params: List[Any] = []

    for i, pred in enumerate(predicates):
        if not isinstance(pred, Predicate):
            raise TypeError(f"Not a query predicate: {pred!r}")
        join, cond, ps = pred.to_sql(f"m{i}")
        if join:
            joins.append(join)
        conditions.append(cond)
        params.extend(ps)

    where_clause = ("WHERE " + " AND ".join(conditions)) if conditions else ""
    return " ".join(joins), where_clause, params


def _value_predicate(field: str, value) -> Any:
    if isinstance(value, range):
        if value.step == 1:
            if len(value) == 0:
                return OneOf(field, ())
            return Range(field, value.start, value.stop - 1)
        return OneOf(field, tuple(value))
    if isinstance(value, (list, tuple, set, frozenset)):
        return OneOf(field, tuple(sorted(value)))
    return Equals(field, value)


def predicates_from_kwargs(crossing_number=None, writhe=None, gauss_hash=None,
                           name_like=None, meta=None) -> List[Any]:
    """
    Translate keyword filters into predicates.

    crossing_number / writhe accept an int, a range (stop exclusive, as
    usual in Python) or a collection of ints. meta is a (key, value) pair.
    """
    preds: List[Any] = []
    if crossing_number is not None:
        preds.append(_value_predicate("crossing_number", crossing_number))
    if writhe is not None:
        preds.append(_value_predicate("writhe", writhe))
    if gauss_hash is not None:
        preds.append(Equals("gauss_hash", gauss_hash))
    if name_like is not None:
        preds.append(Pattern("name", name_like))
    if meta is not None:
        key, value = meta
        preds.append(MetaEquals(key, value))
    return preds
