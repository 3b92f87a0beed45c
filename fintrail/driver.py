"""SQL building blocks: column definitions, filter conditions and DDL helpers."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

Value = Union[str, int, bool]

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


class DriverError(Exception):
    """Base class for errors raised by a database driver."""


class ConnectionFailed(DriverError):
    """The database could not be reached."""


class NoRecordFound(DriverError):
    """A query that needed a record found none."""


class UpdateFailed(DriverError):
    """A write did not take effect."""


class UnknownDriverError(DriverError):
    """Any other driver failure."""


@dataclass(frozen=True)
class Column:
    """One column of a table definition."""

    field_name: str
    data_type: str
    is_primary_key: bool = False
    is_not_null: bool = False


class Operator(Enum):
    """Comparison operators usable in a filter condition."""

    EQ = "Eq"
    NEQ = "Neq"
    GT = "Gt"
    GTE = "Gte"
    LT = "Lt"
    LTE = "Lte"
    LIKE = "Like"
    IN = "In"
    BETWEEN = "Between"
    IS_NULL = "IsNull"
    IS_NOT_NULL = "IsNotNull"

    @property
    def arity(self) -> int:
        """Number of values the operator takes."""
        if self is Operator.BETWEEN:
            return 2
        if self in (Operator.IS_NULL, Operator.IS_NOT_NULL):
            return 0
        return 1


_SINGLE_VALUE_SQL = {
    Operator.EQ: "{field} = {param}",
    Operator.NEQ: "{field} != {param}",
    Operator.GT: "{field} > {param}",
    Operator.GTE: "{field} >= {param}",
    Operator.LT: "{field} < {param}",
    Operator.LTE: "{field} <= {param}",
    Operator.LIKE: "{field} LIKE {param}",
    Operator.IN: "{field} IN ({param})",
}


def _check_value(value: Any) -> Value:
    if isinstance(value, bool) or isinstance(value, str):
        return value
    if isinstance(value, int):
        if not _I64_MIN <= value <= _I64_MAX:
            raise ValueError(f"number out of 64-bit range: {value}")
        return value
    raise ValueError(f"unsupported condition value: {value!r}")


@dataclass(frozen=True)
class Condition:
    """A single filter on a field, e.g. ``ts BETWEEN a AND b``."""

    field: str
    operator: Operator
    values: tuple = field(default=())

    def __post_init__(self) -> None:
        values = tuple(_check_value(v) for v in self.values)
        if len(values) != self.operator.arity:
            raise ValueError(
                f"{self.operator.value} takes {self.operator.arity} value(s), "
                f"got {len(values)}"
            )
        object.__setattr__(self, "values", values)


def _parse_value(obj: Any) -> Value:
    if not isinstance(obj, Mapping) or len(obj) != 1:
        raise ValueError(f"malformed value: {obj!r}")
    (tag, payload), = obj.items()
    if tag == "StringVal" and isinstance(payload, str):
        return payload
    if tag == "Boolean" and isinstance(payload, bool):
        return payload
    if tag == "Number" and isinstance(payload, int) and not isinstance(payload, bool):
        return _check_value(payload)
    raise ValueError(f"malformed value: {obj!r}")


def _parse_operator(obj: Any) -> tuple[Operator, tuple]:
    if isinstance(obj, str):
        name, payload, has_payload = obj, None, False
    elif isinstance(obj, Mapping) and len(obj) == 1:
        (name, payload), = obj.items()
        has_payload = True
    else:
        raise ValueError(f"malformed operator: {obj!r}")
    try:
        operator = Operator(name)
    except ValueError:
        raise ValueError(f"unknown operator: {name!r}") from None

    if operator.arity == 0:
        if has_payload and payload is not None:
            raise ValueError(f"{name} takes no value")
        return operator, ()
    if not has_payload:
        raise ValueError(f"{name} requires a value")
    if operator.arity == 2:
        if not isinstance(payload, (list, tuple)) or len(payload) != 2:
            raise ValueError(f"{name} requires two values")
        return operator, tuple(_parse_value(v) for v in payload)
    return operator, (_parse_value(payload),)


def parse_conditions(data: str | Iterable[Mapping[str, Any]]) -> list[Condition]:
    """Build conditions from their JSON form (a string or decoded list)."""
    if isinstance(data, str):
        data = json.loads(data)
    conditions = []
    for item in data:
        if not isinstance(item, Mapping):
            raise ValueError(f"malformed condition: {item!r}")
        try:
            field_name = item["field"]
            raw_operator = item["operator"]
        except KeyError as exc:
            raise ValueError(f"condition is missing {exc.args[0]!r}") from None
        if not isinstance(field_name, str):
            raise ValueError(f"field must be a string: {field_name!r}")
        operator, values = _parse_operator(raw_operator)
        conditions.append(Condition(field_name, operator, values))
    return conditions


def build_where_clause(conditions: Iterable[Condition]) -> tuple[str, list[Value]]:
    """Return a ``WHERE`` clause with numbered placeholders and its bound values."""
    clauses: list[str] = []
    values: list[Value] = []
    param = 1
    for cond in conditions:
        op = cond.operator
        if op is Operator.BETWEEN:
            values.extend(cond.values)
            param += 2
            clause = f"{cond.field} BETWEEN ${param - 2} AND ${param - 1}"
        elif op is Operator.IS_NULL:
            clause = f"{cond.field} IS NULL"
        elif op is Operator.IS_NOT_NULL:
            clause = f"{cond.field} IS NOT NULL"
        else:
            values.append(cond.values[0])
            param += 1
            clause = _SINGLE_VALUE_SQL[op].format(field=cond.field, param=f"${param}")
        clauses.append(clause)

    if not clauses:
        return "", values
    return "WHERE " + " AND ".join(clauses), values


def build_cols_query(cols: Iterable[Column]) -> str:
    """Return the column list of a ``CREATE TABLE`` statement."""
    clauses: list[str] = []
    primary_keys: list[str] = []
    for col in cols:
        clause = f"{col.field_name} {col.data_type}"
        if col.is_not_null:
            clause += " NOT NULL"
        clauses.append(clause)
        if col.is_primary_key:
            primary_keys.append(col.field_name)

    if primary_keys:
        clauses.append(f"PRIMARY KEY ({', '.join(primary_keys)})")
    return ",\n".join(clauses)


def generate_create_table_query(table_name: str, cols: Iterable[Column]) -> str:
    """Return a ``CREATE TABLE IF NOT EXISTS`` statement."""
    return f"CREATE TABLE IF NOT EXISTS {table_name} ({build_cols_query(cols)});"