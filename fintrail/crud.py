"""Queries on accounts and transactions."""

from __future__ import annotations

import re
import sqlite3
import time
import uuid
from collections.abc import Iterable, Sequence
from typing import Any

from fintrail.database import SqliteDriver
from fintrail.driver import Condition, UnknownDriverError, UpdateFailed, build_where_clause
from fintrail.table import ACCOUNT_TB, TRANSACTION_TB, Transaction

_PLACEHOLDER = re.compile(r"\$\d+")

_NET_WORTH_SQL = (
    "SELECT CAST(COALESCE((SELECT SUM(balance) FROM {table}), 0) "
    "as double precision) as net_worth"
).format(table=ACCOUNT_TB)

_AMOUNT_SQL = (
    "SELECT CAST(COALESCE((SELECT SUM(amount) FROM {table} "
    "WHERE ts BETWEEN $1 AND $2 AND direction = $3), 0) "
    "as double precision) as income"
).format(table=TRANSACTION_TB)

_INSERT_SQL = (
    "INSERT INTO {table} (tx_id, ts, amount, direction, is_synced, tags) "
    "VALUES ($1, $2, $3, $4, $5, $6)"
).format(table=TRANSACTION_TB)


def _execute(driver: SqliteDriver, query: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
    # Placeholders are bound in the order they appear.
    try:
        return driver.connection.execute(_PLACEHOLDER.sub("?", query), tuple(params))
    except (sqlite3.Error, OverflowError) as exc:
        raise UnknownDriverError(str(exc)) from exc


def _scalar(driver: SqliteDriver, query: str, params: Sequence[Any] = ()) -> float:
    row = _execute(driver, query, params).fetchone()
    return float(row[0])


def net_worth(driver: SqliteDriver | None) -> float:
    """Sum of all account balances; 0.0 without a database."""
    if driver is None:
        return 0.0
    return _scalar(driver, _NET_WORTH_SQL)


def transaction_amount_over_period(
    driver: SqliteDriver | None, from_time: int, to_time: int, direction: bool
) -> float:
    """Sum of transaction amounts in ``[from_time, to_time]`` flowing in ``direction``."""
    if driver is None:
        return 0.0
    return _scalar(driver, _AMOUNT_SQL, (int(from_time), int(to_time), bool(direction)))


def add_transaction(
    driver: SqliteDriver | None,
    amount: float,
    ts: int | None,
    direction: bool,
    is_synced: bool,
    tags: str,
) -> str:
    """Insert a transaction and return its new id; ``ts`` defaults to now in milliseconds."""
    if driver is None:
        raise UpdateFailed("Could not insert transaction")
    tx_id = str(uuid.uuid4())
    if ts is None:
        ts = time.time_ns() // 1_000_000
    params = (tx_id, int(ts), float(amount), bool(direction), bool(is_synced), tags)
    try:
        with driver.connection:
            cursor = _execute(driver, _INSERT_SQL, params)
    except sqlite3.Error as exc:
        raise UnknownDriverError(str(exc)) from exc
    if cursor.rowcount != 1:
        raise UpdateFailed("Could not insert transaction")
    return tx_id


def _to_transaction(row: sqlite3.Row) -> Transaction:
    return Transaction(
        tx_id=row["tx_id"],
        ts=int(row["ts"]),
        amount=float(row["amount"]),
        direction=bool(row["direction"]),
        is_synced=bool(row["is_synced"]),
        tags=row["tags"] or "",
        acc_id=row["acc_id"] or "",
    )


def fetch_transaction(
    driver: SqliteDriver | None, conditions: Iterable[Condition]
) -> list[Transaction]:
    """Transactions matching all ``conditions``; empty if the query fails."""
    where_clause, values = build_where_clause(conditions)
    if driver is None:
        return []
    query = f"SELECT * FROM {TRANSACTION_TB} {where_clause}"
    try:
        cursor = driver.connection.cursor()
        cursor.row_factory = sqlite3.Row
        rows = cursor.execute(_PLACEHOLDER.sub("?", query), values).fetchall()
        return [_to_transaction(row) for row in rows]
    except (sqlite3.Error, OverflowError, TypeError, ValueError):
        return []