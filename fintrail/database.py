"""SQLite storage driver and the lazily connected database provider."""

from __future__ import annotations

import logging
import os
import sqlite3
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Union

from fintrail.driver import (
    Column,
    ConnectionFailed,
    DriverError,
    UnknownDriverError,
    generate_create_table_query,
)
from fintrail.table import (
    ACC_TABLE,
    ACCOUNT_TB,
    REC_TX_TABLE,
    REC_TX_TB,
    TRANSACTION_TB,
    TX_TABLE,
)

DEFAULT_DB_PATH = "fin-manager.db"

_log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def _resolve_path(target: PathLike) -> str:
    """Turn a file path or an ``sqlite:`` URL into a path sqlite3 accepts."""
    path = os.fspath(target)
    if path == "sqlite::memory:":
        return ":memory:"
    if path.startswith("sqlite://"):
        return path[len("sqlite://"):]
    if path.startswith("sqlite:"):
        return path[len("sqlite:"):]
    return path


@dataclass(eq=False)
class SqliteDriver:
    """An open SQLite database."""

    path: str
    connection: sqlite3.Connection = field(repr=False)

    @classmethod
    def connect(cls, path: PathLike) -> SqliteDriver:
        """Open the database at ``path``; raise ConnectionFailed if it cannot be opened."""
        resolved = _resolve_path(path)
        try:
            connection = sqlite3.connect(resolved, check_same_thread=False)
        except sqlite3.Error as exc:
            raise ConnectionFailed(f"cannot open {resolved}: {exc}") from exc
        return cls(resolved, connection)

    def create_table(self, table_name: str, cols: Iterable[Column]) -> None:
        """Create ``table_name`` unless it exists; raise UnknownDriverError on failure."""
        query = generate_create_table_query(table_name, cols)
        try:
            with self.connection:
                self.connection.execute(query)
        except sqlite3.Error as exc:
            raise UnknownDriverError(str(exc)) from exc

    def close(self) -> None:
        """Close the underlying connection."""
        self.connection.close()

    def __enter__(self) -> SqliteDriver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


_TABLES = (
    (TRANSACTION_TB, TX_TABLE),
    (ACCOUNT_TB, ACC_TABLE),
    (REC_TX_TB, REC_TX_TABLE),
)


class DatabaseProvider:
    """Holds the one database driver of the application, connecting on first use."""

    def __init__(self, default_path: PathLike = DEFAULT_DB_PATH) -> None:
        self.default_path = default_path
        self._driver: SqliteDriver | None = None
        self._lock = threading.Lock()

    def get_driver(self, conn_string: PathLike | None = None) -> SqliteDriver | None:
        """Return the driver, connecting first if needed; None if connecting failed."""
        with self._lock:
            if self._driver is None:
                target = conn_string if conn_string else self.default_path
                try:
                    self._driver = SqliteDriver.connect(target)
                except ConnectionFailed as exc:
                    _log.error("%s", exc)
            return self._driver

    def initialize_tables(self) -> None:
        """Create the application's tables if a database is connected."""
        driver = self.get_driver()
        if driver is None:
            return
        for name, cols in _TABLES:
            try:
                driver.create_table(name, cols)
            except DriverError as exc:
                _log.warning("could not create table %s: %s", name, exc)

    def is_connected(self) -> bool:
        """Whether a database connection has been established."""
        with self._lock:
            return self._driver is not None