"""Backend commands and the command-line entry point."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Callable, Mapping
from typing import Any

from fintrail import crud
from fintrail.database import DEFAULT_DB_PATH, DatabaseProvider
from fintrail.driver import DriverError, parse_conditions
from fintrail.store import Store, ensure_onboarding_flag

_PLATFORMS = {"linux": "linux", "darwin": "macos", "win32": "windows", "cygwin": "windows"}


class CommandError(Exception):
    """A command was unknown or given bad arguments."""


def _host_platform() -> str:
    for prefix, name in _PLATFORMS.items():
        if sys.platform.startswith(prefix):
            return name
    return sys.platform


def _require(args: Mapping[str, Any], name: str) -> Any:
    try:
        return args[name]
    except KeyError:
        raise CommandError(f"missing argument {name!r}") from None


def _bool_arg(args: Mapping[str, Any], name: str) -> bool:
    value = _require(args, name)
    if not isinstance(value, bool):
        raise CommandError(f"{name} must be a boolean")
    return value


def _uint_arg(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise CommandError(f"{name} must be a non-negative integer")
    return value


def _number_arg(args: Mapping[str, Any], name: str) -> float:
    value = _require(args, name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CommandError(f"{name} must be a number")
    return float(value)


def _str_arg(args: Mapping[str, Any], name: str) -> str:
    value = _require(args, name)
    if not isinstance(value, str):
        raise CommandError(f"{name} must be a string")
    return value


class Backend:
    """Dispatches named commands to the database layer."""

    def __init__(self, provider: DatabaseProvider | None = None, platform: str | None = None) -> None:
        self.provider = provider if provider is not None else DatabaseProvider()
        self.platform = platform if platform is not None else _host_platform()
        self._handlers: dict[str, Callable[[Mapping[str, Any]], Any]] = {
            "connect_to_db": self._connect_to_db,
            "tauri_platform": lambda args: self.platform,
            "net_worth": self._net_worth,
            "transaction_amount_over_period": self._amount_over_period,
            "add_transaction": self._add_transaction,
            "fetch_transaction": self._fetch_transaction,
        }

    def connect_to_db(self, conn_string: str | None = None) -> str:
        """Connect, create the tables and report ``connected`` or ``disconnected``."""
        self.provider.get_driver(conn_string)
        self.provider.initialize_tables()
        return "connected" if self.provider.is_connected() else "disconnected"

    def invoke(self, command: str, args: Mapping[str, Any] | None = None) -> Any:
        """Run ``command`` with camelCase ``args`` and return a JSON-ready result."""
        handler = self._handlers.get(command)
        if handler is None:
            raise CommandError(f"unknown command: {command}")
        return handler(dict(args or {}))

    def _connect_to_db(self, args: Mapping[str, Any]) -> str:
        conn_string = args.get("connString")
        if conn_string is not None and not isinstance(conn_string, str):
            raise CommandError("connString must be a string")
        return self.connect_to_db(conn_string)

    def _net_worth(self, args: Mapping[str, Any]) -> float:
        return crud.net_worth(self.provider.get_driver())

    def _amount_over_period(self, args: Mapping[str, Any]) -> float:
        from_time = _uint_arg(_require(args, "fromTime"), "fromTime")
        to_time = _uint_arg(_require(args, "toTime"), "toTime")
        direction = _bool_arg(args, "direction")
        return crud.transaction_amount_over_period(
            self.provider.get_driver(), from_time, to_time, direction
        )

    def _add_transaction(self, args: Mapping[str, Any]) -> str:
        amount = _number_arg(args, "amount")
        ts = args.get("ts")
        if ts is not None:
            ts = _uint_arg(ts, "ts")
        direction = _bool_arg(args, "direction")
        is_synced = _bool_arg(args, "isSynced")
        tags = _str_arg(args, "tags")
        return crud.add_transaction(
            self.provider.get_driver(), amount, ts, direction, is_synced, tags
        )

    def _fetch_transaction(self, args: Mapping[str, Any]) -> list[dict[str, Any]]:
        try:
            conditions = parse_conditions(_require(args, "filter"))
        except (ValueError, TypeError) as exc:
            raise CommandError(f"bad filter: {exc}") from exc
        rows = crud.fetch_transaction(self.provider.get_driver(), conditions)
        return [row.to_dict() for row in rows]


def main(argv: list[str] | None = None) -> int:
    """Run one backend command and print its JSON result."""
    parser = argparse.ArgumentParser(prog="fintrail", description="Personal finance backend.")
    parser.add_argument("--store", default="default.json", help="settings file")
    parser.add_argument("--db", default=DEFAULT_DB_PATH, help="SQLite database path")
    parser.add_argument("command", help="command name, e.g. net_worth")
    parser.add_argument("args", nargs="?", default=None, help="JSON object of arguments")
    options = parser.parse_args(argv)

    try:
        store = Store.load(options.store)
        ensure_onboarding_flag(store)
        store.save()

        args = json.loads(options.args) if options.args else {}
        if not isinstance(args, dict):
            raise CommandError("arguments must be a JSON object")

        backend = Backend(DatabaseProvider(options.db))
        if options.command != "connect_to_db":
            backend.connect_to_db()
        result = backend.invoke(options.command, args)
    except (CommandError, DriverError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())