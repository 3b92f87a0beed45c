"""Figures shown on the home dashboard: net worth, income and expense."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

Invoke = Callable[..., Any]

CURRENCY = "INR"


@dataclass(frozen=True)
class TxAmountQuery:
    """Arguments of the ``transaction_amount_over_period`` command."""

    from_time: int
    to_time: int
    direction: bool

    def to_dict(self) -> dict[str, Any]:
        """Return the arguments under the names the command expects."""
        return {
            "fromTime": self.from_time,
            "toTime": self.to_time,
            "direction": self.direction,
        }


async def _call(invoke: Invoke, command: str, args: dict[str, Any] | None = None) -> Any:
    result = invoke(command) if args is None else invoke(command, args)
    if inspect.isawaitable(result):
        result = await result
    return result


def _as_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def start_of_month_millis(now: datetime | None = None) -> int:
    """Milliseconds since the epoch of midnight on the first of ``now``'s month, read as UTC."""
    if now is None:
        now = datetime.now()
    first = datetime(now.year, now.month, 1, tzinfo=timezone.utc)
    return int(first.timestamp()) * 1000


def format_amount(value: float | None) -> str:
    """Format an amount with two decimals and the currency; None counts as zero."""
    return f"{(value or 0.0):.2f} {CURRENCY}"


async def fetch_networth(invoke: Invoke) -> float:
    """Ask the backend for the net worth; 0.0 if it returns no number."""
    return _as_float(await _call(invoke, "net_worth"))


async def _fetch_amount(invoke: Invoke, start: int, end: int, direction: bool) -> float:
    query = TxAmountQuery(from_time=start, to_time=end, direction=direction)
    return _as_float(await _call(invoke, "transaction_amount_over_period", query.to_dict()))


async def fetch_expense(invoke: Invoke, start: int, end: int) -> float:
    """Total outgoing amount between ``start`` and ``end`` (milliseconds)."""
    return await _fetch_amount(invoke, start, end, False)


async def fetch_income(invoke: Invoke, start: int, end: int) -> float:
    """Total incoming amount between ``start`` and ``end`` (milliseconds)."""
    return await _fetch_amount(invoke, start, end, True)