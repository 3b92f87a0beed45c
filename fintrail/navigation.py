"""Routes, navigation tabs and the onboarding flow."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fintrail.store import ONBOARDED_KEY

Invoke = Callable[..., Any]

HOME_ROUTE = "/home/root"
PG_URL_KEY = "pg_url"
FALLBACK_VIEW = "Splash"


@dataclass(frozen=True)
class Tab:
    """An entry of the side bar."""

    name: str
    href: str
    icon: str


@dataclass(frozen=True)
class TxTab:
    """A tab on the transactions page."""

    name: str
    key: str
    value: int


SIDEBAR_TABS = (
    Tab("Home", "/home/root", "/public/icons/home.svg"),
    Tab("Transaction", "/home/tx", "/public/icons/wallet.svg"),
    Tab("Account", "/home/accounts", "/public/icons/credit-card.svg"),
    Tab("Rec. Transaction", "/home/recurring-transactions", "/public/icons/arrows-clockwise.svg"),
)

TX_TABS = (
    TxTab("All", "all", 10),
    TxTab("Income", "income", 99),
    TxTab("Expense", "expense", 108),
)

ROUTES: dict[str, tuple[str, ...]] = {
    "/splash": ("Splash",),
    "/init/postgres": ("PostgresInit",),
    "/init/sqlite": ("SqliteInit",),
    "/home/root": ("HomeLayout", "RootHome"),
    "/home/tx": ("HomeLayout", "Transaction"),
    "/home/accounts": ("HomeLayout", "Account"),
    "/home/recurring-transactions": ("HomeLayout", "RecurringTransaction"),
}


def resolve_route(path: str) -> tuple[str, ...]:
    """Return the nested views shown for ``path``, outermost first."""
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return ROUTES.get(path, (FALLBACK_VIEW,))


def tab_class(current_path: str, href: str) -> str:
    """CSS class of a side-bar item; ``active`` when it points at the current path."""
    return f"item {'active' if current_path == href else ''}"


def onboarding_route(platform: str, is_onboarded: bool) -> str | None:
    """Where the splash screen sends the user, or None to stay."""
    if is_onboarded:
        return HOME_ROUTE
    return {"linux": "/init/postgres", "android": "/init/sqlite"}.get(platform)


async def _call(invoke: Invoke, command: str, args: dict[str, Any] | None = None) -> Any:
    result = invoke(command) if args is None else invoke(command, args)
    if inspect.isawaitable(result):
        result = await result
    return result


async def splash(store: Any, invoke: Invoke) -> str | None:
    """Connect to the platform's database and return the route to go to next."""
    platform = await _call(invoke, "tauri_platform")
    if not isinstance(platform, str):
        platform = "unknown"
    is_onboarded = store.get(ONBOARDED_KEY) is True

    if platform == "linux":
        pg_url = store.get(PG_URL_KEY)
        if not isinstance(pg_url, str):
            pg_url = ""
        await _call(invoke, "connect_to_db", {"connString": pg_url})
    elif platform == "android":
        await _call(invoke, "connect_to_db")

    return onboarding_route(platform, is_onboarded)


async def finish_postgres_init(store: Any, invoke: Invoke, connection_string: str) -> str | None:
    """Connect with ``connection_string``; on a reply, remember it and return the home route."""
    status = await _call(invoke, "connect_to_db", {"connString": connection_string})
    if not isinstance(status, str):
        return None
    store.set(ONBOARDED_KEY, True)
    store.set(PG_URL_KEY, connection_string)
    store.save()
    return HOME_ROUTE


async def finish_sqlite_init(store: Any, invoke: Invoke) -> str:
    """Mark onboarding done, connect the local database and return the home route."""
    store.set(ONBOARDED_KEY, True)
    store.save()
    await _call(invoke, "connect_to_db")
    return HOME_ROUTE