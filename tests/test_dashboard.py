from datetime import datetime, timezone

import pytest

from fintrail.commands import Backend
from fintrail.dashboard import (
    TxAmountQuery,
    fetch_expense,
    fetch_income,
    fetch_networth,
    format_amount,
    start_of_month_millis,
)
from fintrail.database import DatabaseProvider


class Recorder:
    def __init__(self, result):
        self.result = result
        self.calls = []

    def __call__(self, command, args=None):
        self.calls.append((command, args))
        return self.result


class AsyncRecorder(Recorder):
    async def __call__(self, command, args=None):
        return super().__call__(command, args)


@pytest.fixture
def backend(tmp_path):
    b = Backend(DatabaseProvider(tmp_path / "fin.db"), platform="linux")
    assert b.connect_to_db() == "connected"
    return b


def test_tx_amount_query_uses_camel_case_names():
    query = TxAmountQuery(from_time=5, to_time=9, direction=True)
    assert query.to_dict() == {"fromTime": 5, "toTime": 9, "direction": True}


def test_start_of_month_is_first_day_midnight_utc():
    millis = start_of_month_millis(datetime(2024, 3, 15, 10, 30))
    moment = datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    assert (moment.year, moment.month, moment.day) == (2024, 3, 1)
    assert (moment.hour, moment.minute, moment.second) == (0, 0, 0)
    assert millis % 1000 == 0


def test_start_of_month_same_within_month():
    assert start_of_month_millis(datetime(2023, 7, 1)) == start_of_month_millis(
        datetime(2023, 7, 31, 23, 59)
    )


def test_start_of_month_default_not_after_now():
    assert start_of_month_millis() <= datetime.now(timezone.utc).timestamp() * 1000 + 86_400_000


def test_format_amount_two_decimals():
    assert format_amount(1234.5) == "1234.50 INR"


def test_format_amount_none_is_zero():
    assert format_amount(None) == "0.00 INR"


@pytest.mark.asyncio
async def test_fetch_networth_sync_invoke():
    invoke = Recorder(42.5)
    assert await fetch_networth(invoke) == 42.5
    assert invoke.calls == [("net_worth", None)]


@pytest.mark.asyncio
async def test_fetch_networth_async_invoke():
    invoke = AsyncRecorder(7)
    assert await fetch_networth(invoke) == 7.0


@pytest.mark.asyncio
@pytest.mark.parametrize("bad", [None, "12", True, {"x": 1}])
async def test_fetch_networth_non_number_is_zero(bad):
    assert await fetch_networth(Recorder(bad)) == 0.0


@pytest.mark.asyncio
async def test_fetch_income_and_expense_send_direction():
    invoke = Recorder(3.0)
    assert await fetch_income(invoke, 1, 2) == 3.0
    assert await fetch_expense(invoke, 1, 2) == 3.0
    assert invoke.calls == [
        ("transaction_amount_over_period", {"fromTime": 1, "toTime": 2, "direction": True}),
        ("transaction_amount_over_period", {"fromTime": 1, "toTime": 2, "direction": False}),
    ]


@pytest.mark.asyncio
async def test_against_backend(backend):
    for amount, direction in [(100.0, True), (25.0, True), (40.0, False)]:
        backend.invoke(
            "add_transaction",
            {"amount": amount, "ts": 1000, "direction": direction, "isSynced": False, "tags": ""},
        )
    assert await fetch_income(backend.invoke, 0, 2000) == 125.0
    assert await fetch_expense(backend.invoke, 0, 2000) == 40.0
    assert await fetch_income(backend.invoke, 2001, 3000) == 0.0
    assert await fetch_networth(backend.invoke) == 0.0