"""Table names, column layouts and the transaction record."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from fintrail.driver import Column

TRANSACTION_TB = "fin_transaction"
ACCOUNT_TB = "fin_account"
REC_TX_TB = "fin_recurrenttransaction"

DOUBLE = "double precision"


@dataclass
class Transaction:
    """A row of the transaction table."""

    tx_id: str
    ts: int
    amount: float
    direction: bool
    is_synced: bool
    tags: str
    acc_id: str

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a plain mapping of field names to values."""
        return asdict(self)


TX_TABLE = (
    Column("tx_id", "varchar(100)", is_primary_key=True),
    Column("ts", "bigint"),
    Column("amount", "double precision"),
    Column("direction", "boolean"),
    Column("is_synced", "boolean"),
    Column("tags", "varchar(255)"),
    Column("acc_id", "varchar(100)"),
)

ACC_TABLE = (
    Column("acc_id", "varchar(100)", is_primary_key=True),
    Column("acc_name", "varchar(100)"),
    Column("balance", DOUBLE),
    Column("color", "varchar(40)"),
)

REC_TX_TABLE = (
    Column("cron_expr", "varchar(40)"),
    Column("amount", DOUBLE),
    Column("direction", "boolean"),
    Column("acc_id", "boolean"),
)