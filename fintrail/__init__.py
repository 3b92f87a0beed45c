"""Personal finance tracking on SQLite: transactions, net worth, a JSON settings store and a query cache."""

__version__ = "0.1.0"