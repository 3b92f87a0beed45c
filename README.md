# fintrail

A small personal finance tracker backend. It keeps transactions in a
SQLite database, answers the questions a dashboard needs (net worth,
income and expense over a period), keeps settings such as the
onboarding flag in a JSON file, and includes a tiny query cache for
memoising data fetchers.

No third-party libraries are needed at run time.

## Command line

The package installs one command, `fintrail`, which runs a single
backend command and prints its result as JSON:

    fintrail [--store default.json] [--db fin-manager.db] COMMAND [ARGS_JSON]

- `--store` – the JSON settings file (default `default.json`). On every
  run it is loaded, `is_onboarded` is set to `false` if missing, and the
  file is saved.
- `--db` – the SQLite database file (default `fin-manager.db`). Unless
  the command is `connect_to_db`, the database is opened and the tables
  are created before the command runs.
- `ARGS_JSON` – a JSON object of arguments with camelCase names.

Commands:

| Command | Arguments | Result |
| --- | --- | --- |
| `connect_to_db` | `connString` (optional) | `"connected"` or `"disconnected"` |
| `tauri_platform` | – | the host platform name, e.g. `"linux"` |
| `net_worth` | – | sum of all account balances |
| `transaction_amount_over_period` | `fromTime`, `toTime`, `direction` | sum of matching transaction amounts |
| `add_transaction` | `amount`, `ts` (optional, ms), `direction`, `isSynced`, `tags` | the new transaction id |
| `fetch_transaction` | `filter` | list of transaction objects |

Examples:

    fintrail add_transaction '{"amount": 250.0, "direction": false, "isSynced": false, "tags": "food"}'
    fintrail transaction_amount_over_period '{"fromTime": 0, "toTime": 1900000000000, "direction": false}'
    fintrail fetch_transaction '{"filter": [{"field": "amount", "operator": {"Gt": {"Number": 100}}}]}'

A filter is a list of `{"field": ..., "operator": ...}` objects. The
operator is one of `Eq`, `Neq`, `Gt`, `Gte`, `Lt`, `Lte`, `Like`, `In`
with one value, `Between` with a list of two values, or the plain
strings `"IsNull"` / `"IsNotNull"`. A value is `{"StringVal": "..."}`,
`{"Number": <integer>}` or `{"Boolean": true|false}`. Conditions are
joined with `AND`.

On a bad command, bad arguments or a database error the message is
printed to standard error and the exit status is 1.

## Library overview

- `fintrail.driver` – `Column`, `Operator` and `Condition`, the SQL
  builders `build_where_clause`, `build_cols_query` and
  `generate_create_table_query`, `parse_conditions` for the JSON filter
  form, and the `DriverError` exception family (`ConnectionFailed`,
  `NoRecordFound`, `UpdateFailed`, `UnknownDriverError`).
- `fintrail.table` – the table names and layouts (`TX_TABLE`,
  `ACC_TABLE`, `REC_TX_TABLE`) and the `Transaction` record with
  `to_dict`.
- `fintrail.database` – `SqliteDriver` (`connect`, `create_table`,
  `close`, usable as a context manager; accepts a path or an `sqlite:`
  URL) and `DatabaseProvider`, which connects once on first use, creates
  the tables with `initialize_tables` and reports `is_connected`.
- `fintrail.crud` – `net_worth`, `transaction_amount_over_period`,
  `add_transaction` and `fetch_transaction`, each taking a
  `SqliteDriver` (or `None`, meaning no database).
- `fintrail.store` – a JSON-backed `Store` with `load`, `get`, `set`
  and `save` (atomic write), plus `ensure_onboarding_flag`.
- `fintrail.commands` – `Backend`, which routes named commands
  (`invoke`, `connect_to_db`), and `main` for the command line.
- `fintrail.query_cache`, `fintrail.mutation_observer`,
  `fintrail.query_client`, `fintrail.use_query` – a minimal query
  cache: register a fetcher under a `QueryKey` with `QueryClient`, read
  the cached value, refresh it with `QueryClient.invalidate_cache`, or
  use `use_query` / `use_query_async`, which return a `QueryResult`
  with a `QueryState`.
- `fintrail.dashboard` – `TxAmountQuery`, `start_of_month_millis`,
  `format_amount` (two decimals and `INR`) and the async fetchers
  `fetch_networth`, `fetch_income` and `fetch_expense`, which call any
  `invoke(command, args)` function such as `Backend.invoke`.
- `fintrail.navigation` – route resolution (`resolve_route`), the side
  bar and transaction tabs, `tab_class`, `onboarding_route`, and the
  async onboarding steps `splash`, `finish_postgres_init` and
  `finish_sqlite_init`.

## Example

```python
from fintrail.driver import Column, generate_create_table_query

cols = [
    Column(field_name="tx_id", data_type="varchar(100)", is_primary_key=True),
    Column(field_name="amount", data_type="double precision"),
]
print(generate_create_table_query("fin_transaction", cols))
```

```python
from fintrail.commands import Backend
from fintrail.database import DatabaseProvider

backend = Backend(DatabaseProvider("finance.db"))
backend.connect_to_db()
backend.invoke("add_transaction", {
    "amount": 1200.0, "direction": True, "isSynced": False, "tags": "salary",
})
print(backend.invoke("net_worth"))
```

```python
from fintrail.store import Store, ensure_onboarding_flag

store = Store.load("default.json")
ensure_onboarding_flag(store)
store.save()
print(store.get("is_onboarded"))
```

## What it does not do

- There is no graphical interface. `fintrail.navigation` and
  `fintrail.dashboard` hold the routing, tab and onboarding logic and
  the figures a screen would show, but nothing draws a screen.
- Storage is SQLite only; there is no PostgreSQL driver. The connection
  string given to `connect_to_db` is used as an SQLite path or URL.
- Accounts and recurring transactions have tables, but there are no
  commands to add, change or list them; `net_worth` only reads account
  balances. Transactions can be added and fetched, not updated or
  deleted.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.