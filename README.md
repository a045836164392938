# dbmeta

`dbmeta` reads metadata from a live database connection. It works out which
database product and version a connection talks to, picks the matching SQL
dialect, and runs that product's dictionary queries for schemas, tables,
columns, indexes, keys, sequences, functions and sessions.

It works with DB-API 2.0 connections, such as `sqlite3` connections. It has
no runtime dependencies.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Products

Query sets and dialects are provided for:

- ANSI (`dbmeta.products.ansi`), the fallback dialect
- SQLite 3 (`dbmeta.products.sqlite`)
- MySQL 5 (`dbmeta.products.mysql`)
- PostgreSQL 9 (`dbmeta.products.pg`)
- BigQuery (`dbmeta.products.bigquery`)

Importing a product module adds its queries and dialect to the shared
registry in `dbmeta.registry`. Each module also has a `register()` function,
which does the same and does nothing on later calls.

`dbmeta.registry.Registry` can also be used on its own, with `register`,
`register_dialect`, `lookup`, `lookup_dialect` and `match_product`.

## Usage

```python
import sqlite3

from dbmeta.kind import Kind
from dbmeta.options import new_args
from dbmeta.products import ansi, sqlite  # importing registers them
from dbmeta.service import Service
from dbmeta.sinks import Column, Table

connection = sqlite3.connect(":memory:")
connection.execute("CREATE TABLE emp (id INTEGER PRIMARY KEY, name TEXT)")

meta = Service()
product = meta.detect_product(connection)
print(product.name, product.major, product.minor)

tables = meta.info(connection, Kind.TABLES, list[Table], new_args("", ""))

columns = meta.info(connection, Kind.TABLE, list[Column], new_args("", "", "emp"))
for column in columns:
    print(column.name, column.type, column.nullable, column.key)
```

The product is guessed from the connection's type and then confirmed by the
product's version query; `detect_product` raises `RuntimeError` when that
fails. The SQLite queries read `sqlite_schema`, which needs SQLite 3.33 or
later.

`Service.info` returns the result in the shape named by its sink argument:

- `str`: the first column of the first row, or `""`
- `list[str]` (or `list`): the first column of every row
- `list[Record]`: one record per row, for a dataclass from `dbmeta.sinks`
  (`Column`, `Function`, `Index`, `Key`, `Schema`, `Sequence`, `Session`,
  `Table`)
- a record type: the last row read as one record, or `None`

Result columns are matched to record fields by name; `dbmeta.sinks.column_names`
shows the mapping for a record type.

Arguments passed with `new_args` follow the criteria of the requested kind
(`Kind.criteria()`), for example catalog, schema and table for `Kind.TABLE`.
An empty string leaves that criterion unfiltered; more arguments than the
kind accepts raise `ValueError`, as does a kind the product has no query for.
A `Product` passed among the options skips detection.

Statements that change session settings run through `Service.execute`, which
returns the cursor's row count:

```python
meta.execute(connection, Kind.FOREIGN_KEYS_CHECK_OFF, new_args("", "", ""))
```

`dbmeta.service.prepare_sql` builds the SQL text and bound parameters for a
query and its arguments without running it.

## Version strings

`dbmeta.database.parse` turns a server version banner into a `Product`:

```python
from dbmeta.database import parse

product = parse("PostgreSQL 9.3.10 on x86_64-unknown-linux-gnu")
# Product(name='PostgreSQL', driver='', driver_pkg='', major=9, minor=3, release=10)
```

It raises `ValueError` when the text holds no digits.

## Placeholders

`Dialect.ensure_placeholders` rewrites `?` placeholders for dialects that use
another style. `dbmeta.placeholder.NumberedGenerator`, used by the PostgreSQL
dialect, produces `$1`, `$2`, …; `DefaultGenerator` produces `?`.

## Bulk load statements

`dbmeta.mysql_load.build_sql` builds a MySQL `LOAD DATA LOCAL INFILE`
statement from a `LoadConfig`, a reader id, a table name and column names.

## What it does not do

- It opens no connections; you pass in a DB-API connection you made.
- It builds the MySQL bulk load statement but does not stream data or run
  bulk loads for any product.
- It has no command-line tool.