"""
SQL builder for the schema objects in `core/schema.py`.

Each function returns `(sql, args)` ready for asyncpg.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Identifiers come from the schema (never from callers), values always travel
as parameters. jsonb columns are passed as text and cast in SQL.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .schema import Table

Query = tuple[str, list[Any]]


def _placeholder(table: Table, column: str, n: int) -> str:
    if table.column(column).is_json:
        return f"${n}::jsonb"
    return f"${n}"


def _where(table: Table, where: Mapping[str, Any] | None, start: int = 1) -> Query:
    """
    Build an AND-ed WHERE clause.

    - None        -> "col IS NULL"
    - list/tuple  -> "col = ANY($n)"
    - other       -> "col = $n"
    """
    if not where:
        return "", []

    clauses: list[str] = []
    args: list[Any] = []
    n = start
    for column, value in where.items():
        table.column(column)
        if value is None:
            clauses.append(f"{column} IS NULL")
            continue
        if isinstance(value, (list, tuple)):
            clauses.append(f"{column} = ANY(${n})")
            args.append(list(value))
        else:
            clauses.append(f"{column} = ${n}")
            args.append(value)
        n += 1
    return "WHERE " + " AND ".join(clauses), args


def _order_by(table: Table, order_by: Sequence[str]) -> str:
    """
    `order_by` items are column names, "-name" for descending.
    """
    if not order_by:
        return ""
    parts: list[str] = []
    for item in order_by:
        desc = item.startswith("-")
        column = item[1:] if desc else item
        table.column(column)
        parts.append(f"{column} DESC" if desc else f"{column} ASC")
    return "ORDER BY " + ", ".join(parts)


def _columns(table: Table) -> str:
    return ", ".join(table.column_names)


def count_by_id(table: Table, entity_id: int) -> Query:
    return f"SELECT count(*) AS n FROM {table.name} WHERE id = $1", [entity_id]


def select_by_id(table: Table, entity_id: int) -> Query:
    return f"SELECT {_columns(table)} FROM {table.name} WHERE id = $1", [entity_id]


def select_all(
    table: Table,
    *,
    where: Mapping[str, Any] | None = None,
    order_by: Sequence[str] = (),
) -> Query:
    where_sql, args = _where(table, where)
    parts = [f"SELECT {_columns(table)} FROM {table.name}", where_sql, _order_by(table, order_by)]
    return " ".join(p for p in parts if p), args


def insert(table: Table, values: Mapping[str, Any]) -> Query:
    """
    INSERT the given columns; omitted columns (id, timestamps) take their defaults.
    """
    columns = list(values)
    if not columns:
        return f"INSERT INTO {table.name} DEFAULT VALUES RETURNING {_columns(table)}", []

    for column in columns:
        table.column(column)
    placeholders = ", ".join(_placeholder(table, c, i) for i, c in enumerate(columns, start=1))
    sql = (
        f"INSERT INTO {table.name} ({', '.join(columns)}) "
        f"VALUES ({placeholders}) "
        f"RETURNING {_columns(table)}"
    )
    return sql, [values[c] for c in columns]


def insert_row(table: Table, columns: Sequence[str]) -> str:
    """
    Single-row INSERT statement for `executemany` over `columns`.
    """
    for column in columns:
        table.column(column)
    placeholders = ", ".join(_placeholder(table, c, i) for i, c in enumerate(columns, start=1))
    return f"INSERT INTO {table.name} ({', '.join(columns)}) VALUES ({placeholders})"


def update(table: Table, entity_id: int, values: Mapping[str, Any]) -> Query:
    """
    Partial UPDATE of the given columns, scoped to one id.

    `updated_at` is refreshed here, never taken from `values`.
    """
    columns = list(values)
    if not columns:
        raise ValueError("update() needs at least one column.")

    assignments = [f"{c} = {_placeholder(table, c, i)}" for i, c in enumerate(columns, start=1)]
    if table.has_updated_at:
        assignments.append("updated_at = now()")
    id_param = len(columns) + 1
    sql = (
        f"UPDATE {table.name} "
        f"SET {', '.join(assignments)} "
        f"WHERE id = ${id_param} "
        f"RETURNING id"
    )
    return sql, [values[c] for c in columns] + [entity_id]


def upsert(table: Table, entity_id: int, values: Mapping[str, Any]) -> Query:
    """
    INSERT a row with a fixed id or, if it exists, update only the given columns.
    """
    columns = list(values)
    if not columns:
        raise ValueError("upsert() needs at least one column.")

    all_columns = ["id", *columns]
    placeholders = ["$1"] + [_placeholder(table, c, i) for i, c in enumerate(columns, start=2)]
    assignments = [f"{c} = EXCLUDED.{c}" for c in columns]
    if table.has_updated_at:
        assignments.append("updated_at = now()")
    sql = (
        f"INSERT INTO {table.name} ({', '.join(all_columns)}) "
        f"VALUES ({', '.join(placeholders)}) "
        f"ON CONFLICT (id) DO UPDATE "
        f"SET {', '.join(assignments)} "
        f"RETURNING {_columns(table)}"
    )
    return sql, [entity_id] + [values[c] for c in columns]


def delete_by_id(table: Table, entity_id: int) -> Query:
    return f"DELETE FROM {table.name} WHERE id = $1 RETURNING id", [entity_id]


def delete_where(table: Table, where: Mapping[str, Any]) -> Query:
    if not where:
        raise ValueError("delete_where() refuses to delete without a filter.")
    where_sql, args = _where(table, where)
    return f"DELETE FROM {table.name} {where_sql}", args


def max_value(table: Table, column: str, where: Mapping[str, Any] | None = None) -> Query:
    table.column(column)
    where_sql, args = _where(table, where)
    parts = [f"SELECT MAX({column}) AS value FROM {table.name}", where_sql]
    return " ".join(p for p in parts if p), args


def lock_by_id(table: Table, entity_id: int) -> Query:
    return f"SELECT id FROM {table.name} WHERE id = $1 FOR UPDATE", [entity_id]
