"""
In-memory `Store` for tests.

Behaves like the Postgres schema in `core/schema.py` as far as the engines
can observe: identity ids, NOT NULL, primary keys, foreign keys with their
ON DELETE rule, and rollback of everything written inside a failed
transaction.
"""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import Any

from core.errors import StoreError
from core.schema import CASCADE, RESTRICT, SET_NULL, TABLES, Column, Table

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _matches(table: Table, row: Mapping[str, Any], where: Mapping[str, Any] | None) -> bool:
    for column, value in (where or {}).items():
        table.column(column)
        if value is None:
            if row.get(column) is not None:
                return False
        elif isinstance(value, (list, tuple)):
            if row.get(column) not in value:
                return False
        elif row.get(column) != value:
            return False
    return True


def _sort(rows: list[dict[str, Any]], table: Table, order_by: Sequence[str]) -> list[dict[str, Any]]:
    # Postgres: NULLs sort last ascending, first descending.
    for item in reversed(order_by):
        desc = item.startswith("-")
        column = item[1:] if desc else item
        table.column(column)
        rows.sort(key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
    return rows


class MemoryStore:
    def __init__(self, tables: Sequence[Table] = TABLES) -> None:
        self.tables = {t.name: t for t in tables}
        self.data: dict[str, list[dict[str, Any]]] = {t.name: [] for t in tables}
        self.sequences: dict[str, int] = {t.name: 0 for t in tables}
        self.ops: list[tuple[str, str]] = []
        self.locked: list[tuple[str, int]] = []
        self.transactions = 0
        self.rollbacks = 0
        self._tick = 0

    # --- helpers for tests ---

    def rows(self, table: Table) -> list[dict[str, Any]]:
        return copy.deepcopy(self.data[table.name])

    def ops_for(self, op: str) -> list[str]:
        return [name for (kind, name) in self.ops if kind == op]

    # --- internals ---

    def _now(self) -> datetime:
        self._tick += 1
        return _EPOCH + timedelta(seconds=self._tick)

    def _default(self, column: Column) -> Any:
        if column.default is None:
            return None
        if column.default == "now()":
            return self._now()
        if column.default in ("true", "false"):
            return column.default == "true"
        return int(column.default)

    def _snapshot(self) -> tuple[dict[str, list[dict[str, Any]]], dict[str, int]]:
        return copy.deepcopy(self.data), dict(self.sequences)

    def _restore(self, snapshot: tuple[dict[str, list[dict[str, Any]]], dict[str, int]]) -> None:
        data, sequences = snapshot
        self.data.clear()
        self.data.update(data)
        self.sequences.clear()
        self.sequences.update(sequences)

    def _get(self, table: Table, entity_id: int) -> dict[str, Any] | None:
        for row in self.data[table.name]:
            if row.get("id") == entity_id:
                return row
        return None

    def _check_row(self, table: Table, row: Mapping[str, Any], *, skip: Mapping[str, Any] | None = None) -> None:
        for column in table.columns:
            if not column.nullable and row.get(column.name) is None:
                raise StoreError(f"null value in column {column.name} of {table.name}")

        key = tuple(row.get(c) for c in table.primary_key)
        for other in self.data[table.name]:
            if other is skip:
                continue
            if tuple(other.get(c) for c in table.primary_key) == key:
                raise StoreError(f"duplicate key {key} in {table.name}")

        for fk in table.foreign_keys:
            value = row.get(fk.column)
            if value is None:
                continue
            if self._get(self.tables[fk.references], value) is None:
                raise StoreError(f"{table.name}.{fk.column}={value} violates foreign key to {fk.references}")

    def _insert(self, table: Table, values: Mapping[str, Any]) -> dict[str, Any]:
        row = {c.name: self._default(c) for c in table.columns if c.name != "id"}
        if table.has_identity:
            if values.get("id") is None:
                self.sequences[table.name] += 1
                row["id"] = self.sequences[table.name]
            else:
                self.sequences[table.name] = max(self.sequences[table.name], int(values["id"]))
        for name, value in values.items():
            table.column(name)
            row[name] = copy.deepcopy(value)
        self._check_row(table, row)
        self.data[table.name].append(row)
        return row

    def _remove(self, table: Table, row: dict[str, Any]) -> None:
        self.data[table.name] = [r for r in self.data[table.name] if r is not row]
        if not table.has_identity:
            return
        for dependent in self.tables.values():
            for fk in dependent.foreign_keys:
                if fk.references != table.name:
                    continue
                referencing = [r for r in self.data[dependent.name] if r.get(fk.column) == row["id"]]
                for ref in referencing:
                    if fk.on_delete == RESTRICT:
                        raise StoreError(f"{dependent.name}.{fk.column} still references {table.name} {row['id']}")
                    if fk.on_delete == SET_NULL:
                        ref[fk.column] = None
                    elif fk.on_delete == CASCADE:
                        self._remove(dependent, ref)

    # --- Store ---

    async def count(self, table: Table, entity_id: int) -> int:
        self.ops.append(("count", table.name))
        return 1 if self._get(table, entity_id) is not None else 0

    async def find_by_id(self, table: Table, entity_id: int) -> dict[str, Any] | None:
        self.ops.append(("find_by_id", table.name))
        row = self._get(table, entity_id)
        return copy.deepcopy(row) if row is not None else None

    async def find_all(
        self,
        table: Table,
        *,
        where: Mapping[str, Any] | None = None,
        order_by: Sequence[str] = (),
    ) -> list[dict[str, Any]]:
        self.ops.append(("find_all", table.name))
        rows = [copy.deepcopy(r) for r in self.data[table.name] if _matches(table, r, where)]
        return _sort(rows, table, order_by)

    async def insert(self, table: Table, values: Mapping[str, Any]) -> dict[str, Any]:
        self.ops.append(("insert", table.name))
        return copy.deepcopy(self._insert(table, values))

    async def insert_many(self, table: Table, rows: Sequence[Mapping[str, Any]]) -> None:
        self.ops.append(("insert_many", table.name))
        snapshot = self._snapshot()
        try:
            for values in rows:
                self._insert(table, values)
        except StoreError:
            self._restore(snapshot)
            raise

    async def update(self, table: Table, entity_id: int, values: Mapping[str, Any]) -> int:
        self.ops.append(("update", table.name))
        if not values:
            raise ValueError("update() needs at least one column.")
        row = self._get(table, entity_id)
        if row is None:
            return 0
        candidate = dict(row)
        for name, value in values.items():
            table.column(name)
            candidate[name] = copy.deepcopy(value)
        if table.has_updated_at:
            candidate["updated_at"] = self._now()
        self._check_row(table, candidate, skip=row)
        row.update(candidate)
        return 1

    async def upsert(self, table: Table, entity_id: int, values: Mapping[str, Any]) -> dict[str, Any]:
        self.ops.append(("upsert", table.name))
        row = self._get(table, entity_id)
        if row is None:
            return copy.deepcopy(self._insert(table, {"id": entity_id, **values}))
        candidate = {**row, **copy.deepcopy(dict(values))}
        if table.has_updated_at:
            candidate["updated_at"] = self._now()
        self._check_row(table, candidate, skip=row)
        row.update(candidate)
        return copy.deepcopy(row)

    async def delete(self, table: Table, entity_id: int) -> int:
        self.ops.append(("delete", table.name))
        row = self._get(table, entity_id)
        if row is None:
            return 0
        snapshot = self._snapshot()
        try:
            self._remove(table, row)
        except StoreError:
            self._restore(snapshot)
            raise
        return 1

    async def delete_where(self, table: Table, where: Mapping[str, Any]) -> int:
        self.ops.append(("delete_where", table.name))
        if not where:
            raise ValueError("delete_where() refuses to delete without a filter.")
        doomed = [r for r in self.data[table.name] if _matches(table, r, where)]
        snapshot = self._snapshot()
        try:
            for row in doomed:
                self._remove(table, row)
        except StoreError:
            self._restore(snapshot)
            raise
        return len(doomed)

    async def max_value(self, table: Table, column: str, where: Mapping[str, Any] | None = None) -> Any:
        self.ops.append(("max_value", table.name))
        table.column(column)
        values = [r[column] for r in self.data[table.name] if _matches(table, r, where) and r.get(column) is not None]
        return max(values) if values else None

    async def lock_row(self, table: Table, entity_id: int) -> bool:
        self.ops.append(("lock_row", table.name))
        if self._get(table, entity_id) is None:
            return False
        self.locked.append((table.name, entity_id))
        return True

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[MemoryStore]:
        self.transactions += 1
        snapshot = self._snapshot()
        try:
            yield self
        except Exception:
            self.rollbacks += 1
            self._restore(snapshot)
            raise
