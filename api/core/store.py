"""
Transactional store interface used by the mutation engines.

`Store` is the contract; `PgStore` implements it on asyncpg. Every asyncpg or
connection failure leaves this module as `StoreError`.

Rows travel as plain dicts keyed by column name.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any, Protocol

import asyncpg

from . import query
from .errors import StoreError
from .schema import Table

_STORE_FAILURES = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


class Store(Protocol):
    async def count(self, table: Table, entity_id: int) -> int: ...

    async def find_by_id(self, table: Table, entity_id: int) -> dict[str, Any] | None: ...

    async def find_all(
        self,
        table: Table,
        *,
        where: Mapping[str, Any] | None = None,
        order_by: Sequence[str] = (),
    ) -> list[dict[str, Any]]: ...

    async def insert(self, table: Table, values: Mapping[str, Any]) -> dict[str, Any]: ...

    async def insert_many(self, table: Table, rows: Sequence[Mapping[str, Any]]) -> None: ...

    async def update(self, table: Table, entity_id: int, values: Mapping[str, Any]) -> int: ...

    async def upsert(self, table: Table, entity_id: int, values: Mapping[str, Any]) -> dict[str, Any]: ...

    async def delete(self, table: Table, entity_id: int) -> int: ...

    async def delete_where(self, table: Table, where: Mapping[str, Any]) -> int: ...

    async def max_value(
        self,
        table: Table,
        column: str,
        where: Mapping[str, Any] | None = None,
    ) -> Any: ...

    async def lock_row(self, table: Table, entity_id: int) -> bool: ...

    def transaction(self) -> AbstractAsyncContextManager[Store]: ...


def _affected(status: str) -> int:
    # asyncpg returns the command tag, e.g. "DELETE 3".
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (ValueError, IndexError):
        return 0


def _encode(table: Table, values: Mapping[str, Any]) -> dict[str, Any]:
    """
    asyncpg does not encode Python lists/dicts for jsonb parameters.
    We pass JSON as a string and cast to jsonb in SQL.
    """
    out: dict[str, Any] = {}
    for name, value in values.items():
        if value is not None and table.column(name).is_json:
            value = json.dumps(value, ensure_ascii=True)
        out[name] = value
    return out


def _decode(table: Table, record: asyncpg.Record) -> dict[str, Any]:
    row = dict(record)
    for name, value in row.items():
        if isinstance(value, str) and table.has_column(name) and table.column(name).is_json:
            row[name] = json.loads(value)
    return row


class PgStore:
    """
    Store backed by an asyncpg pool, or by one connection inside a transaction.
    """

    def __init__(self, executor: asyncpg.Pool | asyncpg.Connection, *, in_transaction: bool = False) -> None:
        self._executor = executor
        self._in_transaction = in_transaction

    async def _fetch(self, sql: str, args: Sequence[Any]) -> list[asyncpg.Record]:
        try:
            return await self._executor.fetch(sql, *args)
        except _STORE_FAILURES as exc:
            raise StoreError(f"query failed: {exc}") from exc

    async def _fetchrow(self, sql: str, args: Sequence[Any]) -> asyncpg.Record | None:
        try:
            return await self._executor.fetchrow(sql, *args)
        except _STORE_FAILURES as exc:
            raise StoreError(f"query failed: {exc}") from exc

    async def _execute(self, sql: str, args: Sequence[Any]) -> str:
        try:
            return await self._executor.execute(sql, *args)
        except _STORE_FAILURES as exc:
            raise StoreError(f"statement failed: {exc}") from exc

    async def count(self, table: Table, entity_id: int) -> int:
        row = await self._fetchrow(*query.count_by_id(table, entity_id))
        return int(row["n"]) if row is not None else 0

    async def find_by_id(self, table: Table, entity_id: int) -> dict[str, Any] | None:
        row = await self._fetchrow(*query.select_by_id(table, entity_id))
        return _decode(table, row) if row is not None else None

    async def find_all(
        self,
        table: Table,
        *,
        where: Mapping[str, Any] | None = None,
        order_by: Sequence[str] = (),
    ) -> list[dict[str, Any]]:
        rows = await self._fetch(*query.select_all(table, where=where, order_by=order_by))
        return [_decode(table, r) for r in rows]

    async def insert(self, table: Table, values: Mapping[str, Any]) -> dict[str, Any]:
        row = await self._fetchrow(*query.insert(table, _encode(table, values)))
        if row is None:
            raise StoreError(f"insert into {table.name} returned no row")
        return _decode(table, row)

    async def insert_many(self, table: Table, rows: Sequence[Mapping[str, Any]]) -> None:
        if not rows:
            return
        columns = list(rows[0])
        sql = query.insert_row(table, columns)
        records = [tuple(_encode(table, r)[c] for c in columns) for r in rows]
        try:
            await self._executor.executemany(sql, records)
        except _STORE_FAILURES as exc:
            raise StoreError(f"bulk insert failed: {exc}") from exc

    async def update(self, table: Table, entity_id: int, values: Mapping[str, Any]) -> int:
        rows = await self._fetch(*query.update(table, entity_id, _encode(table, values)))
        return len(rows)

    async def upsert(self, table: Table, entity_id: int, values: Mapping[str, Any]) -> dict[str, Any]:
        row = await self._fetchrow(*query.upsert(table, entity_id, _encode(table, values)))
        if row is None:
            raise StoreError(f"upsert into {table.name} returned no row")
        return _decode(table, row)

    async def delete(self, table: Table, entity_id: int) -> int:
        rows = await self._fetch(*query.delete_by_id(table, entity_id))
        return len(rows)

    async def delete_where(self, table: Table, where: Mapping[str, Any]) -> int:
        return _affected(await self._execute(*query.delete_where(table, where)))

    async def max_value(
        self,
        table: Table,
        column: str,
        where: Mapping[str, Any] | None = None,
    ) -> Any:
        row = await self._fetchrow(*query.max_value(table, column, where))
        return row["value"] if row is not None else None

    async def lock_row(self, table: Table, entity_id: int) -> bool:
        row = await self._fetchrow(*query.lock_by_id(table, entity_id))
        return row is not None

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[PgStore]:
        """
        Run the block in one transaction; nested calls become savepoints.
        """
        try:
            if self._in_transaction:
                async with self._executor.transaction():
                    yield self
                return

            async with self._executor.acquire() as conn:  # type: asyncpg.Connection
                async with conn.transaction():
                    yield PgStore(conn, in_transaction=True)
        except _STORE_FAILURES as exc:
            raise StoreError(f"transaction failed: {exc}") from exc
