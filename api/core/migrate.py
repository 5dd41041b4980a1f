"""
Create schemas and tables from `core/schema.py`.

Only CREATE ... IF NOT EXISTS is issued; existing tables are never altered.
"""

from __future__ import annotations

import logging

from . import db
from .schema import create_statements

logger = logging.getLogger(__name__)


async def apply_schema() -> None:
    statements = create_statements()
    async with db.pool().acquire() as conn:
        async with conn.transaction():
            for statement in statements:
                await conn.execute(statement)
    logger.info("schema_applied statements=%s", len(statements))
