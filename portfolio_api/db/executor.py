"""
Transactional query batch executor.

Runs an ordered list of parameterized statements inside a single
transaction on one pooled connection. Either every statement takes effect
or none does. Driver errors are mapped onto the API's error taxonomy so
callers can tell a duplicate key apart from an infrastructure failure.
"""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection
from sqlalchemy.sql.expression import Executable

from portfolio_api.core.exceptions import (
    ClientReleaseError,
    ConflictError,
    DBConnectionError,
    InvalidQueryInput,
    TransactionError,
)
from portfolio_api.db.session import Database

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


@dataclass
class BatchQuery:
    """
    One statement of a batch plus its bound parameters.

    ``rows`` and ``rowcount`` are filled in once the batch commits.
    """

    statement: Executable
    params: Mapping[str, Any] = field(default_factory=dict)
    rows: list[dict[str, Any]] = field(default_factory=list)
    rowcount: int = -1


class QueryExecutor:
    """Executes query batches against a ``Database`` handle."""

    def __init__(
        self,
        database: Database,
        acquire_timeout: float | None = None,
        batch_timeout: float | None = None,
    ):
        self.database = database
        self.acquire_timeout = acquire_timeout
        self.batch_timeout = batch_timeout

    async def execute(self, queries: Sequence[BatchQuery]) -> Sequence[BatchQuery]:
        """
        Execute a batch of queries as one all-or-nothing transaction.

        Args:
            queries: Non-empty ordered sequence of BatchQuery entries

        Returns:
            The same entries, each carrying the rows its statement produced

        Raises:
            InvalidQueryInput: If the batch is empty or malformed
            DBConnectionError: If no connection could be acquired
            ConflictError: If a statement violated a unique constraint
            TransactionError: If a statement or the rollback failed
            ClientReleaseError: If the connection could not be released
        """
        self._validate(queries)
        connection = await self._acquire()

        completed = False
        try:
            await self._run_in_transaction(connection, queries)
            completed = True
        finally:
            # A release failure must not hide the error already in flight
            await self._release(connection, raise_errors=completed)

        return queries

    async def fetch(self, query: BatchQuery) -> list[dict[str, Any]]:
        """Execute a single read query and return its rows."""
        await self.execute([query])
        return query.rows

    def _validate(self, queries: Any) -> None:
        if isinstance(queries, (str, bytes)) or not isinstance(queries, Sequence):
            raise InvalidQueryInput("Query batch must be a sequence of BatchQuery entries")
        if not queries:
            raise InvalidQueryInput("Query batch is empty")
        for index, query in enumerate(queries):
            if not isinstance(query, BatchQuery):
                raise InvalidQueryInput(f"Entry {index} is not a BatchQuery")
            if not isinstance(query.statement, Executable):
                raise InvalidQueryInput(f"Entry {index} has no executable statement")
            if not isinstance(query.params, Mapping):
                raise InvalidQueryInput(f"Entry {index} parameters must be a mapping")

    async def _acquire(self) -> AsyncConnection:
        try:
            return await asyncio.wait_for(self.database.connect(), timeout=self.acquire_timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Timed out acquiring database connection after {self.acquire_timeout}s")
            raise DBConnectionError(
                f"Timed out acquiring database connection after {self.acquire_timeout}s"
            ) from e
        except (SQLAlchemyError, OSError, RuntimeError) as e:
            logger.error(f"Failed to acquire database connection: {e}")
            raise DBConnectionError(f"Failed to acquire database connection: {e}") from e

    async def _run_in_transaction(
        self,
        connection: AsyncConnection,
        queries: Sequence[BatchQuery],
    ) -> None:
        try:
            transaction = await connection.begin()
        except SQLAlchemyError as e:
            raise TransactionError(f"Failed to begin transaction: {e}") from e

        try:
            results = await asyncio.wait_for(
                self._run_statements(connection, queries),
                timeout=self.batch_timeout,
            )
            await transaction.commit()
        except Exception as e:
            logger.warning(f"Rolling back query batch: {e}")
            try:
                await transaction.rollback()
            except Exception as rollback_error:
                raise TransactionError(
                    f"Failed to rollback transaction: {rollback_error} (after: {e})"
                ) from e

            conflict = _as_conflict(e)
            if conflict is not None:
                raise conflict from e
            if isinstance(e, asyncio.TimeoutError):
                raise TransactionError(
                    f"Query batch timed out after {self.batch_timeout}s"
                ) from e
            raise TransactionError(f"Database error: {e}") from e

        for query, (rows, rowcount) in zip(queries, results):
            query.rows = rows
            query.rowcount = rowcount

    async def _run_statements(
        self,
        connection: AsyncConnection,
        queries: Sequence[BatchQuery],
    ) -> list[tuple[list[dict[str, Any]], int]]:
        results = []
        for query in queries:
            logger.debug(f"Executing: {query.statement}")
            result = await connection.execute(query.statement, dict(query.params) or None)
            rows = [dict(row) for row in result.mappings()] if result.returns_rows else []
            results.append((rows, result.rowcount))
        return results

    async def _release(self, connection: AsyncConnection, raise_errors: bool) -> None:
        try:
            await connection.close()
        except Exception as e:
            if raise_errors:
                raise ClientReleaseError(f"Failed to release client: {e}") from e
            logger.error(f"Failed to release client after a failed batch: {e}")


def _as_conflict(error: Exception) -> ConflictError | None:
    """Translate a unique constraint violation into a ConflictError."""
    if not isinstance(error, IntegrityError):
        return None

    # asyncpg exposes sqlstate on the adapted error and on its cause,
    # psycopg uses pgcode
    driver_error = error.orig
    for candidate in (driver_error, getattr(driver_error, "__cause__", None)):
        if candidate is None:
            continue
        sqlstate = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if sqlstate == UNIQUE_VIOLATION:
            constraint = getattr(candidate, "constraint_name", None)
            return ConflictError(
                f"Constraint error: {constraint or 'unique constraint violated'}",
                constraint=constraint,
                detail=getattr(candidate, "detail", None) or str(driver_error),
            )

    message = str(driver_error)
    if "UNIQUE constraint failed" in message:
        constraint = message.split(":", 1)[-1].strip()
        return ConflictError(
            f"Constraint error: {constraint}",
            constraint=constraint,
            detail=message,
        )
    return None
