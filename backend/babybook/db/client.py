"""
Generic query/command handle over the site's backend.

Every other component talks to the backend through ``BackendClient.table``,
``BackendClient.storage`` and ``BackendClient.auth``; nothing here knows what
a milestone or a guestbook entry is.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from sqlalchemy import Date, DateTime, Table, delete, func, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

import babybook.models  # noqa: F401  registers every table on Base.metadata
from babybook.db.auth import AuthClient
from babybook.db.errors import BackendError
from babybook.db.session import Base, make_engine
from babybook.db.storage import StorageClient

logger = logging.getLogger(__name__)

Row = Dict[str, Any]

# Largest OFFSET a 64-bit SQL integer can hold
MAX_ROW_OFFSET = 2 ** 63 - 1


@dataclass
class QueryResult:
    data: Any = field(default_factory=list)
    count: Optional[int] = None


class Query:
    """Chainable builder for one statement against one table."""

    def __init__(self, client: "BackendClient", table: Table):
        self.client = client
        self.table = table
        self._action = "select"
        self._columns: List[str] = []
        self._count: Optional[str] = None
        self._values: List[Row] = []
        self._filters: List[Any] = []
        self._order: List[Tuple[str, bool]] = []
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None
        self._single: Optional[str] = None

    # -- actions -----------------------------------------------------------

    def select(self, columns: str = "*", count: Optional[str] = None) -> "Query":
        """Columns to return; after ``insert`` this narrows the returned rows."""
        if columns.strip() != "*":
            self._columns = [c.strip() for c in columns.split(",") if c.strip()]
        self._count = count
        return self

    def insert(self, values: Union[Row, Iterable[Row]]) -> "Query":
        self._action = "insert"
        self._values = [values] if isinstance(values, dict) else list(values)
        return self

    def update(self, values: Row) -> "Query":
        self._action = "update"
        self._values = [values]
        return self

    def delete(self) -> "Query":
        self._action = "delete"
        return self

    # -- filters -----------------------------------------------------------

    def eq(self, column: str, value: Any) -> "Query":
        col = self._column(column)
        self._filters.append(col == self._coerce(col, value))
        return self

    def neq(self, column: str, value: Any) -> "Query":
        col = self._column(column)
        self._filters.append(col != self._coerce(col, value))
        return self

    def in_(self, column: str, values: Iterable[Any]) -> "Query":
        col = self._column(column)
        self._filters.append(col.in_([self._coerce(col, v) for v in values]))
        return self

    def gte(self, column: str, value: Any) -> "Query":
        col = self._column(column)
        self._filters.append(col >= self._coerce(col, value))
        return self

    def lte(self, column: str, value: Any) -> "Query":
        col = self._column(column)
        self._filters.append(col <= self._coerce(col, value))
        return self

    # -- modifiers ---------------------------------------------------------

    def order(self, column: str, desc: bool = False) -> "Query":
        self._column(column)
        self._order.append((column, desc))
        return self

    def limit(self, count: int) -> "Query":
        self._limit = count
        return self

    def range(self, start: int, end: int) -> "Query":
        """Inclusive row range, as in ``range(0, 11)`` for the first twelve rows."""
        self._offset = max(start, 0)
        self._limit = max(end - start + 1, 0)
        return self

    def maybe_single(self) -> "Query":
        self._single = "maybe"
        return self

    def single(self) -> "Query":
        self._single = "exactly"
        return self

    # -- execution ---------------------------------------------------------

    def execute(self) -> QueryResult:
        try:
            with self.client.engine.begin() as conn:
                if self._action == "select":
                    result = self._run_select(conn)
                elif self._action == "insert":
                    result = self._run_insert(conn)
                elif self._action == "update":
                    result = self._run_update(conn)
                else:
                    result = self._run_delete(conn)
        except SQLAlchemyError as exc:
            raise BackendError.from_exception(exc) from exc
        except OverflowError as exc:
            raise BackendError(f"value out of range: {exc}", code="22003") from exc
        return self._shape(result)

    def _run_select(self, conn) -> QueryResult:
        columns = [self._column(c) for c in self._columns] or list(self.table.c)
        stmt = select(*columns).where(*self._filters)
        for name, desc in self._order:
            col = self.table.c[name]
            stmt = stmt.order_by(col.desc() if desc else col.asc())
        if self._offset:
            stmt = stmt.offset(self._offset)
        if self._limit is not None:
            stmt = stmt.limit(self._limit)
        if (self._offset or 0) > MAX_ROW_OFFSET:
            rows = []
        else:
            rows = [dict(r._mapping) for r in conn.execute(stmt)]

        count = None
        if self._count == "exact":
            count_stmt = select(func.count()).select_from(self.table).where(*self._filters)
            count = conn.execute(count_stmt).scalar_one()
        return QueryResult(data=rows, count=count)

    def _run_insert(self, conn) -> QueryResult:
        inserted = []
        for values in self._values:
            row = self._coerce_row(values)
            result = conn.execute(insert(self.table).values(**row))
            pk_filters = [
                col == value
                for col, value in zip(self.table.primary_key.columns, result.inserted_primary_key)
            ]
            inserted.append(dict(conn.execute(select(self.table).where(*pk_filters)).one()._mapping))
        if self._columns:
            inserted = [{k: r[k] for k in self._columns} for r in inserted]
        return QueryResult(data=inserted, count=len(inserted))

    def _run_update(self, conn) -> QueryResult:
        self._require_filters()
        result = conn.execute(update(self.table).where(*self._filters).values(**self._coerce_row(self._values[0])))
        return QueryResult(data=[], count=result.rowcount)

    def _run_delete(self, conn) -> QueryResult:
        self._require_filters()
        result = conn.execute(delete(self.table).where(*self._filters))
        return QueryResult(data=[], count=result.rowcount)

    def _shape(self, result: QueryResult) -> QueryResult:
        if self._single is None:
            return result
        if len(result.data) > 1:
            raise BackendError(
                "JSON object requested, multiple (or no) rows returned",
                details=f"The result contains {len(result.data)} rows",
            )
        if not result.data:
            if self._single == "exactly":
                raise BackendError(
                    "JSON object requested, multiple (or no) rows returned",
                    details="The result contains 0 rows",
                )
            return QueryResult(data=None, count=result.count)
        return QueryResult(data=result.data[0], count=result.count)

    # -- helpers -----------------------------------------------------------

    def _require_filters(self) -> None:
        if not self._filters:
            raise BackendError(f"{self._action.upper()} requires a WHERE clause", code="21000")

    def _column(self, name: str):
        try:
            return self.table.c[name]
        except KeyError:
            raise BackendError(f"column {self.table.name}.{name} does not exist", code="42703") from None

    def _coerce_row(self, values: Row) -> Row:
        return {name: self._coerce(self._column(name), value) for name, value in values.items()}

    @staticmethod
    def _coerce(col, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        try:
            if isinstance(col.type, DateTime):
                return datetime.fromisoformat(value.replace("Z", "+00:00"))
            if isinstance(col.type, Date):
                return date.fromisoformat(value[:10])
        except ValueError:
            type_name = "timestamp" if isinstance(col.type, DateTime) else "date"
            raise BackendError(f'invalid input syntax for type {type_name}: "{value}"', code="22007") from None
        return value


class BackendClient:
    """
    Long-lived handle to the backend: tables, object storage and auth.

    Build one per application from configuration and hand it to the
    components that need it.
    """

    def __init__(
            self,
            database_url: str,
            api_key: str,
            storage_root: str,
            storage_public_url: str = "/uploads",
            secret_key: Optional[str] = None,
            algorithm: str = "HS256",
            session_minutes: int = 60 * 24 * 7,
            engine: Optional[Engine] = None,
    ):
        self.database_url = database_url
        self.api_key = api_key
        self.engine = engine or make_engine(database_url)
        self.metadata = Base.metadata
        self.storage = StorageClient(storage_root, storage_public_url)
        self.auth = AuthClient(
            self,
            secret_key=secret_key or api_key,
            algorithm=algorithm,
            session_minutes=session_minutes,
        )

    @classmethod
    def from_settings(cls, settings) -> "BackendClient":
        return cls(
            settings.DATABASE_URL,
            settings.BACKEND_API_KEY,
            storage_root=settings.UPLOAD_FOLDER,
            storage_public_url=settings.STORAGE_PUBLIC_URL,
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            session_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        )

    def table(self, name: str) -> Query:
        try:
            table = self.metadata.tables[name]
        except KeyError:
            raise BackendError(f'relation "{name}" does not exist', code="42P01") from None
        return Query(self, table)

    def create_all(self) -> None:
        self.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()
