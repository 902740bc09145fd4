from typing import Any, Dict, List, Optional, Type
import logging
import time
from sqlalchemy import create_engine, text, event
from sqlalchemy.engine import Engine, Row
from ..domain.models import ConnectionHealth, HealthStatus
from ..exceptions import CatalogError, TableCensusException

logger = logging.getLogger(__name__)

class SQLAlchemyConnector:
    """
    Generic SQLAlchemy Connector. Specialized for the Hive catalog and for
    the snapshot store; read-only unless a subclass opts out.
    """
    read_only: bool = True
    error_class: Type[TableCensusException] = CatalogError

    def __init__(self, connection_string: str, alias: str = "unknown",
                 engine_options: Optional[Dict[str, Any]] = None):
        self.connection_string = connection_string
        self.alias = alias
        self.engine_options = dict(engine_options or {})
        self._engine: Optional[Engine] = None

    @staticmethod
    def _enforce_read_only_listener(conn, cursor, statement, parameters, context, executemany):
        """
        Event Hook (Interceptor).
        Blocks any SQL that doesn't start with a whitelist keyword.
        """
        sql = statement.strip().upper()

        # Whitelist: Only allow safe starting keywords
        allowed_starts = (
            "SELECT",
            "WITH",
            "EXPLAIN",
            "DESCRIBE",
            "SHOW",
            "SET",  # Needed for session configuration
        )

        if not any(sql.startswith(keyword) for keyword in allowed_starts):
            raise PermissionError(
                f"SAFETY BLOCK: Operation blocked! Only read-only queries are allowed. "
                f"Attempted: {sql[:50]}..."
            )

    @property
    def engine(self) -> Engine:
        self.connect()
        return self._engine

    def connect(self) -> None:
        if not self._engine:
            try:
                self._engine = create_engine(self.connection_string, **self.engine_options)
            except Exception as e:
                raise self.error_class(f"Failed to create engine for {self.alias}: {e}") from e

            if self.read_only:
                event.listen(self._engine, "before_cursor_execute", self._enforce_read_only_listener)

    def close(self) -> None:
        if self._engine:
            self._engine.dispose()
            self._engine = None

    def check_health(self) -> ConnectionHealth:
        start_time = time.time()
        status = HealthStatus.FAILED
        error_msg = None

        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
                status = HealthStatus.SUCCESS
        except Exception as e:
            error_msg = str(e)
            status = HealthStatus.FAILED

        latency = (time.time() - start_time) * 1000  # ms

        if latency > 5000 and status == HealthStatus.SUCCESS:
            status = HealthStatus.TIMEOUT

        return ConnectionHealth(
            service=self.alias,
            status=status,
            latency_ms=round(latency, 2),
            error_message=error_msg
        )

    def _query(self, sql: str) -> List[Row]:
        try:
            with self.engine.connect() as conn:
                return list(conn.execute(text(sql)))
        except (PermissionError, TableCensusException):
            raise
        except Exception as e:
            # Driver transport errors (thrift, sockets) are not wrapped by SQLAlchemy
            raise self.error_class(f"Query failed on {self.alias} ({sql}): {e}") from e
