from datetime import date
from typing import Sequence
import logging
import pandas as pd
from sqlalchemy import BigInteger, Column, Date, Index, Integer, MetaData, String, Table, inspect
from sqlalchemy.exc import SQLAlchemyError
from ..connectors.mysql import MySQLConnector
from ..domain.models import CatalogEntry
from ..exceptions import PersistenceError

logger = logging.getLogger(__name__)

SNAPSHOT_COLUMNS = ["db", "table", "location", "size", "desc", "date"]
DESC_MAX_LENGTH = 4096

def snapshot_table(name: str, metadata: MetaData) -> Table:
    """
    One row per table per run. `size` is NULL when the location was not
    measured and -1 when it could not be determined (`desc` says why).
    """
    return Table(
        name,
        metadata,
        Column("id", BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True),
        Column("db", String(128), nullable=False),
        Column("table", String(128), nullable=False),
        Column("location", String(4000), nullable=False, default=""),
        Column("size", BigInteger, nullable=True),
        Column("desc", String(DESC_MAX_LENGTH), nullable=False, default=""),
        Column("date", Date),
        Index(f"ix_{name}_record", "db", "table", "date"),
    )

def to_frame(entries: Sequence[CatalogEntry]) -> pd.DataFrame:
    rows = [
        {
            "db": e.database,
            "table": e.table,
            "location": e.location,
            "size": e.size_bytes,
            "desc": e.description[:DESC_MAX_LENGTH],
            "date": e.captured_on,
        }
        for e in entries
    ]
    frame = pd.DataFrame(rows, columns=SNAPSHOT_COLUMNS)
    # Keep missing sizes as NULL instead of float NaN
    frame["size"] = frame["size"].astype("Int64")
    return frame

class SnapshotWriter:
    """Appends a run's entries to the snapshot table in one transaction."""

    def __init__(self, connector: MySQLConnector, table_name: str = "hive"):
        self.connector = connector
        self.table_name = table_name
        self._metadata = MetaData()
        self.table = snapshot_table(table_name, self._metadata)

    def write(self, entries: Sequence[CatalogEntry], captured_on: date) -> int:
        if not entries:
            logger.info("No entries to write for %s", captured_on.isoformat())
            return 0

        stamped = [e.model_copy(update={"captured_on": captured_on}) for e in entries]
        frame = to_frame(stamped)
        try:
            with self.connector.engine.begin() as conn:
                self._metadata.create_all(conn, checkfirst=True)
                self._check_size_nullable(conn, frame)
                frame.to_sql(self.table_name, conn, if_exists="append", index=False)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to write snapshot to {self.table_name}: {e}") from e

        logger.info("Wrote %d rows to %s for %s", len(frame), self.table_name, captured_on.isoformat())
        return len(frame)

    def _check_size_nullable(self, conn, frame: pd.DataFrame) -> None:
        """
        Tables created before unmeasured sizes were stored as NULL declare
        `size` NOT NULL; strict MySQL would reject the whole batch.
        """
        if not frame["size"].isna().any():
            return
        columns = {c["name"]: c for c in inspect(conn).get_columns(self.table_name)}
        size = columns.get("size")
        if size is not None and not size.get("nullable", True):
            raise PersistenceError(
                f"Column {self.table_name}.size is NOT NULL but this run has tables "
                f"outside HDFS with no measured size; run "
                f"`ALTER TABLE {self.table_name} MODIFY size BIGINT NULL` first"
            )
