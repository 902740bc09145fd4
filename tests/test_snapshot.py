from datetime import date
import pytest
from sqlalchemy import text
from tablecensus.connectors.mysql import MySQLConnector
from tablecensus.domain.models import CatalogEntry
from tablecensus.exceptions import PersistenceError
from tablecensus.persistence.snapshot import SnapshotWriter

RUN_DATE = date(2026, 10, 19)

@pytest.fixture
def connector(tmp_path):
    connector = MySQLConnector(f"sqlite:///{tmp_path / 'census.db'}", "test_store")
    yield connector
    connector.close()

def _entries():
    return [
        CatalogEntry(database="ods", table="t1", location="hdfs://ns1/w/ods.db/t1", size_bytes=1024),
        CatalogEntry.failure("ods", "t2", "Table not found ods.t2"),
        CatalogEntry(database="ods", table="ext", location="s3a://bucket/ext"),
    ]

def _rows(connector, table="hive"):
    with connector.engine.connect() as conn:
        return conn.execute(
            text(f'SELECT db, "table", location, size, "desc", date FROM {table} ORDER BY id')
        ).all()

def test_write_appends_one_row_per_entry(connector):
    written = SnapshotWriter(connector).write(_entries(), RUN_DATE)

    assert written == 3
    rows = _rows(connector)
    assert [(r[0], r[1], r[2], r[3], r[4]) for r in rows] == [
        ("ods", "t1", "hdfs://ns1/w/ods.db/t1", 1024, ""),
        ("ods", "t2", "", -1, "Table not found ods.t2"),
        ("ods", "ext", "s3a://bucket/ext", None, ""),
    ]
    assert {str(r[5]) for r in rows} == {"2026-10-19"}

def test_successive_runs_append(connector):
    writer = SnapshotWriter(connector)
    writer.write(_entries(), RUN_DATE)
    writer.write(_entries()[:1], date(2026, 10, 20))

    rows = _rows(connector)
    assert len(rows) == 4
    assert str(rows[-1][5]) == "2026-10-20"

def test_custom_table_name(connector):
    SnapshotWriter(connector, table_name="table_sizes").write(_entries(), RUN_DATE)
    assert len(_rows(connector, "table_sizes")) == 3

def test_empty_run_writes_nothing(connector):
    assert SnapshotWriter(connector).write([], RUN_DATE) == 0

def test_write_failure_raises_persistence_error(tmp_path):
    connector = MySQLConnector(f"sqlite:///{tmp_path / 'missing' / 'census.db'}", "broken")

    with pytest.raises(PersistenceError):
        SnapshotWriter(connector).write(_entries(), RUN_DATE)

def _legacy_table(connector):
    # Layout of snapshot tables created before unmeasured sizes were NULL
    with connector.engine.begin() as conn:
        conn.execute(text(
            'CREATE TABLE hive (id INTEGER PRIMARY KEY, db VARCHAR(128) NOT NULL, '
            '"table" VARCHAR(128) NOT NULL, location VARCHAR(4000) NOT NULL DEFAULT \'\', '
            'size BIGINT NOT NULL DEFAULT -1, "desc" VARCHAR(4096) NOT NULL DEFAULT \'\', date DATE)'
        ))

def test_not_null_size_column_is_reported_before_writing(connector):
    _legacy_table(connector)

    with pytest.raises(PersistenceError, match="ALTER TABLE hive"):
        SnapshotWriter(connector).write(_entries(), RUN_DATE)
    assert _rows(connector) == []

def test_not_null_size_column_accepts_measured_runs(connector):
    _legacy_table(connector)

    assert SnapshotWriter(connector).write(_entries()[:2], RUN_DATE) == 2
