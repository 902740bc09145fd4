from typing import List
from sqlalchemy.engine import URL, make_url
from .base import SQLAlchemyConnector
from ..config import CatalogConfig
from ..exceptions import CatalogError
from .zookeeper import discover_hiveserver2

def _quote(identifier: str) -> str:
    return "`" + identifier.replace("`", "``") + "`"

class HiveConnector(SQLAlchemyConnector):
    """
    Catalog session over HiveServer2 (PyHive `hive://` dialect).
    Every statement goes through the read-only guard.
    """

    @classmethod
    def from_config(cls, config: CatalogConfig, pool_size: int = 5) -> "HiveConnector":
        if config.zookeeper_quorum:
            host, port = discover_hiveserver2(config.zookeeper_quorum, config.zookeeper_namespace)
            url = URL.create("hive", host=host, port=port, database=config.database)
        else:
            try:
                url = make_url(config.connection_string)
            except Exception as e:
                raise CatalogError(f"Invalid catalog connection string: {e}") from e
        if config.username:
            url = url.set(username=config.username)
        if config.password:
            url = url.set(password=config.password)

        options = {"pool_pre_ping": True}
        if config.auth:
            options["connect_args"] = {"auth": config.auth}
        # One pooled connection per worker thread
        if pool_size > 5:
            options["pool_size"] = pool_size
        return cls(url.render_as_string(hide_password=False), "hive", options)

    def list_databases(self) -> List[str]:
        return [row[0] for row in self._query("SHOW DATABASES")]

    def list_tables(self, database: str) -> List[str]:
        return [row[0] for row in self._query(f"SHOW TABLES IN {_quote(database)}")]

    def describe_table(self, database: str, table: str) -> List[str]:
        rows = self._query(f"SHOW CREATE TABLE {_quote(database)}.{_quote(table)}")
        return [row[0] if row[0] is not None else "" for row in rows]
