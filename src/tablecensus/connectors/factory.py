from ..config import AppConfig
from .hive import HiveConnector
from .hdfs import HdfsConnector
from .mysql import MySQLConnector

def get_catalog_connector(config: AppConfig) -> HiveConnector:
    """
    Catalog session for the run; its pool holds one connection per
    concurrent catalog call.
    """
    collection = config.collection
    pool_size = collection.catalog_concurrency or collection.max_workers
    return HiveConnector.from_config(config.catalog, pool_size=pool_size)

def get_filesystem_connector(config: AppConfig) -> HdfsConnector:
    return HdfsConnector.from_config(config.filesystem)

def get_snapshot_connector(config: AppConfig) -> MySQLConnector:
    persistence = config.require_persistence()
    return MySQLConnector(persistence.connection_string, "snapshot-store")
