from .base import SQLAlchemyConnector
from ..exceptions import PersistenceError

class MySQLConnector(SQLAlchemyConnector):
    """
    Snapshot store connection (mysql+pymysql:// in production).
    Writable, so the read-only guard is not installed.
    """
    read_only = False
    error_class = PersistenceError
