from typing import List, Protocol, Sequence, runtime_checkable
from .models import ConnectionHealth

@runtime_checkable
class CatalogSession(Protocol):
    """Metastore-backed SQL engine that owns database/table definitions."""

    def list_databases(self) -> List[str]: ...

    def list_tables(self, database: str) -> List[str]: ...

    def describe_table(self, database: str, table: str) -> List[str]:
        """Schema-definition text of `database.table`, one line per element."""
        ...

    def check_health(self) -> ConnectionHealth: ...

@runtime_checkable
class FilesystemSession(Protocol):
    def content_size(self, path: str) -> int:
        """Cumulative bytes stored under `path`."""
        ...

    def check_health(self) -> ConnectionHealth: ...

class SnapshotStore(Protocol):
    def write(self, entries: Sequence, captured_on) -> int: ...
