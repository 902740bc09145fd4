from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import AbstractSet, List, Optional, Tuple
import logging
import threading
from .blacklist import is_excluded
from .classifier import classify
from .location import parse_location
from .retry import RetryPolicy, NO_RETRY
from .size import SizeResolver
from ..config import CollectionConfig
from ..domain.interfaces import CatalogSession, FilesystemSession
from ..domain.models import CatalogEntry, PathClass
from ..exceptions import CatalogError, FatalError, FilesystemError, LocationNotFound

logger = logging.getLogger(__name__)

WorkItem = Tuple[str, str]

class CatalogWalker:
    """
    Walks databases -> tables -> locations and measures each table.

    Enumeration is sequential and any failure there aborts the run with
    FatalError. Per-table work runs on a bounded thread pool; a failing
    table becomes a failure entry and never stops the walk. The output
    follows the catalog's listing order.
    """
    def __init__(self, catalog: CatalogSession, filesystem: FilesystemSession,
                 blacklist: AbstractSet[str] = frozenset(),
                 retry: Optional[RetryPolicy] = None,
                 max_workers: int = 1,
                 catalog_concurrency: Optional[int] = None,
                 filesystem_concurrency: Optional[int] = None):
        self.catalog = catalog
        self.blacklist = blacklist
        self.retry = retry or NO_RETRY
        self.max_workers = max_workers
        self._catalog_slots = threading.BoundedSemaphore(catalog_concurrency or max_workers)
        self._filesystem_slots = threading.BoundedSemaphore(filesystem_concurrency or max_workers)
        self._sizer = SizeResolver(filesystem, self.retry)

    @classmethod
    def from_config(cls, catalog: CatalogSession, filesystem: FilesystemSession,
                    collection: CollectionConfig, retry: Optional[RetryPolicy] = None) -> "CatalogWalker":
        return cls(
            catalog,
            filesystem,
            blacklist=collection.blacklist,
            retry=retry,
            max_workers=collection.max_workers,
            catalog_concurrency=collection.catalog_concurrency,
            filesystem_concurrency=collection.filesystem_concurrency,
        )

    def enumerate(self) -> List[WorkItem]:
        """All (database, table) pairs outside the blacklist, in listing order."""
        try:
            databases = self.retry.call(self.catalog.list_databases)
        except CatalogError as e:
            raise FatalError(f"Failed to list databases: {e}") from e

        items: List[WorkItem] = []
        for database in databases:
            if is_excluded(database, self.blacklist):
                logger.info("Skipping blacklisted database %s", database)
                continue
            try:
                tables = self.retry.call(self.catalog.list_tables, database)
            except CatalogError as e:
                raise FatalError(f"Failed to list tables of {database}: {e}") from e
            logger.info("Database %s: %d tables", database, len(tables))
            items.extend((database, table) for table in tables)
        return items

    def walk(self, captured_on: date) -> List[CatalogEntry]:
        items = self.enumerate()
        logger.info("Resolving %d tables with %d worker(s)", len(items), self.max_workers)

        if self.max_workers == 1:
            return [self.resolve(db, table, captured_on) for db, table in items]

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(self.resolve, db, table, captured_on) for db, table in items]
            # Collected by submission position, so completion order does not matter
            return [future.result() for future in futures]

    def resolve(self, database: str, table: str, captured_on: Optional[date] = None) -> CatalogEntry:
        """Location and size of one table; never raises for per-table failures."""
        try:
            with self._catalog_slots:
                lines = self.retry.call(self.catalog.describe_table, database, table)
            location = parse_location(lines)
        except (CatalogError, LocationNotFound) as e:
            logger.warning("%s.%s: %s", database, table, e)
            return CatalogEntry.failure(database, table, str(e), captured_on=captured_on)

        if classify(location) is PathClass.UNMEASURABLE:
            logger.debug("%s.%s: %s is not on HDFS, size not measured", database, table, location)
            return CatalogEntry(database=database, table=table, location=location,
                                captured_on=captured_on)

        try:
            with self._filesystem_slots:
                size = self._sizer.resolve_size(location)
        except FilesystemError as e:
            logger.warning("%s.%s: %s", database, table, e)
            return CatalogEntry.failure(database, table, str(e), location=location,
                                        captured_on=captured_on)

        logger.debug("%s.%s: %d bytes at %s", database, table, size, location)
        return CatalogEntry(database=database, table=table, location=location,
                            size_bytes=size, captured_on=captured_on)
