from datetime import date
from typing import List, Optional
import logging
from ..config import AppConfig
from ..connectors.factory import get_catalog_connector, get_filesystem_connector
from ..domain.interfaces import CatalogSession, FilesystemSession, SnapshotStore
from ..domain.models import CatalogEntry
from ..exceptions import CatalogError, FatalError
from .retry import RetryPolicy
from .walker import CatalogWalker

logger = logging.getLogger(__name__)

def run_audit(config: AppConfig,
              catalog: Optional[CatalogSession] = None,
              filesystem: Optional[FilesystemSession] = None,
              writer: Optional[SnapshotStore] = None,
              today: Optional[date] = None) -> List[CatalogEntry]:
    """
    One full census run.

    Sessions not passed in are built from `config` and closed afterwards.
    Every entry carries the same capture date. When a writer is given the
    entries are persisted once, after the whole walk has finished, so a
    FatalError leaves nothing behind.
    """
    captured_on = today or date.today()
    owned = []
    if catalog is None:
        try:
            catalog = get_catalog_connector(config)
        except CatalogError as e:
            raise FatalError(f"Failed to open catalog session: {e}") from e
        owned.append(catalog)
    try:
        if filesystem is None:
            filesystem = get_filesystem_connector(config)
            owned.append(filesystem)
        walker = CatalogWalker.from_config(
            catalog,
            filesystem,
            config.collection,
            retry=RetryPolicy.from_config(config.retry),
        )
        entries = walker.walk(captured_on)
    finally:
        for session in owned:
            session.close()

    logger.info("Census of %s finished: %d tables", captured_on.isoformat(), len(entries))
    if writer is not None:
        writer.write(entries, captured_on)
    return entries
