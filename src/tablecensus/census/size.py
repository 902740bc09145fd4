from typing import Optional
from .classifier import HDFS_SCHEME
from .retry import RetryPolicy, NO_RETRY
from ..domain.interfaces import FilesystemSession
from ..exceptions import FilesystemError

def hdfs_path(location: str) -> str:
    """
    Filesystem path of an hdfs:// location, without scheme and nameservice.

    hdfs://clusterA/warehouse/db.db/t -> /warehouse/db.db/t/
    """
    _, sep, rest = location.partition(HDFS_SCHEME)
    if not sep:
        raise FilesystemError(f"Not an HDFS location: {location}")
    # TODO: keep the authority segment to route federated clusters to their own client
    _, slash, path = rest.partition("/")
    if not slash or not path:
        raise FilesystemError(f"No path component in location: {location}")
    return "/" + path + "/"

class SizeResolver:
    """Measures the bytes stored under an HDFS table location."""

    def __init__(self, filesystem: FilesystemSession, retry: Optional[RetryPolicy] = None):
        self.filesystem = filesystem
        self.retry = retry or NO_RETRY

    def resolve_size(self, location: str) -> int:
        path = hdfs_path(location)
        return self.retry.call(self.filesystem.content_size, path)
