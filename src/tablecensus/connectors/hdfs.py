from typing import Optional
import time
import requests
from hdfs import InsecureClient
from hdfs.util import HdfsError
from .hadoop_conf import load_hadoop_conf, namenode_urls
from ..config import FilesystemConfig
from ..domain.models import ConnectionHealth, HealthStatus
from ..exceptions import FilesystemError

class HdfsConnector:
    """
    Filesystem session over WebHDFS.
    Multiple NameNode URLs are joined with ';' so the client fails over
    between HA NameNodes on its own.
    """
    def __init__(self, url: str, user: Optional[str] = None, timeout: float = 30.0):
        self.url = url
        self.user = user
        self.timeout = timeout
        self._client: Optional[InsecureClient] = None

    @classmethod
    def from_config(cls, config: FilesystemConfig) -> "HdfsConnector":
        if config.url:
            url = config.url
        elif config.config_dir:
            url = ";".join(namenode_urls(load_hadoop_conf(config.config_dir)))
        else:
            raise FilesystemError("Either filesystem.url or filesystem.config_dir must be set")
        return cls(url, user=config.username, timeout=config.timeout)

    @property
    def client(self) -> InsecureClient:
        if self._client is None:
            self._client = InsecureClient(self.url, user=self.user, timeout=self.timeout)
        return self._client

    def content_size(self, path: str) -> int:
        try:
            summary = self.client.content(path)
        except (HdfsError, requests.exceptions.RequestException) as e:
            raise FilesystemError(f"Failed to get content summary of {path}: {e}") from e
        try:
            return int(summary["length"])
        except (KeyError, TypeError, ValueError) as e:
            raise FilesystemError(f"Malformed content summary for {path}: {summary!r}") from e

    def check_health(self) -> ConnectionHealth:
        start_time = time.time()
        status = HealthStatus.FAILED
        error_msg = None

        try:
            self.client.status("/")
            status = HealthStatus.SUCCESS
        except (HdfsError, requests.exceptions.RequestException) as e:
            error_msg = str(e)

        latency = (time.time() - start_time) * 1000  # ms
        return ConnectionHealth(
            service="hdfs",
            status=status,
            latency_ms=round(latency, 2),
            error_message=error_msg
        )

    def close(self) -> None:
        self._client = None
