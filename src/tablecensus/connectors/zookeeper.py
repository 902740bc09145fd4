"""HiveServer2 service discovery through ZooKeeper.

Each live HiveServer2 registers an ephemeral znode under the discovery
namespace, named like
``serverUri=hs2-1:10000;version=3.1.2;sequence=0000000007``.
"""
from typing import Callable, List, Optional, Tuple
import logging
import random
from kazoo.client import KazooClient
from kazoo.exceptions import KazooException
from kazoo.handlers.threading import KazooTimeoutError
from ..exceptions import CatalogError

logger = logging.getLogger(__name__)

def parse_server_uri(znode: str) -> Optional[Tuple[str, int]]:
    for part in znode.split(";"):
        key, _, value = part.partition("=")
        if key != "serverUri":
            continue
        host, _, port = value.rpartition(":")
        if host and port.isdigit():
            return host, int(port)
    return None

def discover_hiveserver2(quorum: str, namespace: str = "hiveserver2",
                         timeout: float = 10.0,
                         client_factory: Callable[..., KazooClient] = KazooClient,
                         choose: Callable[[List[Tuple[str, int]]], Tuple[str, int]] = random.choice,
                         ) -> Tuple[str, int]:
    """host and port of one live HiveServer2 registered under `namespace`."""
    client = client_factory(hosts=quorum, timeout=timeout)
    try:
        client.start(timeout=timeout)
        znodes = client.get_children("/" + namespace.strip("/"))
    except (KazooException, KazooTimeoutError) as e:
        raise CatalogError(f"ZooKeeper discovery on {quorum} failed: {e}") from e
    finally:
        client.stop()
        client.close()

    servers = [uri for uri in (parse_server_uri(z) for z in znodes) if uri]
    if not servers:
        raise CatalogError(f"No HiveServer2 registered under /{namespace} on {quorum}")
    host, port = choose(servers)
    logger.info("Discovered HiveServer2 %s:%d via ZooKeeper", host, port)
    return host, port
