"""Reads NameNode addresses out of a Hadoop configuration directory.

Only the handful of keys needed to reach WebHDFS are interpreted:
``fs.defaultFS`` from core-site.xml and the (optionally HA) NameNode HTTP
addresses from hdfs-site.xml.
"""
from pathlib import Path
from typing import Dict, List
from urllib.parse import urlparse
import xml.etree.ElementTree as ET
from ..exceptions import FilesystemError

CONF_FILES = ("core-site.xml", "hdfs-site.xml")
DEFAULT_HTTP_PORT = 9870

def load_hadoop_conf(conf_dir: Path) -> Dict[str, str]:
    """Merge the name/value pairs of core-site.xml and hdfs-site.xml."""
    if not conf_dir.is_dir():
        raise FilesystemError(f"Hadoop config directory not found: {conf_dir}")

    props: Dict[str, str] = {}
    for name in CONF_FILES:
        path = conf_dir / name
        if not path.exists():
            continue
        try:
            root = ET.parse(path).getroot()
        except ET.ParseError as e:
            raise FilesystemError(f"Malformed Hadoop config {path}: {e}") from e
        for prop in root.iter("property"):
            key = (prop.findtext("name") or "").strip()
            if key:
                props[key] = (prop.findtext("value") or "").strip()
    return props

def namenode_urls(props: Dict[str, str]) -> List[str]:
    """WebHDFS base URLs, one per NameNode (several for an HA nameservice)."""
    default_fs = urlparse(props.get("fs.defaultFS", ""))
    if default_fs.scheme != "hdfs" or not default_fs.hostname:
        raise FilesystemError("fs.defaultFS is missing or is not an hdfs:// URI")

    nameservice = default_fs.hostname
    ha_namenodes = props.get(f"dfs.ha.namenodes.{nameservice}")
    if ha_namenodes:
        addresses = []
        for nn in ha_namenodes.split(","):
            key = f"dfs.namenode.http-address.{nameservice}.{nn.strip()}"
            if key not in props:
                raise FilesystemError(f"Missing {key} for HA nameservice {nameservice}")
            addresses.append(props[key])
    else:
        addresses = [
            props.get("dfs.namenode.http-address")
            or f"{default_fs.hostname}:{DEFAULT_HTTP_PORT}"
        ]

    # 0.0.0.0 bind addresses are only meaningful on the NameNode host itself
    urls = []
    for address in addresses:
        if address.startswith("0.0.0.0:"):
            address = f"{default_fs.hostname}:{address.split(':', 1)[1]}"
        urls.append(f"http://{address}")
    return urls
