from typing import Iterable
from ..exceptions import LocationNotFound

LOCATION_MARKER = "LOCATION"

def parse_location(lines: Iterable[str]) -> str:
    """
    Extracts the storage path from `SHOW CREATE TABLE` output.

    The path sits on the line after a bare ``LOCATION`` marker, quoted:

        LOCATION
          'hdfs://ns1/warehouse/ods.db/orders'
    """
    it = iter(lines)
    for line in it:
        if line.strip() != LOCATION_MARKER:
            continue
        path_line = next(it, None)
        if path_line is None:
            raise LocationNotFound("LOCATION marker is not followed by a path")
        parts = path_line.split("'")
        if len(parts) < 3:
            raise LocationNotFound(f"Malformed location line: {path_line.strip()!r}")
        if not parts[1]:
            raise LocationNotFound("Empty location")
        return parts[1]

    raise LocationNotFound("have no location")
