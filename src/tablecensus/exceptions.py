class TableCensusException(Exception):
    """Base Exception Class"""
    pass

class ConfigurationError(TableCensusException):
    """Configuration Error"""
    pass

class CatalogError(TableCensusException):
    """Catalog Failure (unreachable, query rejected, malformed response)"""
    pass

class LocationNotFound(TableCensusException):
    """No storage location in the table definition"""
    pass

class FilesystemError(TableCensusException):
    """Filesystem Failure (unreachable, path missing, permission denied)"""
    pass

class PersistenceError(TableCensusException):
    """Snapshot write failure"""
    pass

class FatalError(TableCensusException):
    """Database or table enumeration failed, the run is aborted"""
    pass
