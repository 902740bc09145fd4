from datetime import date
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

SIZE_UNKNOWN = -1

class HealthStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    TIMEOUT = "timeout"

class ConnectionHealth(BaseModel):
    service: str
    status: HealthStatus
    latency_ms: Optional[float] = None
    error_message: Optional[str] = None

class PathClass(str, Enum):
    MEASURABLE = "measurable"
    UNMEASURABLE = "unmeasurable"

class CatalogEntry(BaseModel):
    """
    Audit result for a single table.

    size_bytes is -1 when the location or its size could not be determined
    (description then holds the reason), None when the location is not on
    HDFS and was not measured, and the cumulative byte count otherwise.
    """
    model_config = ConfigDict(frozen=True)

    database: str = Field(min_length=1)
    table: str = Field(min_length=1)
    location: str = ""
    size_bytes: Optional[int] = Field(default=None, ge=SIZE_UNKNOWN)
    description: str = ""
    captured_on: Optional[date] = None

    @model_validator(mode="after")
    def _sentinel_matches_description(self) -> "CatalogEntry":
        if (self.size_bytes == SIZE_UNKNOWN) != bool(self.description):
            raise ValueError(
                "size_bytes must be -1 exactly when a failure description is set"
            )
        return self

    @classmethod
    def failure(cls, database: str, table: str, reason: str,
                location: str = "", captured_on: Optional[date] = None) -> "CatalogEntry":
        return cls(
            database=database,
            table=table,
            location=location,
            size_bytes=SIZE_UNKNOWN,
            description=reason or "unknown error",
            captured_on=captured_on,
        )

    @property
    def failed(self) -> bool:
        return bool(self.description)

    @property
    def measured(self) -> bool:
        return self.size_bytes is not None and self.size_bytes >= 0

class AuditReport(BaseModel):
    """Run summary"""
    captured_on: date
    total_tables: int
    failed_tables: int
    measured_tables: int
    unmeasured_tables: int
    total_bytes: int

    @classmethod
    def from_entries(cls, entries: List[CatalogEntry], captured_on: date) -> "AuditReport":
        measured = [e for e in entries if e.measured]
        return cls(
            captured_on=captured_on,
            total_tables=len(entries),
            failed_tables=sum(1 for e in entries if e.failed),
            measured_tables=len(measured),
            unmeasured_tables=sum(1 for e in entries if e.size_bytes is None),
            total_bytes=sum(e.size_bytes for e in measured),
        )
