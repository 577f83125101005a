"""
Outcome types for schema migration steps.

A migration step never raises for execution failures; it reports them
through a MigrationResult so the caller decides whether a partial failure
is only logged or surfaced.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class MigrationStatus(Enum):
    APPLIED = "applied"
    ALREADY_APPLIED = "already_applied"
    PARTIALLY_FAILED = "partially_failed"
    NOT_ELIGIBLE = "not_eligible"


@dataclass
class MigrationResult:
    """Result of a single migration step."""

    status: MigrationStatus
    altered_tables: List[str] = field(default_factory=list)
    failed_table: Optional[str] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status is not MigrationStatus.PARTIALLY_FAILED

    def to_dict(self) -> dict:
        """Structured form, suitable for JSON output."""
        data = {
            "status": self.status.value,
            "altered_tables": list(self.altered_tables),
        }
        if self.failed_table:
            data["failed_table"] = self.failed_table
        if self.error:
            data["error"] = self.error
        return data
