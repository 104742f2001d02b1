"""
Analysis result types.

A snapshot is created once at the end of an analysis run and never mutated;
the next run replaces it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

from .categories import RiskLevel

# Assumed average message size used for the space estimate
AVERAGE_MESSAGE_KB = 15

STATUS_OK = "ok"
STATUS_FAILED = "failed"

ANALYSIS_FAILED_MESSAGE = "Failed to analyze emails. Please check Gmail connection."


def estimate_space_mb(total: int, average_kb: float = AVERAGE_MESSAGE_KB) -> float:
    """Space reclaimed in MB for total messages at average_kb each"""
    return (total * average_kb) / 1024


def format_space_mb(mb: float) -> str:
    """One decimal place, Python's round-half-even formatting (14.6484 -> '14.6')"""
    return format(mb, ".1f")


@dataclass(frozen=True)
class QueryResult:
    category_name: str
    full_query: str
    risk: RiskLevel
    estimated_count: int
    status: str = STATUS_OK
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.status == STATUS_FAILED


@dataclass(frozen=True)
class AnalysisSnapshot:
    """Outcome of one analysis run: wholly successful or wholly an error"""
    queries: Tuple[QueryResult, ...] = ()
    total_estimated_count: int = 0
    estimated_space_reclaimed_mb: float = 0.0
    categories_analyzed: int = 0
    completed_at: datetime = field(default_factory=datetime.now)
    error: Optional[str] = None
    run_id: int = 0

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def failed_queries(self) -> Tuple[QueryResult, ...]:
        """Queries whose estimate could not be determined (counted as 0)"""
        return tuple(q for q in self.queries if q.failed)

    @property
    def actionable(self) -> bool:
        """True when there is something for the user to clean up"""
        return not self.is_error and self.total_estimated_count > 0

    @classmethod
    def failure(cls, message: str = ANALYSIS_FAILED_MESSAGE, run_id: int = 0,
                completed_at: Optional[datetime] = None) -> "AnalysisSnapshot":
        """Build an error snapshot with all counts zeroed"""
        return cls(
            queries=(),
            total_estimated_count=0,
            estimated_space_reclaimed_mb=0.0,
            categories_analyzed=0,
            completed_at=completed_at or datetime.now(),
            error=message,
            run_id=run_id,
        )
