"""
Reducer classes for folding per-query estimates into an analysis snapshot.

Reducers encapsulate the logic for processing a sequence of query results
and producing a single result.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from .categories import RiskLevel
from .snapshot import AVERAGE_MESSAGE_KB, AnalysisSnapshot, QueryResult, estimate_space_mb


class Reducer(ABC):
    """Base class for query result reducers"""

    @abstractmethod
    def init_value(self):
        """Initialize the reducer's internal state"""
        pass

    def fold(self, result: QueryResult):
        """Fold the next query result into the accumulator with error handling"""
        try:
            self._fold(result)
        except Exception as e:
            self._handle_error(result, e)

    @abstractmethod
    def _fold(self, result: QueryResult):
        """Internal fold method - subclasses implement this"""
        pass

    def _handle_error(self, result: QueryResult, error: Exception):
        """Handle errors during folding - default skips the result with a warning"""
        print(f"Warning: Could not fold '{result.full_query}' in reducer {self.__class__.__name__}: {error}")

    @abstractmethod
    def final(self) -> Any:
        """Return the final result"""
        pass


class SnapshotReducer(Reducer):
    """Accumulate query results into a successful AnalysisSnapshot"""

    def __init__(self, run_id: int = 0, average_kb: float = AVERAGE_MESSAGE_KB, clock=datetime.now):
        self.run_id = run_id
        self.average_kb = average_kb
        self.clock = clock
        self.init_value()

    def init_value(self):
        self.results: List[QueryResult] = []
        self.total = 0

    def _fold(self, result: QueryResult):
        if result.estimated_count < 0:
            raise ValueError(f"Negative estimate {result.estimated_count}")
        self.results.append(result)
        self.total += result.estimated_count

    def _handle_error(self, result: QueryResult, error: Exception):
        # A snapshot must never be partial, so folding errors fail the run
        raise error

    def final(self) -> AnalysisSnapshot:
        return AnalysisSnapshot(
            queries=tuple(self.results),
            total_estimated_count=self.total,
            estimated_space_reclaimed_mb=estimate_space_mb(self.total, self.average_kb),
            categories_analyzed=len(self.results),
            completed_at=self.clock(),
            error=None,
            run_id=self.run_id,
        )


class RiskTally(Reducer):
    """Total estimated messages per risk level"""

    def init_value(self):
        self.totals: Dict[RiskLevel, int] = {}

    def _fold(self, result: QueryResult):
        self.totals[result.risk] = self.totals.get(result.risk, 0) + result.estimated_count

    def final(self) -> Dict[RiskLevel, int]:
        return dict(self.totals)


def reduce_results(reducer: Reducer, results, verbose: bool = False) -> Any:
    """Run a reducer over an iterable of QueryResult and return reducer.final()"""
    reducer.init_value()
    count = 0
    for result in results:
        count += 1
        reducer.fold(result)
    if verbose:
        print(f"Reduction completed. Processed {count} query results.")
    return reducer.final()
