"""
Analysis aggregation.

Runs one count estimate per composed query, strictly in order, and folds the
results into a single AnalysisSnapshot.

State machine: IDLE -> RUNNING -> COMPLETED | FAILED. Every run gets a new,
monotonically increasing run id; a run whose id has been superseded by a
newer run is discarded instead of producing a snapshot.
"""

from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Sequence

from result import Ok

from .composer import ComposedQuery
from .estimate import EstimateClient
from .reducers import SnapshotReducer
from .snapshot import (
    ANALYSIS_FAILED_MESSAGE,
    AVERAGE_MESSAGE_KB,
    STATUS_FAILED,
    AnalysisSnapshot,
    QueryResult,
)


class AnalysisState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class StaleRunError(RuntimeError):
    """Raised when a run's results arrive after a newer run has started"""

    def __init__(self, run_id: int, current_run_id: int):
        super().__init__(f"Analysis run {run_id} was superseded by run {current_run_id}")
        self.run_id = run_id
        self.current_run_id = current_run_id


ProgressCallback = Callable[[int, QueryResult], None]


class AnalysisAggregator:
    """Orchestrates the estimate client over all composed queries of a run"""

    def __init__(self, estimator: EstimateClient, average_kb: float = AVERAGE_MESSAGE_KB,
                 verbose: bool = True, clock: Callable[[], datetime] = datetime.now):
        self.estimator = estimator
        self.average_kb = average_kb
        self.verbose = verbose
        self.clock = clock
        self._state = AnalysisState.IDLE
        self._run_id = 0
        self._last_snapshot: Optional[AnalysisSnapshot] = None

    @property
    def state(self) -> AnalysisState:
        return self._state

    @property
    def run_id(self) -> int:
        """Id of the most recently started run (0 before any run)"""
        return self._run_id

    @property
    def last_snapshot(self) -> Optional[AnalysisSnapshot]:
        return self._last_snapshot

    def _estimate(self, query: ComposedQuery) -> QueryResult:
        outcome = self.estimator.estimate_outcome(query.full_query)
        if isinstance(outcome, Ok):
            return QueryResult(query.category_name, query.full_query, query.risk, outcome.ok_value)
        return QueryResult(query.category_name, query.full_query, query.risk, 0,
                           status=STATUS_FAILED, error=outcome.err_value)

    def _check_current(self, run_id: int) -> None:
        if run_id != self._run_id:
            raise StaleRunError(run_id, self._run_id)

    def _fail(self, run_id: int, error: Exception) -> AnalysisSnapshot:
        if self.verbose:
            print(f"AnalysisAggregator: Analysis failed: {error}")
        snapshot = AnalysisSnapshot.failure(ANALYSIS_FAILED_MESSAGE, run_id=run_id, completed_at=self.clock())
        self._state = AnalysisState.FAILED
        self._last_snapshot = snapshot
        return snapshot

    def run_analysis(self, composed_queries: Sequence[ComposedQuery],
                     on_progress: Optional[ProgressCallback] = None) -> AnalysisSnapshot:
        """
        Estimate every composed query in order and build a snapshot.

        Per-query failures count as 0 and are marked failed on their
        QueryResult; the run still completes. Failures of the run itself
        (client cannot connect, unexpected errors) produce an error snapshot.

        Args:
            composed_queries: Non-empty sequence from compose()
            on_progress: Called as on_progress(index, result) after each query

        Returns:
            The new AnalysisSnapshot (also kept as last_snapshot)

        Raises:
            ValueError: composed_queries is empty; no run is started
            StaleRunError: a newer run started before this one finished
        """
        queries = list(composed_queries)
        if not queries:
            raise ValueError("Nothing to analyze: no categories selected")

        self._run_id += 1
        run_id = self._run_id
        self._state = AnalysisState.RUNNING
        if self.verbose:
            print(f"AnalysisAggregator: Run {run_id} started for {len(queries)} queries")

        try:
            self.estimator.open()
        except Exception as e:
            self._check_current(run_id)
            return self._fail(run_id, e)

        reducer = SnapshotReducer(run_id=run_id, average_kb=self.average_kb, clock=self.clock)
        try:
            for index, query in enumerate(queries):
                result = self._estimate(query)
                self._check_current(run_id)
                reducer.fold(result)
                if on_progress is not None:
                    on_progress(index, result)
                self._check_current(run_id)
            snapshot = reducer.final()
        except StaleRunError:
            if self.verbose:
                print(f"AnalysisAggregator: Discarding results of superseded run {run_id}")
            raise
        except Exception as e:
            self._check_current(run_id)
            return self._fail(run_id, e)

        self._state = AnalysisState.COMPLETED
        self._last_snapshot = snapshot
        if self.verbose:
            print(f"AnalysisAggregator: Run {run_id} completed: {snapshot.total_estimated_count} emails "
                  f"in {snapshot.categories_analyzed} categories")
        return snapshot
