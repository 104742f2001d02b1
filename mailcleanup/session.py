"""
Cleanup session: the single owner of selection state, the profile count,
the current analysis snapshot and the current manual-action log.

Each of these is replaced wholesale, never edited in place, so anything
holding a reference to an old value keeps seeing a consistent object.
"""

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterator, List, Optional, Tuple, Union

from .action_log import ManualActionRecord, build_log
from .analysis import AnalysisAggregator, ProgressCallback
from .categories import DEFAULT_TIME_RANGE, get_category, validate_time_range
from .composer import ComposedQuery, compose
from .config import CleanupConfig
from .estimate import EstimateClient
from .export import export_json, save_export
from .snapshot import AnalysisSnapshot

PROFILE_UNAVAILABLE = "Unable to connect to Gmail"


class AnalysisInProgressError(RuntimeError):
    """Raised when an analysis is requested while another one is running"""


@dataclass(frozen=True)
class SelectionState:
    selected_ids: FrozenSet[str] = field(default_factory=frozenset)
    time_range: Union[int, str] = DEFAULT_TIME_RANGE

    def __post_init__(self):
        for category_id in self.selected_ids:
            get_category(category_id)
        validate_time_range(self.time_range)

    def toggle(self, category_id: str) -> "SelectionState":
        get_category(category_id)
        return replace(self, selected_ids=self.selected_ids ^ {category_id})

    def with_time_range(self, value) -> "SelectionState":
        return replace(self, time_range=validate_time_range(value))


class CleanupSession:
    """
    Orchestrates a cleanup session against one mail client.

    Usage:
        session = CleanupSession(GmailClient("credentials.json"))
        session.refresh_profile()
        session.select("promotions", "social")
        snapshot = session.run_analysis()
        for record in session.show_instructions():
            ...
    """

    def __init__(self, client, config: Optional[CleanupConfig] = None, verbose: Optional[bool] = None):
        self.client = client
        self.config = config or CleanupConfig()
        self.verbose = self.config.verbose if verbose is None else verbose
        self.estimator = EstimateClient(client, verbose=self.verbose)
        self.aggregator = AnalysisAggregator(self.estimator, average_kb=self.config.average_message_kb,
                                             verbose=self.verbose)
        self.selection = SelectionState(time_range=validate_time_range(self.config.default_time_range))
        self.total_messages: Optional[Union[int, str]] = None
        self.snapshot: Optional[AnalysisSnapshot] = None
        self.action_log: Tuple[ManualActionRecord, ...] = ()
        self._busy = False
        self._log_token = 0

    # Selection

    def toggle_category(self, category_id: str) -> SelectionState:
        self.selection = self.selection.toggle(category_id)
        return self.selection

    def select(self, *category_ids: str) -> SelectionState:
        for category_id in category_ids:
            get_category(category_id)
        self.selection = replace(self.selection, selected_ids=self.selection.selected_ids | set(category_ids))
        return self.selection

    def clear_selection(self) -> SelectionState:
        self.selection = replace(self.selection, selected_ids=frozenset())
        return self.selection

    def set_time_range(self, value) -> SelectionState:
        self.selection = self.selection.with_time_range(value)
        return self.selection

    def composed_queries(self) -> List[ComposedQuery]:
        return compose(self.selection.selected_ids, self.selection.time_range)

    # Profile

    def refresh_profile(self) -> Union[int, str]:
        """Look up the account's total message count; never raises"""
        try:
            self.total_messages = self.client.messages_total()
        except Exception as e:
            if self.verbose:
                print(f"CleanupSession: Error loading Gmail profile: {e}")
            self.total_messages = PROFILE_UNAVAILABLE
        return self.total_messages

    # Analysis

    @property
    def busy(self) -> bool:
        return self._busy

    def run_analysis(self, on_progress: Optional[ProgressCallback] = None) -> AnalysisSnapshot:
        """
        Analyze the current selection and replace the current snapshot.

        Raises:
            ValueError: nothing is selected
            AnalysisInProgressError: another analysis is still running
        """
        if self._busy:
            raise AnalysisInProgressError("An analysis is already running")
        queries = self.composed_queries()
        if not queries:
            raise ValueError("Nothing to analyze: no categories selected")

        self._busy = True
        self._log_token += 1
        self.action_log = ()
        try:
            snapshot = self.aggregator.run_analysis(queries, on_progress=on_progress)
        finally:
            self._busy = False
        self.snapshot = snapshot
        return snapshot

    # Manual instructions

    def show_instructions(self, delay: Optional[float] = None, sleep=None) -> Iterator[ManualActionRecord]:
        """
        Replay the current snapshot as paced ManualActionRecords.

        The session's action_log is reset, then grows by one record per
        emission. A replay stops as soon as a newer replay or analysis run
        has replaced the log, without touching it.
        """
        if self.snapshot is None:
            raise ValueError("No analysis to build instructions from")
        delay = self.config.log_delay_seconds if delay is None else delay
        kwargs = {"sleep": sleep} if sleep is not None else {}
        records = build_log(self.snapshot, delay=delay, **kwargs)
        self._log_token += 1
        token = self._log_token
        self.action_log = ()

        def emit():
            for record in records:
                if token != self._log_token:
                    records.close()
                    return
                self.action_log = self.action_log + (record,)
                yield record

        return emit()

    # Export

    def export_json(self, generated=None) -> str:
        return export_json(self.composed_queries(), self.selection.time_range, self.total_messages, generated)

    def save_export(self, directory: str = ".", generated=None) -> str:
        path = save_export(directory, self.composed_queries(), self.selection.time_range,
                           self.total_messages, generated)
        if self.verbose:
            print(f"CleanupSession: Exported queries to {path}")
        return path
