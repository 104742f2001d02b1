"""
Per-query count estimation.

Wraps a client's search_estimate() so that a failing query resolves to a
zero count instead of aborting the whole analysis run.
"""

from typing import List, Tuple

from result import Err, Ok, Result


def _normalize_estimate(value) -> int:
    """Coerce a resultSizeEstimate value to a non-negative int"""
    if value is None:
        return 0
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"Invalid resultSizeEstimate {value!r}")
    try:
        count = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid resultSizeEstimate {value!r}") from None
    if count < 0:
        raise ValueError(f"Invalid resultSizeEstimate {value!r}")
    return count


class EstimateClient:
    """Single-attempt count estimates with fault isolation"""

    def __init__(self, client, verbose: bool = True):
        """
        Args:
            client: Any object with connect() and search_estimate(query)
                    (GmailClient, DummyClient)
            verbose: Whether to print failures as they happen

        failures holds (query, reason) pairs for the current run only; open()
        starts a new run and clears it.
        """
        self.client = client
        self.verbose = verbose
        self.failures: List[Tuple[str, str]] = []

    def open(self) -> None:
        """Start a run: clear failures and make sure the client is connected. Errors propagate."""
        self.failures = []
        if not getattr(self.client, "connected", False):
            self.client.connect()

    def estimate_outcome(self, query: str) -> Result[int, str]:
        """Estimate matches for query as Ok(count) or Err(reason)"""
        try:
            return Ok(_normalize_estimate(self.client.search_estimate(query)))
        except Exception as e:
            reason = f"{type(e).__name__}: {e}"
            self.failures.append((query, reason))
            if self.verbose:
                print(f"EstimateClient: Error searching Gmail for '{query}': {reason}")
            return Err(reason)

    def estimate(self, query: str) -> int:
        """Estimate matches for query; failures resolve to 0"""
        outcome = self.estimate_outcome(query)
        if isinstance(outcome, Ok):
            return outcome.ok_value
        return 0
