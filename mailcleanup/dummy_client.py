from typing import Any, Dict, Iterable, List, Optional


class DummyClient:
    """Dummy Gmail client for testing and offline runs"""

    def __init__(self, estimates: Optional[Dict[str, int]] = None, messages_total: Optional[int] = 12480,
                 failing_queries: Iterable[str] = (), connect_error: Optional[str] = None):
        """
        Args:
            estimates: Canned resultSizeEstimate per query (unknown queries estimate 0)
            messages_total: Reported profile total, or None to make profile lookup fail
            failing_queries: Queries whose search raises RuntimeError
            connect_error: If set, connect() raises ConnectionError with this message
        """
        self.estimates = dict(estimates or {})
        self._messages_total = messages_total
        self.failing_queries = set(failing_queries)
        self.connect_error = connect_error
        self.connected = False
        self.searched: List[str] = []  # Queries in the order they were issued

    def connect(self) -> None:
        if self.connect_error:
            raise ConnectionError(f"DummyClient: {self.connect_error}")
        self.connected = True

    def disconnect(self) -> None:
        self.connected = False

    def get_profile(self) -> Dict[str, Any]:
        if not self.connected:
            self.connect()
        if self._messages_total is None:
            raise ConnectionError("DummyClient: profile lookup unavailable")
        return {
            "emailAddress": "someone@example.com",
            "messagesTotal": self._messages_total,
            "threadsTotal": self._messages_total,
        }

    def messages_total(self) -> int:
        return int(self.get_profile()["messagesTotal"])

    def search_estimate(self, query: str) -> int:
        """Return the canned estimate for query, recording the call"""
        if not self.connected:
            self.connect()
        self.searched.append(query)
        if query in self.failing_queries:
            raise RuntimeError(f"DummyClient: search failed for '{query}'")
        return self.estimates.get(query, 0)

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
