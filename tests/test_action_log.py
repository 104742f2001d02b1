import pytest
from datetime import datetime
from mailcleanup import AnalysisSnapshot, QueryResult, RiskLevel, build_log, instructions_for

FIXED_NOW = datetime(2024, 12, 20, 12, 0, 0)


def make_snapshot(*counts):
    results = tuple(
        QueryResult(f"Category {i}", f"category:c{i} older_than:30d", RiskLevel.LOW, count)
        for i, count in enumerate(counts)
    )
    total = sum(counts)
    return AnalysisSnapshot(queries=results, total_estimated_count=total,
                            estimated_space_reclaimed_mb=total * 15 / 1024,
                            categories_analyzed=len(results), completed_at=FIXED_NOW)


class TestBuildLog:
    """Test replaying a snapshot as paced manual-action records"""

    def setup_method(self):
        self.sleeps = []

    def test_one_record_per_query_in_order(self):
        snapshot = make_snapshot(5, 0, 12)
        records = list(build_log(snapshot, sleep=self.sleeps.append, clock=lambda: FIXED_NOW))

        assert [r.full_query for r in records] == [q.full_query for q in snapshot.queries]
        assert [r.count_found for r in records] == [5, 0, 12]
        assert all(r.recorded_at == FIXED_NOW for r in records)

    def test_paced_emission(self):
        log = build_log(make_snapshot(3, 4), delay=1.0, sleep=self.sleeps.append)
        assert self.sleeps == []  # lazy: nothing happens until iterated
        next(log)
        assert self.sleeps == [1.0]
        next(log)
        assert self.sleeps == [1.0, 1.0]
        with pytest.raises(StopIteration):
            next(log)

    def test_not_restartable(self):
        log = build_log(make_snapshot(3), sleep=self.sleeps.append)
        assert len(list(log)) == 1
        assert list(log) == []

    def test_cancel(self):
        log = build_log(make_snapshot(1, 2, 3), sleep=self.sleeps.append)
        next(log)
        log.close()
        assert list(log) == []
        assert len(self.sleeps) == 1

    def test_rejects_error_snapshot(self):
        with pytest.raises(ValueError):
            build_log(AnalysisSnapshot.failure())

    def test_rejects_all_zero_snapshot(self):
        with pytest.raises(ValueError):
            build_log(make_snapshot(0, 0))

    def test_instructions(self):
        record = next(build_log(make_snapshot(9), sleep=self.sleeps.append))
        assert record.instructions == instructions_for(record.full_query)
        assert len(record.instructions) == 5
        assert record.instructions[0] == "Copy this query: category:c0 older_than:30d"
