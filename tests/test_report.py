from datetime import datetime
from rich.console import Console
from mailcleanup import AnalysisSnapshot, QueryResult, RiskLevel
from mailcleanup.action_log import ManualActionRecord
from mailcleanup.report import format_total, render_action_record, render_profile, render_snapshot


def make_console():
    return Console(record=True, width=140, color_system=None)


class TestReport:
    """Test console rendering"""

    def test_format_total(self):
        assert format_total(12480) == "Total emails in account: 12,480"
        assert format_total("Unable to connect to Gmail") == "Total emails in account: Unable to connect to Gmail"
        assert format_total(None) == "Unable to load email count"

    def test_render_profile(self):
        console = make_console()
        render_profile(console, 1234567)
        assert "1,234,567" in console.export_text()

    def test_render_success(self):
        snapshot = AnalysisSnapshot(
            queries=(
                QueryResult("Promotional Emails", "category:promotions older_than:30d", RiskLevel.LOW, 1000),
                QueryResult("System Updates", "category:updates older_than:30d", RiskLevel.MEDIUM, 0,
                            status="failed", error="RuntimeError: boom"),
            ),
            total_estimated_count=1000,
            estimated_space_reclaimed_mb=1000 * 15 / 1024,
            categories_analyzed=2,
            completed_at=datetime(2024, 12, 20, 9, 30, 0),
        )
        console = make_console()
        render_snapshot(console, snapshot)
        text = console.export_text()
        assert "1,000" in text
        assert "14.6 MB" in text
        assert "category:promotions older_than:30d" in text
        assert "09:30:00" in text
        assert "1 queries could not be estimated" in text

    def test_render_error(self):
        console = make_console()
        render_snapshot(console, AnalysisSnapshot.failure())
        text = console.export_text()
        assert "Analysis Error" in text
        assert "Please check Gmail connection" in text

    def test_render_action_record(self):
        record = ManualActionRecord("Social Notifications", "category:social", 2500, datetime(2024, 12, 20))
        console = make_console()
        render_action_record(console, record)
        text = console.export_text()
        assert "Found 2,500 emails to delete" in text
        assert "Copy this query: category:social" in text
        assert "5. Click Delete button" in text
