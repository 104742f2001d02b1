import json
import os
import tempfile
import pytest
from datetime import date, datetime, timedelta, timezone
from mailcleanup import ALL_TIME, EXPORT_INSTRUCTIONS, build_export, compose, export_filename, export_json, save_export

GENERATED = datetime(2024, 12, 20, 12, 0, 0, tzinfo=timezone.utc)


class TestExport:
    """Test the exported query document"""

    def test_document_shape(self):
        queries = compose({"bizreach", "social"}, 30)
        document = build_export(queries, 30, total_messages=12480, generated=GENERATED)

        assert list(document) == ["generated", "timeRange", "totalEmailsInAccount", "queries"]
        assert document["generated"] == "2024-12-20T12:00:00.000Z"
        assert document["timeRange"] == "30 days"
        assert document["totalEmailsInAccount"] == 12480
        assert document["queries"][0] == {
            "description": "BizReach Job Notifications",
            "gmailQuery": "from:noreply@bizreach.co.jp OR from:scout@bizreach.co.jp older_than:30d",
            "riskLevel": "low",
            "instructions": list(EXPORT_INSTRUCTIONS),
        }
        assert document["queries"][1]["riskLevel"] == "medium"

    def test_generated_is_utc_milliseconds(self):
        queries = compose({"social"}, 30)
        stamp = datetime(2024, 12, 20, 12, 0, 0, 123456, tzinfo=timezone.utc)
        assert build_export(queries, 30, generated=stamp)["generated"] == "2024-12-20T12:00:00.123Z"

        tokyo = timezone(timedelta(hours=9))
        local = datetime(2024, 12, 20, 21, 0, 0, tzinfo=tokyo)
        assert build_export(queries, 30, generated=local)["generated"] == "2024-12-20T12:00:00.000Z"

    def test_instructions(self):
        assert EXPORT_INSTRUCTIONS == (
            "1. Copy the Gmail query below",
            "2. Paste into Gmail search box",
            "3. Select all results (click checkbox at top)",
            "4. Click 'Select all conversations that match this search'",
            "5. Click Delete button (trash icon)",
        )

    def test_all_time_label_and_placeholder_total(self):
        document = build_export(compose({"promotions"}, ALL_TIME), ALL_TIME,
                                total_messages="Unable to connect to Gmail", generated=GENERATED)
        assert document["timeRange"] == "All time"
        assert document["totalEmailsInAccount"] == "Unable to connect to Gmail"
        assert document["queries"][0]["gmailQuery"] == "category:promotions"

    def test_unknown_total_is_null(self):
        text = export_json(compose({"updates"}, 7), 7, generated=GENERATED)
        assert json.loads(text)["totalEmailsInAccount"] is None

    def test_reproducible(self):
        queries = compose({"noreply", "updates"}, 365)
        first = export_json(queries, 365, 100, GENERATED)
        second = export_json(compose({"updates", "noreply"}, 365), 365, 100, GENERATED)
        assert first == second
        assert first.startswith('{\n  "generated": "2024-12-20T12:00:00.000Z",')

    def test_empty_selection(self):
        with pytest.raises(ValueError):
            build_export([], 30)

    def test_filename(self):
        assert export_filename(date(2024, 12, 20)) == "gmail-cleanup-queries-2024-12-20.json"

    def test_save(self):
        directory = tempfile.mkdtemp()
        path = save_export(directory, compose({"social"}, 90), 90, 5, GENERATED)
        assert os.path.basename(path) == "gmail-cleanup-queries-2024-12-20.json"
        with open(path, encoding="utf-8") as f:
            assert f.read() == export_json(compose({"social"}, 90), 90, 5, GENERATED)
