import pytest
from mailcleanup import (
    ALL_TIME, CLEANUP_CATEGORIES, TIME_RANGE_OPTIONS, RiskLevel,
    category_ids, get_category, time_range_label, validate_time_range,
)


class TestCategoryCatalog:
    """Test the fixed catalog of cleanup categories"""

    def test_catalog_order(self):
        assert category_ids() == ["bizreach", "promotions", "social", "updates", "noreply"]

    def test_ids_are_unique(self):
        ids = [c.id for c in CLEANUP_CATEGORIES]
        assert len(ids) == len(set(ids))

    def test_lookup_by_id(self):
        category = get_category("bizreach")
        assert category.base_query == "from:noreply@bizreach.co.jp OR from:scout@bizreach.co.jp"
        assert category.risk is RiskLevel.LOW
        assert get_category("social").risk is RiskLevel.MEDIUM

    def test_unknown_id(self):
        with pytest.raises(KeyError):
            get_category("newsletters")

    def test_categories_are_read_only(self):
        with pytest.raises(Exception):
            CLEANUP_CATEGORIES[0].base_query = "anything"


class TestTimeRanges:
    """Test time range validation and labels"""

    def test_options(self):
        assert [value for value, _ in TIME_RANGE_OPTIONS] == [7, 30, 90, 365, ALL_TIME]
        assert dict(TIME_RANGE_OPTIONS)[90] == "3 months"

    def test_valid_values(self):
        assert validate_time_range(30) == 30
        assert validate_time_range("365") == 365
        assert validate_time_range("all") == ALL_TIME

    @pytest.mark.parametrize("value", [0, -7, "", "forever", "3.5", None, True, 1.5])
    def test_invalid_values(self, value):
        with pytest.raises(ValueError):
            validate_time_range(value)

    def test_labels(self):
        assert time_range_label(ALL_TIME) == "All time"
        assert time_range_label(90) == "90 days"
        assert time_range_label("7") == "7 days"
