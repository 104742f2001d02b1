"""
Cleanup categories and time range options.

Each category is a named Gmail search rule for one class of bulk or automated
mail. The catalog is fixed at import time and shared read-only.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple, Union


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Category:
    """A cleanup rule: a Gmail filter expression plus display text"""
    id: str
    name: str
    description: str
    base_query: str
    risk: RiskLevel


CLEANUP_CATEGORIES: Tuple[Category, ...] = (
    Category(
        id="bizreach",
        name="BizReach Job Notifications",
        description="Daily job recruitment emails",
        base_query="from:noreply@bizreach.co.jp OR from:scout@bizreach.co.jp",
        risk=RiskLevel.LOW,
    ),
    Category(
        id="promotions",
        name="Promotional Emails",
        description="Marketing emails and newsletters",
        base_query="category:promotions",
        risk=RiskLevel.LOW,
    ),
    Category(
        id="social",
        name="Social Notifications",
        description="Social media notifications",
        base_query="category:social",
        risk=RiskLevel.MEDIUM,
    ),
    Category(
        id="updates",
        name="System Updates",
        description="Service notifications and updates",
        base_query="category:updates",
        risk=RiskLevel.MEDIUM,
    ),
    Category(
        id="noreply",
        name="No-Reply Emails",
        description="Automated system emails",
        base_query="from:noreply OR from:no-reply",
        risk=RiskLevel.MEDIUM,
    ),
)

_BY_ID: Dict[str, Category] = {category.id: category for category in CLEANUP_CATEGORIES}


# Time range: a positive number of days, or ALL_TIME for no age constraint
ALL_TIME = "all"
TimeRange = Union[int, str]

DEFAULT_TIME_RANGE = 30

TIME_RANGE_OPTIONS: Tuple[Tuple[TimeRange, str], ...] = (
    (7, "7 days"),
    (30, "30 days"),
    (90, "3 months"),
    (365, "1 year"),
    (ALL_TIME, "All time"),
)


def get_category(category_id: str) -> Category:
    """Look up a category by id (raises KeyError for unknown ids)"""
    try:
        return _BY_ID[category_id]
    except KeyError:
        raise KeyError(f"Unknown cleanup category '{category_id}'") from None


def category_ids() -> List[str]:
    """All category ids in catalog order"""
    return [category.id for category in CLEANUP_CATEGORIES]


def validate_time_range(value) -> TimeRange:
    """
    Normalize a time range value.

    Accepts a positive int, a numeric string such as "30", or ALL_TIME.
    Anything else raises ValueError.
    """
    if value == ALL_TIME:
        return ALL_TIME
    if isinstance(value, bool):
        raise ValueError(f"Invalid time range {value!r}")
    if isinstance(value, str):
        if not value.strip().isdigit():
            raise ValueError(f"Invalid time range {value!r}. Expected a number of days or '{ALL_TIME}'.")
        value = int(value)
    if not isinstance(value, int) or value <= 0:
        raise ValueError(f"Invalid time range {value!r}. Expected a positive number of days or '{ALL_TIME}'.")
    return value


def time_range_label(value) -> str:
    """Label used in exports: 'All time' or '<N> days'"""
    value = validate_time_range(value)
    if value == ALL_TIME:
        return "All time"
    return f"{value} days"
