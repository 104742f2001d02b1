"""
Query composition.

Turns a category selection plus a single age threshold into one Gmail search
string per selected category.
"""

from dataclasses import dataclass
from typing import Iterable, List

from .categories import ALL_TIME, CLEANUP_CATEGORIES, RiskLevel, get_category, validate_time_range


@dataclass(frozen=True)
class ComposedQuery:
    category_name: str
    risk: RiskLevel
    base_query: str
    full_query: str


def age_filter(time_range) -> str:
    """Return the Gmail age suffix for a time range ('' for all time)"""
    time_range = validate_time_range(time_range)
    if time_range == ALL_TIME:
        return ""
    return f" older_than:{time_range}d"


def compose(selected_ids: Iterable[str], time_range) -> List[ComposedQuery]:
    """
    Build one ComposedQuery per selected category.

    Output follows catalog order, not selection order. An empty selection
    yields an empty list; callers treat that as nothing to analyze.

    Args:
        selected_ids: Category ids chosen by the user
        time_range: Positive number of days, or ALL_TIME

    Returns:
        List of ComposedQuery, freshly built on every call
    """
    selected = set(selected_ids)
    for category_id in selected:
        get_category(category_id)

    suffix = age_filter(time_range)
    return [
        ComposedQuery(
            category_name=category.name,
            risk=category.risk,
            base_query=category.base_query,
            full_query=f"{category.base_query}{suffix}",
        )
        for category in CLEANUP_CATEGORIES
        if category.id in selected
    ]
