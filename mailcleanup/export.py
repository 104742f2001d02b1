"""
Export of composed queries as a shareable JSON document.
"""

import json
import os
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional, Sequence, Union

from .categories import time_range_label
from .composer import ComposedQuery

EXPORT_INSTRUCTIONS = (
    "1. Copy the Gmail query below",
    "2. Paste into Gmail search box",
    "3. Select all results (click checkbox at top)",
    "4. Click 'Select all conversations that match this search'",
    "5. Click Delete button (trash icon)",
)


def format_generated(generated: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix"""
    stamp = generated.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def build_export(queries: Sequence[ComposedQuery], time_range,
                 total_messages: Optional[Union[int, str]] = None,
                 generated: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Build the export document.

    Args:
        queries: Output of compose(); must not be empty
        time_range: The time range the queries were composed with
        total_messages: Account total from the profile, a placeholder string, or None
        generated: Generation timestamp (defaults to now, UTC)
    """
    if not queries:
        raise ValueError("Nothing to export: no categories selected")
    generated = generated or datetime.now(timezone.utc)

    return {
        "generated": format_generated(generated),
        "timeRange": time_range_label(time_range),
        "totalEmailsInAccount": total_messages,
        "queries": [
            {
                "description": q.category_name,
                "gmailQuery": q.full_query,
                "riskLevel": q.risk.value,
                "instructions": list(EXPORT_INSTRUCTIONS),
            }
            for q in queries
        ],
    }


def export_json(queries: Sequence[ComposedQuery], time_range,
                total_messages: Optional[Union[int, str]] = None,
                generated: Optional[datetime] = None) -> str:
    """Serialize the export document (identical inputs give identical text)"""
    document = build_export(queries, time_range, total_messages, generated)
    return json.dumps(document, indent=2, ensure_ascii=False)


def export_filename(on: Optional[date] = None) -> str:
    on = on or datetime.now(timezone.utc).date()
    return f"gmail-cleanup-queries-{on.isoformat()}.json"


def save_export(directory: str, queries: Sequence[ComposedQuery], time_range,
                total_messages: Optional[Union[int, str]] = None,
                generated: Optional[datetime] = None) -> str:
    """Write the export document into directory and return its path"""
    generated = generated or datetime.now(timezone.utc)
    text = export_json(queries, time_range, total_messages, generated)
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, export_filename(generated.date()))
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path
