"""
Report Change Detection Service

Compares two snapshots of a report and returns the fields that differ,
keyed by dotted path:

    {"regional_performance.monthlySales": {"old": 50000, "new": 60000}}

Snapshot shape (camelCase, as the admin edit form sends it):

    executiveSummary, wins[], repFirms[], competitors[],
    regionalPerformance{monthlySales, monthlyGoal, ytdSales, ytdGoal,
                        openOrders, pipeline},
    keyInitiatives{keyProjects, distributionUpdates, challengesBlockers},
    marketingEvents{eventsAttended, marketingCampaigns},
    marketTrends, followUps

Rules:
- Scalars use strict inequality on the raw values; "Foo" and "Foo " differ.
- Every performance field is reported under its own path.
- Collections are reported as counts of named entries ("3 wins" -> "4 wins").
  They are flagged when the named count changes or when the JSON of the full
  list changes, so an edit to a description is detected but the entry does
  not say which item changed. JSON comparison is key-order sensitive.

An empty result means nothing changed and no audit entry should be written.
"""

import json
from typing import Any, Dict, List, Optional

PERFORMANCE_FIELDS = (
    "monthlySales",
    "monthlyGoal",
    "ytdSales",
    "ytdGoal",
    "openOrders",
    "pipeline",
)

INITIATIVE_FIELDS = ("keyProjects", "distributionUpdates", "challengesBlockers")

# (snapshot key, audit path suffix)
MARKETING_FIELDS = (
    ("eventsAttended", "events_attended"),
    ("marketingCampaigns", "marketing_campaigns"),
)

# (snapshot key, audit path, name key, count label)
COLLECTION_FIELDS = (
    ("wins", "wins", "title", "wins"),
    ("repFirms", "rep_firms", "name", "rep firms"),
    ("competitors", "competitors", "name", "competitors"),
)


def empty_snapshot() -> Dict[str, Any]:
    """Zero-value snapshot used for any section a report does not have."""
    return {
        "executiveSummary": "",
        "wins": [],
        "repFirms": [],
        "competitors": [],
        "regionalPerformance": {field: 0 for field in PERFORMANCE_FIELDS},
        "keyInitiatives": {field: "" for field in INITIATIVE_FIELDS},
        "marketingEvents": {key: "" for key, _ in MARKETING_FIELDS},
        "marketTrends": "",
        "followUps": "",
    }


def _section(snapshot: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = snapshot.get(key)
    if value is None:
        return empty_snapshot()[key]
    return value


def _items(snapshot: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    return snapshot.get(key) or []


def _serialize(items: List[Dict[str, Any]]) -> str:
    return json.dumps(items, default=str)


def count_named(items: Optional[List[Dict[str, Any]]], name_key: str) -> int:
    """Number of entries whose name/title is non-empty."""
    return len([item for item in items or [] if item.get(name_key)])


def detect_changes(
    old: Dict[str, Any], new: Dict[str, Any]
) -> Dict[str, Dict[str, Any]]:
    """
    Compute field-level changes between two report snapshots.

    Args:
        old: Snapshot of the stored report
        new: Snapshot of the proposed edit

    Returns:
        Ordered dict of path -> {"old": value, "new": value}; empty when
        nothing differs
    """
    changes: Dict[str, Dict[str, Any]] = {}

    def record(path, old_value, new_value):
        if old_value != new_value:
            changes[path] = {"old": old_value, "new": new_value}

    record(
        "executive_summary",
        old.get("executiveSummary", ""),
        new.get("executiveSummary", ""),
    )

    old_perf = _section(old, "regionalPerformance")
    new_perf = _section(new, "regionalPerformance")
    for field in PERFORMANCE_FIELDS:
        record(f"regional_performance.{field}", old_perf.get(field), new_perf.get(field))

    old_init = _section(old, "keyInitiatives")
    new_init = _section(new, "keyInitiatives")
    for field in INITIATIVE_FIELDS:
        record(f"key_initiatives.{field}", old_init.get(field), new_init.get(field))

    old_marketing = _section(old, "marketingEvents")
    new_marketing = _section(new, "marketingEvents")
    for key, path in MARKETING_FIELDS:
        record(f"marketing_events.{path}", old_marketing.get(key), new_marketing.get(key))

    record("market_trends", old.get("marketTrends", ""), new.get("marketTrends", ""))
    record("follow_ups", old.get("followUps", ""), new.get("followUps", ""))

    for key, path, name_key, label in COLLECTION_FIELDS:
        old_items = _items(old, key)
        new_items = _items(new, key)
        old_count = count_named(old_items, name_key)
        new_count = count_named(new_items, name_key)
        if old_count != new_count or _serialize(old_items) != _serialize(new_items):
            changes[path] = {
                "old": f"{old_count} {label}",
                "new": f"{new_count} {label}",
            }

    return changes
