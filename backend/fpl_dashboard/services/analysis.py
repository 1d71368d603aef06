"""Starts-based player classification shown on the analysis tab."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

REGULAR_STARTERS = "regular_starters"
BENCHERS = "benchers"
BACKBENCHERS = "backbenchers"
BENCHWARMERS = "benchwarmers"

CATEGORIES = (REGULAR_STARTERS, BENCHERS, BACKBENCHERS, BENCHWARMERS)
ALL = "all"


def classify_starts(starts: Optional[int]) -> str:
    s = starts or 0
    if 30 <= s <= 38:
        return REGULAR_STARTERS
    if 21 <= s <= 29:
        return BENCHERS
    if 11 <= s <= 20:
        return BACKBENCHERS
    return BENCHWARMERS


def _upper_median(values: List[float]) -> float:
    if not values:
        return 0
    ordered = sorted(values)
    return ordered[len(ordered) // 2]


def build_analysis(
    rows: Iterable[Dict[str, Any]],
    category: str = ALL,
    position_id: Optional[int] = None,
) -> Dict[str, Any]:
    """Classify summary rows and compute the quadrant medians of the selection.

    Counts cover every player; medians and the player list cover the
    category/position selection only.
    """
    if category != ALL and category not in CATEGORIES:
        raise ValueError(f"unknown category {category!r}")

    classified = []
    for r in rows:
        classified.append(
            {
                "fpl_id": r["fpl_id"],
                "name": r["name"],
                "position_id": r["position_id"],
                "position_name": r.get("position_name"),
                "team_name": r.get("team_name"),
                "starts": r.get("starts") or 0,
                "category": classify_starts(r.get("starts")),
                "price": (r.get("now_cost") or 0) / 10,
                "points": r.get("total_points") or 0,
            }
        )

    counts = {c: 0 for c in CATEGORIES}
    for p in classified:
        counts[p["category"]] += 1

    selected = [
        p
        for p in classified
        if (category == ALL or p["category"] == category)
        and (position_id is None or p["position_id"] == position_id)
    ]

    return {
        "category": category,
        "position_id": position_id,
        "counts": counts,
        "median_price": _upper_median([p["price"] for p in selected]),
        "median_points": int(_upper_median([p["points"] for p in selected])),
        "players": selected,
    }
