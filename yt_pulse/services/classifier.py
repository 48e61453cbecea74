from __future__ import annotations

EXCELLENT = "excellent"
GOOD = "good"
NEEDS_IMPROVEMENT = "needs-improvement"

GRADES = (EXCELLENT, GOOD, NEEDS_IMPROVEMENT)

# strict ">" on both boundaries
EXCELLENT_RATIO = 0.15
GOOD_RATIO = 0.05


def view_sub_ratio(view_count: int, subscriber_count: int) -> float:
    """
    Views per subscriber. The denominator is floored at 1, so a channel with
    unknown (or zero) audience yields ratio == view_count.
    """
    return view_count / max(subscriber_count, 1)


def classify(view_count: int, subscriber_count: int) -> str:
    ratio = view_sub_ratio(view_count, subscriber_count)
    if ratio > EXCELLENT_RATIO:
        return EXCELLENT
    if ratio > GOOD_RATIO:
        return GOOD
    return NEEDS_IMPROVEMENT
