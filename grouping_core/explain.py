# FILE: grouping_core/explain.py
from __future__ import annotations
from typing import Tuple

from .models import GroupingResult, GroupingStrategy


def describe_result(result: GroupingResult) -> Tuple[str, bool]:
    """Return (message, is_warning) for showing next to the generated groups."""
    if not result.groups:
        return "No groups were generated.", True

    if result.strategy == GroupingStrategy.STRICT:
        return f"Generated {result.group_count} balanced groups.", False

    if result.strategy == GroupingStrategy.RELAXED:
        if result.separation_conflicts > 0:
            return (
                "Used fallback strategy: constraints were relaxed and "
                f"{result.separation_conflicts} separation conflict(s) remain.",
                True,
            )
        return "Used fallback strategy: regenerated with relaxed ordering to satisfy constraints.", False

    if result.strategy == GroupingStrategy.FORCED:
        return (
            f"Used emergency fallback placement. {result.separation_conflicts} separation conflict(s) remain.",
            True,
        )

    return (
        f"Could not satisfy all rules. {result.unassigned_count} student(s) could not be assigned.",
        True,
    )
