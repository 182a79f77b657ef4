# FILE: grouping_core/__init__.py
"""
grouping_core package: student models, group sizing, separation constraints,
candidate scoring, the tiered grouping engine, config and roster IO.
"""
from .models import StudentRecord, GroupingOptions, GroupingStrategy, GroupingResult
from .engine import generate_groups, generate_groups_seeded, quick_groups, options_for

__all__ = [
    "models",
    "constants",
    "errors",
    "partition",
    "constraints",
    "scoring",
    "candidate",
    "engine",
    "explain",
    "config",
    "io",
    "StudentRecord",
    "GroupingOptions",
    "GroupingStrategy",
    "GroupingResult",
    "generate_groups",
    "generate_groups_seeded",
    "quick_groups",
    "options_for",
]
