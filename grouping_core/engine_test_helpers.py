"""
Internal helpers for tests (not imported by the engine).
"""
from __future__ import annotations
from typing import Iterable, List, Sequence

from .models import StudentRecord


def quick_student(sid: str, gender: str = "", needs_help: bool = False,
                  partner: bool = False, apart: Iterable[str] = ()) -> StudentRecord:
    return StudentRecord(
        id=sid, name=sid.upper(), gender=gender,
        needs_help=needs_help, is_support_partner=partner,
        separation_ids=tuple(apart),
    )


def quick_roster(n: int, prefix: str = "s") -> List[StudentRecord]:
    return [quick_student(f"{prefix}{i}") for i in range(n)]


def placed_ids(groups: Sequence[Sequence[StudentRecord]]) -> List[str]:
    return [s.id for g in groups for s in g]
