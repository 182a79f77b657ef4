# FILE: grouping_core/constraints.py
from __future__ import annotations
from typing import Dict, FrozenSet, Iterable, List, Sequence, Set, Tuple

from .models import StudentRecord

ConstraintPair = Tuple[str, str]


def make_pair(id_a: str, id_b: str) -> ConstraintPair:
    """Unordered pair stored in canonical (smaller, larger) order."""
    return (id_a, id_b) if id_a < id_b else (id_b, id_a)


def validate_roster(students: Sequence[StudentRecord]) -> List[str]:
    errs = []
    blanks = [i for i, s in enumerate(students) if not str(s.id).strip()]
    if blanks:
        errs.append(f"Blank student id at positions: {', '.join(str(i) for i in blanks)}")

    seen: Set[str] = set()
    dupes: List[str] = []
    for s in students:
        if s.id in seen and s.id not in dupes:
            dupes.append(s.id)
        seen.add(s.id)
    if dupes:
        errs.append(f"Duplicate student id detected: {', '.join(dupes)}")
    return errs


def build_constraint_set(students: Sequence[StudentRecord], enabled: bool) -> FrozenSet[ConstraintPair]:
    if not enabled:
        return frozenset()
    known = {s.id for s in students}
    pairs: Set[ConstraintPair] = set()
    for s in students:
        for other in s.separation_ids:
            if other in known and other != s.id:
                pairs.add(make_pair(s.id, other))
    return frozenset(pairs)


def separation_degree_map(constraints: Iterable[ConstraintPair]) -> Dict[str, int]:
    degree: Dict[str, int] = {}
    for a, b in constraints:
        degree[a] = degree.get(a, 0) + 1
        degree[b] = degree.get(b, 0) + 1
    return degree


def conflicts_with_group(student: StudentRecord, members: Sequence[StudentRecord],
                         constraints: FrozenSet[ConstraintPair]) -> int:
    if not constraints:
        return 0
    return sum(1 for m in members if make_pair(m.id, student.id) in constraints)


def count_separation_conflicts(groups: Sequence[Sequence[StudentRecord]],
                               constraints: FrozenSet[ConstraintPair]) -> int:
    if not constraints:
        return 0
    conflicts = 0
    for group in groups:
        for i in range(len(group) - 1):
            for j in range(i + 1, len(group)):
                if make_pair(group[i].id, group[j].id) in constraints:
                    conflicts += 1
    return conflicts
