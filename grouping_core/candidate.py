# FILE: grouping_core/candidate.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Sequence
import numpy as np

from .constraints import (
    ConstraintPair, conflicts_with_group, count_separation_conflicts, separation_degree_map,
)
from .models import GroupingOptions, StudentRecord
from .scoring import (
    CandidateResult, placement_score, needs_help_target_ratio, gender_target_ratios,
    support_partner_penalty, gender_balance_penalty, ability_balance_penalty,
)


@dataclass
class GeneratedGroup:
    target_size: int
    students: List[StudentRecord] = field(default_factory=list)

    @property
    def is_full(self) -> bool:
        return len(self.students) >= self.target_size


def ordered_students(
    students: Sequence[StudentRecord],
    constraints: FrozenSet[ConstraintPair],
    options: GroupingOptions,
    rng: np.random.Generator,
) -> List[StudentRecord]:
    """
    Hardest-to-place first:
    - more separation pairs first
    - then needs-help (ability/support rules on), then support partners (support rule on)
    - then the shuffled order
    """
    shuffled = [students[i] for i in rng.permutation(len(students))]
    degree = separation_degree_map(constraints)
    help_first = options.balance_ability or options.pair_support_partners
    partner_first = options.pair_support_partners

    def key(item):
        rank, s = item
        return (
            -degree.get(s.id, 0),
            0 if (help_first and s.needs_help) else 1,
            0 if (partner_first and s.is_support_partner) else 1,
            rank,
        )

    return [s for _, s in sorted(enumerate(shuffled), key=key)]


def best_group_index(
    student: StudentRecord,
    groups: Sequence[GeneratedGroup],
    constraints: FrozenSet[ConstraintPair],
    options: GroupingOptions,
    gender_ratios: Dict[str, float],
    needs_help_ratio: float,
    allow_conflicts: bool,
    allow_overfill: bool = False,
) -> Optional[int]:
    best_idx: Optional[int] = None
    best_score = float("inf")
    for idx, group in enumerate(groups):
        if not allow_overfill and group.is_full:
            continue
        conflicts = conflicts_with_group(student, group.students, constraints)
        if not allow_conflicts and conflicts > 0:
            continue
        score = placement_score(
            student, group.students, group.target_size, conflicts,
            options, gender_ratios, needs_help_ratio,
        )
        if score < best_score:
            best_score = score
            best_idx = idx
    return best_idx


def least_filled_group_index(groups: Sequence[GeneratedGroup]) -> Optional[int]:
    if not groups:
        return None
    return min(range(len(groups)), key=lambda i: len(groups[i].students))


def build_candidate(
    students: Sequence[StudentRecord],
    target_sizes: Sequence[int],
    constraints: FrozenSet[ConstraintPair],
    options: GroupingOptions,
    rng: np.random.Generator,
    allow_conflicts: bool,
    force_placement: bool,
) -> CandidateResult:
    """One randomized greedy pass; penalties are recomputed from the finished groups."""
    groups = [GeneratedGroup(target_size=t) for t in target_sizes]
    unassigned: List[StudentRecord] = []

    gender_ratios = gender_target_ratios(students)
    help_ratio = needs_help_target_ratio(students)

    for s in ordered_students(students, constraints, options, rng):
        idx = best_group_index(
            s, groups, constraints, options, gender_ratios, help_ratio,
            allow_conflicts=allow_conflicts,
        )
        if idx is None:
            unassigned.append(s)
        else:
            groups[idx].students.append(s)

    if force_placement and unassigned:
        leftover: List[StudentRecord] = []
        for s in unassigned:
            idx = least_filled_group_index(groups)
            if idx is None:
                leftover.append(s)
            else:
                groups[idx].students.append(s)
        unassigned = leftover

    final = tuple(tuple(g.students) for g in groups if g.students)
    return CandidateResult(
        groups=final,
        unassigned_count=len(unassigned),
        separation_conflicts=count_separation_conflicts(final, constraints),
        support_partner_penalty=support_partner_penalty(final, options.pair_support_partners),
        gender_penalty=gender_balance_penalty(final, gender_ratios, options.balance_gender),
        ability_penalty=ability_balance_penalty(final, help_ratio, options.balance_ability),
    )
