# FILE: grouping_core/scoring.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Sequence, Tuple
import math
import sys

from .constants import (
    FILL_WEIGHT, CONFLICT_WEIGHT, ABILITY_WEIGHT, GENDER_WEIGHT,
    GENDER_CAP_BASE, GENDER_CAP_STEP,
    SUPPORT_UNMATCHED_PENALTY, SUPPORT_PARTNER_JOINS_BONUS, NEEDS_HELP_JOINS_BONUS,
)
from .models import GroupingOptions, StudentRecord


@dataclass(frozen=True)
class CandidateResult:
    groups: Tuple[Tuple[StudentRecord, ...], ...] = field(default_factory=tuple)
    unassigned_count: int = 0
    separation_conflicts: int = 0
    support_partner_penalty: float = 0.0
    gender_penalty: float = 0.0
    ability_penalty: float = 0.0


WORST = CandidateResult(
    groups=(),
    unassigned_count=sys.maxsize,
    separation_conflicts=sys.maxsize,
    support_partner_penalty=math.inf,
    gender_penalty=math.inf,
    ability_penalty=math.inf,
)


def candidate_sort_key(c: CandidateResult) -> Tuple[int, int, float, float, float]:
    # correctness first, then soft balance; this order is fixed
    return (
        c.unassigned_count,
        c.separation_conflicts,
        c.support_partner_penalty,
        c.gender_penalty,
        c.ability_penalty,
    )


def is_better(candidate: CandidateResult, other: CandidateResult) -> bool:
    return candidate_sort_key(candidate) < candidate_sort_key(other)


def pick_best(best: CandidateResult, candidate: CandidateResult) -> CandidateResult:
    """Fold step: keep the incumbent unless the newcomer is strictly better."""
    return candidate if is_better(candidate, best) else best


# -----------------------
# Roster-wide targets
# -----------------------
def needs_help_target_ratio(students: Sequence[StudentRecord]) -> float:
    if not students:
        return 0.0
    return sum(1 for s in students if s.needs_help) / len(students)


def gender_target_ratios(students: Sequence[StudentRecord]) -> Dict[str, float]:
    if not students:
        return {}
    counts: Dict[str, int] = {}
    for s in students:
        counts[s.gender] = counts.get(s.gender, 0) + 1
    return {g: n / len(students) for g, n in counts.items()}


# -----------------------
# Per-placement score
# -----------------------
def placement_score(
    student: StudentRecord,
    members: Sequence[StudentRecord],
    target_size: int,
    conflict_count: int,
    options: GroupingOptions,
    gender_ratios: Dict[str, float],
    needs_help_ratio: float,
) -> float:
    """
    Cost of adding `student` to a group currently holding `members`.
    Lower is better.
    """
    size = len(members)
    score = size / max(target_size, 1) * FILL_WEIGHT
    score += conflict_count * CONFLICT_WEIGHT

    if options.balance_ability:
        projected_help = sum(1 for m in members if m.needs_help) + (1 if student.needs_help else 0)
        projected_ratio = projected_help / (size + 1)
        score += abs(projected_ratio - needs_help_ratio) * ABILITY_WEIGHT

    if options.balance_gender:
        target_for_gender = gender_ratios.get(student.gender, 0.0) * target_size
        projected_gender = sum(1 for m in members if m.gender == student.gender) + 1
        score += abs(projected_gender - target_for_gender) * GENDER_WEIGHT

        allowed = math.ceil(target_for_gender)
        if projected_gender > allowed:
            score += GENDER_CAP_BASE + (projected_gender - allowed) * GENDER_CAP_STEP

    if options.pair_support_partners:
        group_has_help = any(m.needs_help for m in members)
        group_has_partner = any(m.is_support_partner for m in members)
        projected_has_help = group_has_help or student.needs_help
        projected_has_partner = group_has_partner or student.is_support_partner

        if projected_has_help and not projected_has_partner:
            score += SUPPORT_UNMATCHED_PENALTY
        if student.is_support_partner and group_has_help and not group_has_partner:
            score -= SUPPORT_PARTNER_JOINS_BONUS
        if student.needs_help and group_has_partner:
            score -= NEEDS_HELP_JOINS_BONUS

    return score


# -----------------------
# Finished-group penalties
# -----------------------
def support_partner_penalty(groups: Sequence[Sequence[StudentRecord]], enabled: bool) -> float:
    if not enabled:
        return 0.0
    penalty = 0.0
    for g in groups:
        if any(s.needs_help for s in g) and not any(s.is_support_partner for s in g):
            penalty += 1
    return penalty


def gender_balance_penalty(groups: Sequence[Sequence[StudentRecord]],
                           target_ratios: Dict[str, float], enabled: bool) -> float:
    if not enabled:
        return 0.0
    penalty = 0.0
    for g in groups:
        if not g:
            continue
        for gender, ratio in target_ratios.items():
            actual = sum(1 for s in g if s.gender == gender)
            penalty += abs(actual - ratio * len(g))
    return penalty


def ability_balance_penalty(groups: Sequence[Sequence[StudentRecord]],
                            target_ratio: float, enabled: bool) -> float:
    if not enabled:
        return 0.0
    penalty = 0.0
    for g in groups:
        if not g:
            continue
        ratio = sum(1 for s in g if s.needs_help) / len(g)
        penalty += abs(ratio - target_ratio)
    return penalty
