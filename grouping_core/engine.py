# FILE: grouping_core/engine.py
from __future__ import annotations
from functools import reduce
from typing import FrozenSet, List, Optional, Sequence, Tuple
import logging
import numpy as np

from .candidate import build_candidate
from .constants import DEFAULT_MAX_ATTEMPTS, SIMPLE_MAX_ATTEMPTS
from .constraints import ConstraintPair, build_constraint_set, validate_roster
from .errors import InvalidRosterError
from .models import GroupingOptions, GroupingResult, GroupingStrategy, StudentRecord
from .partition import clamp_group_size, target_group_sizes
from .scoring import CandidateResult, WORST, pick_best

logger = logging.getLogger(__name__)

# (strategy, allow_conflicts, force_placement), tried in this order
TIERS: List[Tuple[GroupingStrategy, bool, bool]] = [
    (GroupingStrategy.STRICT, False, False),
    (GroupingStrategy.RELAXED, True, False),
    (GroupingStrategy.FORCED, True, True),
]


def default_max_attempts(options: GroupingOptions) -> int:
    return DEFAULT_MAX_ATTEMPTS if options.uses_advanced_rules else SIMPLE_MAX_ATTEMPTS


def options_for(
    balance_gender: bool = False,
    balance_ability: bool = False,
    pair_support_partners: bool = False,
    respect_separations: bool = False,
) -> GroupingOptions:
    """Options with the attempt budget the group screen uses: a single pass when no rule is on."""
    opts = GroupingOptions(
        balance_gender=balance_gender,
        balance_ability=balance_ability,
        pair_support_partners=pair_support_partners,
        respect_separations=respect_separations,
    )
    return opts.model_copy(update={"max_attempts": default_max_attempts(opts)})


def _best_of_tier(
    students: Sequence[StudentRecord],
    target_sizes: Sequence[int],
    constraints: FrozenSet[ConstraintPair],
    options: GroupingOptions,
    rng: np.random.Generator,
    attempts: int,
    allow_conflicts: bool,
    force_placement: bool,
) -> CandidateResult:
    candidates = (
        build_candidate(
            students, target_sizes, constraints, options, rng,
            allow_conflicts=allow_conflicts, force_placement=force_placement,
        )
        for _ in range(attempts)
    )
    return reduce(pick_best, candidates, WORST)


def _to_result(best: CandidateResult, strategy: GroupingStrategy) -> GroupingResult:
    return GroupingResult(
        groups=[list(g) for g in best.groups],
        strategy=strategy,
        separation_conflicts=best.separation_conflicts,
        unassigned_count=best.unassigned_count,
    )


def generate_groups(
    students: Sequence[StudentRecord],
    preferred_group_size: int,
    options: Optional[GroupingOptions] = None,
    rng: Optional[np.random.Generator] = None,
) -> GroupingResult:
    """
    Split `students` into balanced groups near `preferred_group_size`.

    Escalates strict -> relaxed -> forced. Each tier runs up to
    `options.max_attempts` randomized greedy passes and keeps the best one;
    the first tier that places everybody wins. Unsatisfiable separations show
    up in the returned strategy and counts, never as an exception.
    """
    if not students:
        return GroupingResult(groups=[], strategy=GroupingStrategy.STRICT)

    errs = validate_roster(students)
    if errs:
        raise InvalidRosterError(errs)

    options = options or GroupingOptions()
    rng = rng if rng is not None else np.random.default_rng()

    size = clamp_group_size(preferred_group_size)
    sizes = target_group_sizes(len(students), size)
    constraints = build_constraint_set(students, options.respect_separations)
    attempts = max(1, options.max_attempts)

    logger.debug(
        "Grouping %d students into sizes %s (%d separation pairs, %d attempts per tier)",
        len(students), sizes, len(constraints), attempts,
    )

    best = WORST
    for strategy, allow_conflicts, force in TIERS:
        best = _best_of_tier(
            students, sizes, constraints, options, rng, attempts,
            allow_conflicts=allow_conflicts, force_placement=force,
        )
        logger.debug(
            "Tier %s: unassigned=%d conflicts=%d",
            strategy.value, best.unassigned_count, best.separation_conflicts,
        )
        if best.unassigned_count == 0:
            logger.info(
                "Generated %d groups using %s strategy (%d separation conflicts)",
                len(best.groups), strategy.value, best.separation_conflicts,
            )
            return _to_result(best, strategy)

    logger.warning("Could not place %d student(s) even with forced placement", best.unassigned_count)
    return _to_result(best, GroupingStrategy.FAILED)


def generate_groups_seeded(
    students: Sequence[StudentRecord],
    preferred_group_size: int,
    options: Optional[GroupingOptions] = None,
    seed: Optional[int] = None,
) -> GroupingResult:
    return generate_groups(students, preferred_group_size, options, rng=np.random.default_rng(seed))


def quick_groups(
    students: Sequence[StudentRecord],
    preferred_group_size: int,
    rng: Optional[np.random.Generator] = None,
) -> List[List[StudentRecord]]:
    """Plain random groups: shuffle, then cut consecutive chunks (last one may be short)."""
    if not students:
        return []
    rng = rng if rng is not None else np.random.default_rng()
    size = clamp_group_size(preferred_group_size)
    shuffled = [students[i] for i in rng.permutation(len(students))]
    return [shuffled[i:i + size] for i in range(0, len(shuffled), size)]
