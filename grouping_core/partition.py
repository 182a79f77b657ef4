# FILE: grouping_core/partition.py
from __future__ import annotations
from typing import List
import math

from .constants import MIN_GROUP_SIZE, MAX_GROUP_SIZE


def clamp_group_size(preferred: int) -> int:
    return min(max(int(preferred), MIN_GROUP_SIZE), MAX_GROUP_SIZE)


def target_group_sizes(student_count: int, preferred_size: int) -> List[int]:
    """Even split: base size for everyone, remainder spread over the first groups."""
    if student_count <= 0:
        return []
    size = clamp_group_size(preferred_size)
    group_count = max(1, math.ceil(student_count / size))
    base = student_count // group_count
    remainder = student_count % group_count
    sizes = [base] * group_count
    for i in range(remainder):
        sizes[i] += 1
    return sizes


def expected_group_count(student_count: int, preferred_size: int) -> int:
    if student_count <= 0:
        return 0
    return math.ceil(student_count / clamp_group_size(preferred_size))


def check_evenness(sizes: List[int]) -> bool:
    return not sizes or (max(sizes) - min(sizes) <= 1)
