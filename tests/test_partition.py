# FILE: tests/test_partition.py
from grouping_core.partition import (
    clamp_group_size, target_group_sizes, expected_group_count, check_evenness
)

def test_sizes_sum_and_evenness_for_all_small_rosters():
    for n in range(1, 61):
        for p in range(2, 11):
            sizes = target_group_sizes(n, p)
            assert sum(sizes) == n
            assert check_evenness(sizes)
            assert len(sizes) == expected_group_count(n, p)

def test_remainder_goes_to_first_groups():
    assert target_group_sizes(10, 4) == [4, 3, 3]
    assert target_group_sizes(12, 4) == [4, 4, 4]
    assert target_group_sizes(7, 3) == [3, 2, 2]

def test_preferred_size_is_clamped():
    assert clamp_group_size(1) == 2
    assert clamp_group_size(-5) == 2
    assert clamp_group_size(25) == 10
    assert target_group_sizes(5, 1) == [2, 2, 1]
    assert target_group_sizes(30, 50) == [10, 10, 10]

def test_empty_and_tiny_rosters():
    assert target_group_sizes(0, 4) == []
    assert expected_group_count(0, 4) == 0
    assert target_group_sizes(1, 4) == [1]

def test_evenness_true_and_false():
    assert check_evenness([])
    assert check_evenness([3, 3, 4])
    assert not check_evenness([2, 4])
