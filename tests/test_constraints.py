# FILE: tests/test_constraints.py
from grouping_core.constraints import (
    make_pair, build_constraint_set, separation_degree_map,
    count_separation_conflicts, conflicts_with_group, validate_roster,
)
from grouping_core.engine_test_helpers import quick_student

def test_pairs_are_symmetric_and_deduplicated():
    roster = [
        quick_student("a", apart=["b"]),
        quick_student("b", apart=["a"]),
        quick_student("c", apart=["a", "a"]),
    ]
    pairs = build_constraint_set(roster, enabled=True)
    assert pairs == {make_pair("a", "b"), make_pair("a", "c")}
    assert make_pair("b", "a") == make_pair("a", "b")

def test_self_and_unknown_ids_are_ignored():
    roster = [quick_student("a", apart=["a", "zzz"]), quick_student("b")]
    assert build_constraint_set(roster, enabled=True) == frozenset()

def test_disabled_separations_give_no_pairs():
    roster = [quick_student("a", apart=["b"]), quick_student("b")]
    assert build_constraint_set(roster, enabled=False) == frozenset()

def test_degree_and_conflict_counts():
    roster = [
        quick_student("a", apart=["b", "c"]),
        quick_student("b"),
        quick_student("c"),
        quick_student("d"),
    ]
    pairs = build_constraint_set(roster, enabled=True)
    degree = separation_degree_map(pairs)
    assert degree == {"a": 2, "b": 1, "c": 1}

    a, b, c, d = roster
    assert conflicts_with_group(a, [b, c, d], pairs) == 2
    assert conflicts_with_group(d, [a, b], pairs) == 0
    assert count_separation_conflicts([[a, b, c], [d]], pairs) == 2
    assert count_separation_conflicts([[a, d], [b, c]], pairs) == 0
    assert count_separation_conflicts([[a, b]], frozenset()) == 0

def test_validate_roster_reports_duplicates_and_blanks():
    ok = [quick_student("a"), quick_student("b")]
    assert validate_roster(ok) == []
    errs = validate_roster([quick_student("a"), quick_student("a"), quick_student(" ")])
    assert any("Duplicate" in e and "a" in e for e in errs)
    assert any("Blank" in e for e in errs)
