# FILE: tests/test_io.py
import pytest

from grouping_core.engine_test_helpers import quick_student
from grouping_core.errors import RosterFileError
from grouping_core.io import (
    load_roster_csv, students_to_dataframe, groups_to_dataframe,
    save_groups_csv_bytes, generate_template_csv_bytes,
)
from grouping_core.models import GroupingResult

def test_load_roster_with_aliases_and_separations():
    csv = (
        "Student ID,Student Name,Sex,Needs Help,Support Partner,Keep Apart\n"
        "1,Ana,F,yes,no,\"2; Carl\"\n"
        "2,Ben,m,0,1,ghost\n"
        "3,Carl,,,,\"1,1\"\n"
    ).encode("utf-8")
    students = load_roster_csv(csv)
    ana, ben, carl = students
    assert ana.gender == "Female" and ana.needs_help and not ana.is_support_partner
    assert ana.separation_ids == ("2", "3")
    assert ben.gender == "Male" and ben.is_support_partner
    assert ben.separation_ids == ()
    assert carl.gender == "Prefer not to say"
    assert carl.separation_ids == ("1",)

def test_ids_derived_from_names_when_missing():
    csv = b"name\nAna\nAna\n\nBen\n"
    a = load_roster_csv(csv)
    b = load_roster_csv(csv)
    assert [s.id for s in a] == [s.id for s in b]
    assert len({s.id for s in a}) == 3
    assert a[1].id == f"{a[0].id}-1"

def test_missing_name_column():
    with pytest.raises(RosterFileError):
        load_roster_csv(b"id,gender\n1,F\n")

def test_template_parses():
    students = load_roster_csv(generate_template_csv_bytes())
    assert [s.id for s in students] == ["s1", "s2"]
    assert students[1].separation_ids == ("s1",)

def test_result_export():
    a, b = quick_student("a", gender="F"), quick_student("b", partner=True)
    result = GroupingResult(groups=[[a], [b]])
    df = groups_to_dataframe(result)
    assert df["group"].tolist() == [1, 2]
    assert df["id"].tolist() == ["a", "b"]
    assert save_groups_csv_bytes(result).decode("utf-8").splitlines()[0] == (
        "group,id,name,gender,needs_help,is_support_partner"
    )
    roster_df = students_to_dataframe([a, b])
    assert roster_df.columns.tolist()[0] == "id"

def test_two_headers_for_one_field_rejected():
    with pytest.raises(RosterFileError):
        load_roster_csv(b"id,student_id,name\n1,x,Ana\n2,y,Ben\n")
    with pytest.raises(RosterFileError):
        load_roster_csv(b"name,Student Name\nAna,Ana\n")

def test_missing_file_is_roster_error(tmp_path):
    with pytest.raises(RosterFileError):
        load_roster_csv(str(tmp_path / "missing.csv"))

def test_roster_file_from_path(tmp_path):
    path = tmp_path / "roster.csv"
    path.write_text("name,gender\nAna,nb\nBen,Two-Spirit\n", encoding="utf-8")
    ana, ben = load_roster_csv(str(path))
    assert ana.gender == "Non-binary"
    assert ben.gender == "Two-Spirit"
