# FILE: tests/test_models.py
import pytest
from pydantic import ValidationError

from grouping_core.models import StudentRecord, GroupingOptions, GroupingStrategy
from grouping_core.constants import GENDER_UNSPECIFIED, KNOWN_GENDERS, import_gender_token

def test_gender_is_open_with_fallback():
    assert StudentRecord(id="1").gender == GENDER_UNSPECIFIED
    assert StudentRecord(id="1", gender="  ").gender == GENDER_UNSPECIFIED
    assert StudentRecord(id="1", gender=None).gender == GENDER_UNSPECIFIED
    assert StudentRecord(id="1", gender="Two-Spirit").gender == "Two-Spirit"

def test_caller_gender_tokens_kept_verbatim():
    for token in ("M", "f", "nb", "nan", "Female"):
        assert StudentRecord(id="1", gender=token).gender == token
    assert StudentRecord(id="1", gender="  M ").gender == "M"

def test_student_record_is_immutable():
    s = StudentRecord(id="1", separation_ids=["2", 3])
    assert s.separation_ids == ("2", "3")
    with pytest.raises(ValidationError):
        s.name = "changed"

def test_single_separation_id_string_is_not_split():
    assert StudentRecord(id="a", separation_ids="bc").separation_ids == ("bc",)
    assert StudentRecord(id="a", separation_ids=None).separation_ids == ()

def test_options_defaults_and_attempt_floor():
    opts = GroupingOptions()
    assert opts.max_attempts == 32
    assert not opts.uses_advanced_rules
    assert GroupingOptions(max_attempts=0).max_attempts == 1
    assert GroupingOptions(respect_separations=True).uses_advanced_rules

def test_strategy_tags():
    assert [s.value for s in GroupingStrategy] == [
        "strict", "relaxedConstraints", "forcedPlacement", "failed"
    ]

def test_file_short_forms_map_to_known_tokens():
    for token in ("m", "F", "nb", ""):
        assert import_gender_token(token) in KNOWN_GENDERS
    assert import_gender_token("Two-Spirit") == "Two-Spirit"
