"""Unit tests for matricule allocation."""

from cashier.core.models import Student
from cashier.domain.matricule import format_matricule, matricule_number, next_matricule


def _students(*matricules: str):
    return [Student(matricule=m, name=f"Eleve {i}", class_name="CM2") for i, m in enumerate(matricules)]


def test_empty_class_starts_at_one() -> None:
    assert next_matricule("CM2", []) == "CM2-001"


def test_next_after_highest_suffix() -> None:
    assert next_matricule("CM2", _students("CM2-001", "CM2-003")) == "CM2-004"


def test_unparsable_suffix_is_ignored() -> None:
    assert matricule_number("CM2", "CM2-abc") == 0
    assert next_matricule("CM2", _students("CM2-abc")) == "CM2-001"
    assert next_matricule("CM2", _students("CM2-abc", "CM2-002")) == "CM2-003"


def test_other_prefix_does_not_count() -> None:
    # e.g. a student moved in from another class who kept an old number
    assert next_matricule("CM2", _students("CM1-009", "CM2-002")) == "CM2-003"


def test_missing_matricule_is_ignored() -> None:
    assert next_matricule("CE1", _students(None, "")) == "CE1-001"


def test_padding_grows_past_three_digits() -> None:
    assert format_matricule("CP1", 7) == "CP1-007"
    assert next_matricule("CP1", _students("CP1-999")) == "CP1-1000"


def test_only_plain_digit_suffixes_count() -> None:
    for matricule in ("CM2-1_000", "CM2- 7", "CM2-+4", "CM2--2", "CM2-٣"):
        assert matricule_number("CM2", matricule) == 0
    assert next_matricule("CM2", _students("CM2-1_000", "CM2- 7", "CM2-002")) == "CM2-003"
