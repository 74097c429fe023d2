"""
Matricule allocation: ``<CLASS>-<NNN>``, sequential within a class.

The allocator only computes a candidate from the students it is given. Two
concurrent callers can compute the same value; the caller must make the write
conditional (see the unique constraint on students.matricule).
"""

from typing import Iterable, Optional

from cashier.core.models import Student

PAD_WIDTH = 3


def matricule_number(class_name: str, matricule: Optional[str]) -> int:
    """Numeric suffix of ``matricule`` for ``class_name``; 0 when it does not parse."""
    prefix = f"{class_name}-"
    if not matricule or not matricule.startswith(prefix):
        return 0
    suffix = matricule[len(prefix):]
    if not (suffix.isascii() and suffix.isdigit()):
        return 0
    return int(suffix)


def format_matricule(class_name: str, number: int) -> str:
    return f"{class_name}-{number:0{PAD_WIDTH}d}"


def next_matricule(class_name: str, existing_in_class: Iterable[Student]) -> str:
    highest = max((matricule_number(class_name, s.matricule) for s in existing_in_class), default=0)
    return format_matricule(class_name, max(highest, 0) + 1)
