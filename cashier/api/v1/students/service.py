"""Students service: registration with matricule allocation, search, class reassignment."""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import status

from cashier.core.config import settings
from cashier.core.enums import ClassLabel
from cashier.core.exceptions import ServiceError
from cashier.core.models import Student
from cashier.db.repository import DuplicateMatriculeError, SchoolRepository
from cashier.domain.matricule import next_matricule

from .schemas import NextMatriculeResponse, StudentCreate, StudentResponse, StudentUpdate

logger = logging.getLogger(__name__)

_CLASS_ORDER = {c.value: i for i, c in enumerate(ClassLabel)}


def _student_to_response(s: Student) -> StudentResponse:
    return StudentResponse.model_validate(s)


def sort_students(students: List[Student]) -> List[Student]:
    """Class order first (2ANS ... CM2), then matricule."""
    return sorted(students, key=lambda s: (_CLASS_ORDER.get(s.class_name, len(_CLASS_ORDER)), s.matricule))


def matches_search(search: Optional[str], *values: Optional[str]) -> bool:
    if not search:
        return True
    needle = search.strip().lower()
    return any(needle in (v or "").lower() for v in values)


async def preview_matricule(repo: SchoolRepository, class_name: ClassLabel) -> NextMatriculeResponse:
    existing = await repo.list_students(class_name=class_name.value)
    return NextMatriculeResponse(class_name=class_name, matricule=next_matricule(class_name.value, existing))


async def _allocate_and_write(repo: SchoolRepository, class_name: str, write) -> Student:
    """
    Allocate the next matricule for class_name and hand it to ``write``.
    A concurrent registration can take the same number first; the unique
    constraint rejects the write and we re-read the class and try again.
    """
    attempts = settings.matricule_allocation_attempts
    for attempt in range(1, attempts + 1):
        existing = await repo.list_students(class_name=class_name)
        matricule = next_matricule(class_name, existing)
        try:
            return await write(matricule)
        except DuplicateMatriculeError:
            logger.warning("Matricule %s taken (attempt %d/%d)", matricule, attempt, attempts)
    raise ServiceError(
        f"Could not allocate a matricule for class {class_name}, please retry",
        status.HTTP_409_CONFLICT,
    )


async def create_student(repo: SchoolRepository, payload: StudentCreate) -> StudentResponse:
    class_name = payload.class_name.value

    async def _insert(matricule: str) -> Student:
        return await repo.insert_student(
            matricule=matricule,
            name=" ".join(payload.name.split()),
            class_name=class_name,
            parent_name=(payload.parent_name or "").strip() or None,
            parent_phone=(payload.parent_phone or "").strip() or None,
        )

    student = await _allocate_and_write(repo, class_name, _insert)
    logger.info("Registered student %s (%s)", student.matricule, student.name)
    return _student_to_response(student)


async def list_students(
    repo: SchoolRepository,
    class_name: Optional[ClassLabel] = None,
    search: Optional[str] = None,
) -> List[StudentResponse]:
    students = await repo.list_students(class_name=class_name.value if class_name else None)
    return [
        _student_to_response(s)
        for s in sort_students(students)
        if matches_search(search, s.name, s.matricule)
    ]


async def get_student(repo: SchoolRepository, student_id: UUID) -> StudentResponse:
    student = await repo.get_student(student_id)
    if not student:
        raise ServiceError("Student not found", status.HTTP_404_NOT_FOUND)
    return _student_to_response(student)


async def update_student(
    repo: SchoolRepository,
    student_id: UUID,
    payload: StudentUpdate,
) -> StudentResponse:
    student = await repo.get_student(student_id)
    if not student:
        raise ServiceError("Student not found", status.HTTP_404_NOT_FOUND)

    changes = {}
    if payload.name is not None:
        changes["name"] = " ".join(payload.name.split())
    if payload.parent_name is not None:
        changes["parent_name"] = payload.parent_name.strip() or None
    if payload.parent_phone is not None:
        changes["parent_phone"] = payload.parent_phone.strip() or None

    new_class = payload.class_name.value if payload.class_name else None
    if new_class and new_class != student.class_name:
        old_matricule = student.matricule

        async def _reassign(matricule: str) -> Student:
            return await repo.update_student(student_id, class_name=new_class, matricule=matricule, **changes)

        student = await _allocate_and_write(repo, new_class, _reassign)
        logger.info("Moved student %s to %s as %s", old_matricule, new_class, student.matricule)
    elif changes:
        student = await repo.update_student(student_id, **changes)
    if not student:
        raise ServiceError("Student not found", status.HTTP_404_NOT_FOUND)
    return _student_to_response(student)


async def delete_student(repo: SchoolRepository, student_id: UUID) -> None:
    if not await repo.delete_student(student_id):
        raise ServiceError("Student not found", status.HTTP_404_NOT_FOUND)
    logger.info("Deleted student %s", student_id)
