from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from cashier.core.enums import ClassLabel
from cashier.core.exceptions import ServiceError
from cashier.db.repository import SchoolRepository, get_repository

from .schemas import NextMatriculeResponse, StudentCreate, StudentResponse, StudentUpdate
from . import service

router = APIRouter(prefix="/api/v1/students", tags=["students"])


@router.post(
    "",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_student(
    payload: StudentCreate,
    repo: SchoolRepository = Depends(get_repository),
) -> StudentResponse:
    try:
        return await service.create_student(repo, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=List[StudentResponse])
async def list_students(
    class_name: Optional[ClassLabel] = Query(None),
    search: Optional[str] = Query(None, description="Substring of name or matricule"),
    repo: SchoolRepository = Depends(get_repository),
) -> List[StudentResponse]:
    try:
        return await service.list_students(repo, class_name=class_name, search=search)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/next-matricule", response_model=NextMatriculeResponse)
async def preview_next_matricule(
    class_name: ClassLabel,
    repo: SchoolRepository = Depends(get_repository),
) -> NextMatriculeResponse:
    """Matricule the next registration in this class would receive right now."""
    try:
        return await service.preview_matricule(repo, class_name)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{student_id}", response_model=StudentResponse)
async def get_student(
    student_id: UUID,
    repo: SchoolRepository = Depends(get_repository),
) -> StudentResponse:
    try:
        return await service.get_student(repo, student_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.patch("/{student_id}", response_model=StudentResponse)
async def update_student(
    student_id: UUID,
    payload: StudentUpdate,
    repo: SchoolRepository = Depends(get_repository),
) -> StudentResponse:
    try:
        return await service.update_student(repo, student_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(
    student_id: UUID,
    repo: SchoolRepository = Depends(get_repository),
) -> Response:
    try:
        await service.delete_student(repo, student_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
