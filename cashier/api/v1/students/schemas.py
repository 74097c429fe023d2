from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from cashier.core.enums import ClassLabel


class StudentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    class_name: ClassLabel
    parent_name: Optional[str] = Field(None, max_length=255)
    parent_phone: Optional[str] = Field(None, max_length=50)


class StudentUpdate(BaseModel):
    """Partial update. Changing class_name allocates a new matricule in the target class."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    class_name: Optional[ClassLabel] = None
    parent_name: Optional[str] = Field(None, max_length=255)
    parent_phone: Optional[str] = Field(None, max_length=50)


class StudentResponse(BaseModel):
    id: UUID
    matricule: str
    name: str
    class_name: str
    parent_name: Optional[str] = None
    parent_phone: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class NextMatriculeResponse(BaseModel):
    class_name: ClassLabel
    matricule: str

