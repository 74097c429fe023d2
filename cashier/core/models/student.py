"""Students registered at the school. Matricule is unique across the directory."""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String, UniqueConstraint, Uuid

from cashier.db.session import Base


class Student(Base):
    __tablename__ = "students"
    __table_args__ = (UniqueConstraint("matricule", name="uq_student_matricule"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    matricule = Column(String(20), nullable=False)
    name = Column(String(255), nullable=False, index=True)
    class_name = Column(String(20), nullable=False, index=True)
    parent_name = Column(String(255), nullable=True)
    parent_phone = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
