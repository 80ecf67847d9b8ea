"""SQLModel data models.

The record API owns a single table, `students`.
"""

from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel, Field


class Student(SQLModel, table=True):
    """A student record.

    Fields:
    - `id`: primary key assigned by the database on insert
    - `name`, `email`: required, never empty for a stored row
    - `phone`: free text, no format constraint
    - `date_of_birth`: optional; only the date part is meaningful
    """
    __tablename__ = "students"
    # ids of deleted rows are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    email: str = Field(nullable=False)
    phone: Optional[str] = None
    date_of_birth: Optional[datetime] = None
