"""Business logic for the student record API.

`StudentService` sits between the HTTP controllers and a
`StudentRepository`. It performs the identity and existence checks and
raises domain exceptions that the controllers translate to HTTP status
codes. Field validation happens earlier, when the request body is parsed
into `StudentIn`.
"""

import logging
from typing import List, Optional

from . import models
from .repositories import StudentRepository
from .schemas import StudentIn

logger = logging.getLogger("student_records.service")


class StudentServiceError(Exception):
    """Base class for errors raised by `StudentService`."""


class StudentNotFound(StudentServiceError):
    def __init__(self, student_id: int):
        super().__init__(f"student {student_id} not found")
        self.student_id = student_id


class IdentityMismatch(StudentServiceError):
    def __init__(self, route_id: int, body_id: Optional[int]):
        super().__init__("Route id and body id must match.")
        self.route_id = route_id
        self.body_id = body_id


class StudentService:
    """CRUD operations over the student collection."""
    def __init__(self, repo: StudentRepository):
        self.repo = repo

    def list(self, search_string: Optional[str] = None) -> List[models.Student]:
        """Return students ordered by id.

        A blank or missing `search_string` returns everything; otherwise only
        students whose name contains it are returned.
        """
        if search_string is None or not search_string.strip():
            return self.repo.list_ordered()
        return self.repo.list_by_name(search_string)

    def get(self, student_id: int) -> models.Student:
        student = self.repo.get(student_id)
        if student is None:
            raise StudentNotFound(student_id)
        return student

    def create(self, payload: StudentIn) -> models.Student:
        """Persist a new student. Any `id` in the payload is disregarded."""
        student = models.Student(
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            date_of_birth=payload.date_of_birth,
        )
        student = self.repo.add(student)
        logger.info("student created id=%s", student.id)
        return student

    def update(self, student_id: int, payload: StudentIn) -> models.Student:
        """Replace the mutable fields of an existing student wholesale.

        The identity check runs before the repository is touched.
        """
        if payload.id != student_id:
            raise IdentityMismatch(student_id, payload.id)
        existing = self.get(student_id)
        existing.name = payload.name
        existing.email = payload.email
        existing.phone = payload.phone
        existing.date_of_birth = payload.date_of_birth
        existing = self.repo.update(existing)
        logger.info("student updated id=%s", student_id)
        return existing

    def delete(self, student_id: int) -> None:
        existing = self.get(student_id)
        self.repo.delete(existing)
        logger.info("student deleted id=%s", student_id)
