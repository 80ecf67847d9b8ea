"""Repository classes encapsulating student storage.

`StudentRepository` is the storage contract used by `StudentService`.
`SqlStudentRepository` is the production implementation over a SQLModel
session; `InMemoryStudentRepository` keeps rows in a dict and serves
tests and throwaway runs. Both return `models.Student` objects ordered
by ascending id.
"""

from typing import Dict, List, Optional, Protocol
from sqlmodel import Session, col, select
from . import models


class StudentRepository(Protocol):
    def list_ordered(self) -> List[models.Student]: ...

    def list_by_name(self, fragment: str) -> List[models.Student]: ...

    def get(self, student_id: int) -> Optional[models.Student]: ...

    def add(self, student: models.Student) -> models.Student: ...

    def update(self, student: models.Student) -> models.Student: ...

    def delete(self, student: models.Student) -> None: ...


class SqlStudentRepository:
    """CRUD operations for `Student` rows through a SQLModel `Session`."""
    def __init__(self, session: Session):
        self.session = session

    def list_ordered(self) -> List[models.Student]:
        """Return every student ordered by id."""
        stmt = select(models.Student).order_by(models.Student.id)
        return list(self.session.exec(stmt).all())

    def list_by_name(self, fragment: str) -> List[models.Student]:
        """Return students whose name contains `fragment`, ordered by id.

        Matching is the database's `LIKE` semantics (case-insensitive for
        ASCII on SQLite); `%` and `_` in the fragment are matched literally.
        """
        stmt = (
            select(models.Student)
            .where(col(models.Student.name).contains(fragment, autoescape=True))
            .order_by(models.Student.id)
        )
        return list(self.session.exec(stmt).all())

    def get(self, student_id: int) -> Optional[models.Student]:
        """Get a `Student` by primary key or `None`."""
        return self.session.get(models.Student, student_id)

    def add(self, student: models.Student) -> models.Student:
        """Insert a new row and return it with the assigned id."""
        student.id = None
        self.session.add(student)
        self.session.commit()
        self.session.refresh(student)
        return student

    def update(self, student: models.Student) -> models.Student:
        self.session.add(student)
        self.session.commit()
        self.session.refresh(student)
        return student

    def delete(self, student: models.Student) -> None:
        self.session.delete(student)
        self.session.commit()


class InMemoryStudentRepository:
    """Dict-backed repository; ids come from a counter and are never reused.

    Stored rows are copied on the way in and out so callers cannot mutate
    the store without going through `update`.
    """
    def __init__(self):
        self._rows: Dict[int, models.Student] = {}
        self._next_id = 1

    @staticmethod
    def _copy(student: models.Student) -> models.Student:
        return models.Student(**student.model_dump())

    def list_ordered(self) -> List[models.Student]:
        return [self._copy(self._rows[k]) for k in sorted(self._rows)]

    def list_by_name(self, fragment: str) -> List[models.Student]:
        return [s for s in self.list_ordered() if fragment in s.name]

    def get(self, student_id: int) -> Optional[models.Student]:
        row = self._rows.get(student_id)
        return self._copy(row) if row is not None else None

    def add(self, student: models.Student) -> models.Student:
        stored = self._copy(student)
        stored.id = self._next_id
        self._next_id += 1
        self._rows[stored.id] = stored
        return self._copy(stored)

    def update(self, student: models.Student) -> models.Student:
        if student.id not in self._rows:
            raise KeyError(student.id)
        self._rows[student.id] = self._copy(student)
        return self._copy(student)

    def delete(self, student: models.Student) -> None:
        self._rows.pop(student.id, None)
