"""Edit models and the result type shared by the front end flows.

`StudentForm` keeps the submitted strings exactly as typed so a failed
submission can be re-rendered without losing input. `FormResult` is the
outcome of every mutating flow: either a redirect target or the form
together with the errors to show next to it.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from pydantic import ValidationError

from ..schemas import StudentIn, collect_field_errors


@dataclass
class FieldError:
    """A message attached to one form field; `field == ""` is form-level."""
    field: str
    message: str


@dataclass
class StudentForm:
    id: Optional[int] = None
    name: str = ""
    email: str = ""
    phone: str = ""
    date_of_birth: str = ""

    @classmethod
    def empty(cls) -> "StudentForm":
        return cls()

    @classmethod
    def from_record(cls, record: dict) -> "StudentForm":
        """Build the edit model from a record as returned by the API."""
        dob = record.get("dateOfBirth") or ""
        return cls(
            id=record.get("id"),
            name=record.get("name") or "",
            email=record.get("email") or "",
            phone=record.get("phone") or "",
            date_of_birth=dob[:10],
        )

    def _parsed_date_of_birth(self) -> Optional[datetime]:
        raw = self.date_of_birth.strip()
        if not raw:
            return None
        return datetime.combine(date.fromisoformat(raw), datetime.min.time())

    def to_payload(self) -> dict:
        """JSON body for the record API. Blank optional fields become null."""
        try:
            dob = self._parsed_date_of_birth()
        except ValueError:
            dob = None
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone or None,
            "dateOfBirth": dob.isoformat() if dob else None,
        }

    def validate(self) -> List[FieldError]:
        """Apply the record API's rules locally; empty list means valid."""
        errors: List[FieldError] = []
        try:
            self._parsed_date_of_birth()
        except ValueError:
            errors.append(FieldError("dateOfBirth", "Enter a valid date (YYYY-MM-DD)."))
        try:
            StudentIn.model_validate(self.to_payload())
        except ValidationError as e:
            for name, messages in collect_field_errors(e.errors()).items():
                errors.extend(FieldError(name, m) for m in messages)
        return errors


@dataclass
class FormResult:
    redirect: Optional[str] = None
    form: Optional[StudentForm] = None
    errors: List[FieldError] = field(default_factory=list)
    status_code: int = 200

    @classmethod
    def redirect_to(cls, url: str) -> "FormResult":
        return cls(redirect=url, status_code=303)

    @classmethod
    def rerender(cls, form: Optional[StudentForm], errors: List[FieldError], status_code: int = 200) -> "FormResult":
        return cls(form=form, errors=list(errors), status_code=status_code)

    @property
    def succeeded(self) -> bool:
        return self.redirect is not None

    def errors_for(self, name: str) -> List[str]:
        return [e.message for e in self.errors if e.field == name]
