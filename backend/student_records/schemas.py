"""Pydantic request/response schemas used by the API.

Schemas keep the wire shape stable (camelCase field names such as
`dateOfBirth`) and carry the validation rules shared by the record API
and the front end forms.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class StudentIn(BaseModel):
    """Request body for create and update.

    `id` is only compared against the route on update; create ignores it.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: Optional[int] = None
    name: str
    email: str
    phone: Optional[str] = None
    date_of_birth: Optional[datetime] = None

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("The Name field is required.")
        return v

    @field_validator("email")
    @classmethod
    def email_syntax(cls, v: str) -> str:
        """Check the address syntax but store the text exactly as submitted."""
        if not v.strip():
            raise ValueError("The Email field is required.")
        try:
            validate_email(v, check_deliverability=False, allow_display_name=False)
        except EmailNotValidError as e:
            raise ValueError(f"The Email field is not a valid e-mail address. {e}")
        return v

    @field_validator("date_of_birth")
    @classmethod
    def date_of_birth_naive(cls, v: Optional[datetime]) -> Optional[datetime]:
        # a birth date has no time zone; keep the wall-clock value as sent
        if v is not None and v.tzinfo is not None:
            return v.replace(tzinfo=None)
        return v


class StudentOut(BaseModel):
    """Serialized student record."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    name: str
    email: str
    phone: Optional[str] = None
    date_of_birth: Optional[datetime] = None


class ValidationProblem(BaseModel):
    """400 response body listing messages per offending field."""
    title: str = "One or more validation errors occurred."
    status: int = 400
    errors: Dict[str, List[str]]


def collect_field_errors(errors: Iterable[dict], skip: int = 0) -> Dict[str, List[str]]:
    """Group pydantic error dicts by field name.

    `skip` drops leading `loc` parts such as FastAPI's `"body"` marker.
    Errors that do not point at a field are grouped under `""`.
    """
    out: Dict[str, List[str]] = {}
    for err in errors:
        loc = [str(p) for p in err.get("loc", ())][skip:]
        field = ".".join(loc)
        msg = err.get("msg", "invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        out.setdefault(field, []).append(msg)
    return out
