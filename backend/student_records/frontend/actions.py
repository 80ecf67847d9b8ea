"""Front end flows: user action -> record API call -> view state.

Each mutating flow moves Presented -> Submitted -> Validated -> Forwarded
and ends in a redirect to the list, or in a re-render of the form with
errors attached. Upstream failures are never swallowed: they become a
form-level `API error: <status>` message.
"""

import logging
from typing import List, Optional

import httpx

from .client import StudentApiClient, StudentApiError
from .forms import FieldError, FormResult, StudentForm

logger = logging.getLogger("student_records.frontend")

LIST_URL = "/"


def _api_error(status_code: int) -> FieldError:
    return FieldError("", f"API error: {status_code}")


async def _forward(call, form: StudentForm) -> FormResult:
    try:
        resp: httpx.Response = await call
    except StudentApiError as e:
        return FormResult.rerender(form, [_api_error(e.status_code)])
    if not resp.is_success:
        return FormResult.rerender(form, [_api_error(resp.status_code)])
    return FormResult.redirect_to(LIST_URL)


async def list_view(client: StudentApiClient, search: Optional[str] = None, request_id: Optional[str] = None) -> List[dict]:
    return await client.list_students(search, request_id=request_id)


def create_form() -> StudentForm:
    return StudentForm.empty()


async def submit_create(client: StudentApiClient, form: StudentForm, request_id: Optional[str] = None) -> FormResult:
    """Validate locally, then forward as a create call."""
    errors = form.validate()
    if errors:
        return FormResult.rerender(form, errors)
    return await _forward(client.create_student(form.to_payload(), request_id=request_id), form)


async def edit_form(client: StudentApiClient, student_id: int, request_id: Optional[str] = None) -> Optional[StudentForm]:
    """Load the current record into a form, or `None` if it does not exist."""
    record = await client.get_student(student_id, request_id=request_id)
    if record is None:
        return None
    return StudentForm.from_record(record)


async def submit_edit(client: StudentApiClient, student_id: int, form: StudentForm, request_id: Optional[str] = None) -> FormResult:
    """Check identity, validate locally, then forward as an update call."""
    if form.id != student_id:
        logger.info("edit rejected: route id %s != form id %s", student_id, form.id)
        return FormResult.rerender(form, [FieldError("", "Route id and form id must match.")], status_code=400)
    errors = form.validate()
    if errors:
        return FormResult.rerender(form, errors)
    return await _forward(client.update_student(student_id, form.to_payload(), request_id=request_id), form)


async def delete_confirm(client: StudentApiClient, student_id: int, request_id: Optional[str] = None) -> Optional[dict]:
    return await client.get_student(student_id, request_id=request_id)


async def submit_delete(client: StudentApiClient, student_id: int, request_id: Optional[str] = None) -> FormResult:
    """Delete, or re-fetch and show the record with the failure inline."""
    try:
        resp = await client.delete_student(student_id, request_id=request_id)
        status = resp.status_code
        if resp.is_success:
            return FormResult.redirect_to(LIST_URL)
    except StudentApiError as e:
        status = e.status_code
    record = await client.get_student(student_id, request_id=request_id)
    if record is None:
        return FormResult.rerender(None, [_api_error(status)], status_code=404)
    return FormResult.rerender(StudentForm.from_record(record), [_api_error(status)])
