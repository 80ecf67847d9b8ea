"""FastAPI application for the student front end.

Handlers translate browser requests into calls on `StudentApiClient`
(via `actions`) and render the outcome as HTML. The client is created
once in the application lifespan and injected with `get_api_client`.

Routes:
- GET /                         list, optional `searchString`
- GET, POST /students/create
- GET, POST /students/{id}/edit
- GET, POST /students/{id}/delete
- GET /health
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from ..config import settings
from ..utils.request_log import install_request_logging
from . import actions, views
from .client import StudentApiClient, StudentApiError
from .forms import FormResult, StudentForm

logger = logging.getLogger("student_records.frontend")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.api_client = StudentApiClient.from_settings()
    logger.info("student api base url: %s", settings.STUDENT_API_BASE_URL)
    try:
        yield
    finally:
        await app.state.api_client.aclose()


app = FastAPI(title="Student Records", lifespan=lifespan)
install_request_logging(app, logger)


def get_api_client(request: Request) -> StudentApiClient:
    return request.app.state.api_client


def _request_id(request: Request):
    return getattr(request.state, "request_id", None)


def student_form(
    id: str = Form(""),
    name: str = Form(""),
    email: str = Form(""),
    phone: str = Form(""),
    date_of_birth: str = Form("", alias="dateOfBirth"),
) -> StudentForm:
    """Bind posted fields to a `StudentForm`, keeping the raw strings."""
    try:
        form_id = int(id) if id.strip() else None
    except ValueError:
        form_id = None
    return StudentForm(id=form_id, name=name, email=email, phone=phone, date_of_birth=date_of_birth)


@app.exception_handler(StudentApiError)
async def api_error_handler(request: Request, exc: StudentApiError):
    """Reads that fail upstream end in an error page carrying the status."""
    return HTMLResponse(views.render_error(exc.status_code, str(exc)), status_code=502)


def _not_found() -> HTMLResponse:
    return HTMLResponse(views.render_error(404, "Student not found."), status_code=404)


def _form_response(result: FormResult, title: str, action: str) -> Response:
    if result.succeeded:
        return RedirectResponse(result.redirect, status_code=303)
    return HTMLResponse(views.render_form(title, action, result.form, result.errors), status_code=result.status_code)


@app.get("/", response_class=HTMLResponse)
async def index(request: Request, searchString: str = "", client: StudentApiClient = Depends(get_api_client)):
    students = await actions.list_view(client, searchString, request_id=_request_id(request))
    return views.render_list(students, searchString)


@app.get("/students/create", response_class=HTMLResponse)
async def create_page():
    return views.render_form("Create student", "/students/create", actions.create_form(), [])


@app.post("/students/create", response_class=HTMLResponse)
async def create_submit(
    request: Request,
    form: StudentForm = Depends(student_form),
    client: StudentApiClient = Depends(get_api_client),
):
    result = await actions.submit_create(client, form, request_id=_request_id(request))
    return _form_response(result, "Create student", "/students/create")


@app.get("/students/{student_id:int}/edit", response_class=HTMLResponse)
async def edit_page(request: Request, student_id: int, client: StudentApiClient = Depends(get_api_client)):
    form = await actions.edit_form(client, student_id, request_id=_request_id(request))
    if form is None:
        return _not_found()
    return views.render_form("Edit student", f"/students/{student_id}/edit", form, [])


@app.post("/students/{student_id:int}/edit", response_class=HTMLResponse)
async def edit_submit(
    request: Request,
    student_id: int,
    form: StudentForm = Depends(student_form),
    client: StudentApiClient = Depends(get_api_client),
):
    result = await actions.submit_edit(client, student_id, form, request_id=_request_id(request))
    return _form_response(result, "Edit student", f"/students/{student_id}/edit")


@app.get("/students/{student_id:int}/delete", response_class=HTMLResponse)
async def delete_page(request: Request, student_id: int, client: StudentApiClient = Depends(get_api_client)):
    record = await actions.delete_confirm(client, student_id, request_id=_request_id(request))
    if record is None:
        return _not_found()
    return views.render_delete(StudentForm.from_record(record), [])


@app.post("/students/{student_id:int}/delete", response_class=HTMLResponse)
async def delete_submit(request: Request, student_id: int, client: StudentApiClient = Depends(get_api_client)):
    result = await actions.submit_delete(client, student_id, request_id=_request_id(request))
    if result.succeeded:
        return RedirectResponse(result.redirect, status_code=303)
    if result.form is None:
        return _not_found()
    return HTMLResponse(views.render_delete(result.form, result.errors), status_code=result.status_code)


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
