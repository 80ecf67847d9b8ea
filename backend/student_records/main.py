"""FastAPI application entrypoint for the student record API.

Controllers are intentionally thin: they accept requests, delegate to
`StudentService`, and translate its exceptions into HTTP status codes.

Endpoints implemented:
- GET /api/students[?searchString=]
- GET /api/students/{id}
- POST /api/students
- PUT /api/students/{id}
- DELETE /api/students/{id}
- GET /health
"""

import logging
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import Session

from .config import settings
from .database import create_db_and_tables, get_session
from .repositories import SqlStudentRepository
from .schemas import StudentIn, StudentOut, ValidationProblem, collect_field_errors
from .services import IdentityMismatch, StudentNotFound, StudentService
from .utils.request_log import install_request_logging

app = FastAPI(title="Student Records API")
logger = logging.getLogger("student_records.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

install_request_logging(app, logger)

create_db_and_tables()


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed input as 400 with messages grouped per field."""
    problem = ValidationProblem(errors=collect_field_errors(exc.errors(), skip=1))
    logger.info("validation failed path=%s fields=%s", request.url.path, sorted(problem.errors))
    return JSONResponse(status_code=400, content=problem.model_dump())


def get_student_service(db: Session = Depends(get_session)) -> StudentService:
    """Build the service over the request-scoped SQL repository."""
    return StudentService(SqlStudentRepository(db))


_NOT_FOUND = {404: {"description": "student not found"}}
_BAD_REQUEST = {400: {"model": ValidationProblem, "description": "invalid student or id mismatch"}}


@app.get("/api/students", response_model=List[StudentOut])
def list_students(
    search_string: Optional[str] = Query(default=None, alias="searchString"),
    svc: StudentService = Depends(get_student_service),
):
    """List students ordered by id, optionally filtered by name fragment."""
    return svc.list(search_string)


@app.get("/api/students/{student_id:int}", response_model=StudentOut, responses=_NOT_FOUND)
def get_student(student_id: int, svc: StudentService = Depends(get_student_service)):
    """Return a single student."""
    try:
        return svc.get(student_id)
    except StudentNotFound:
        raise HTTPException(status_code=404, detail="student not found")


@app.post("/api/students", response_model=StudentOut, status_code=201, responses=_BAD_REQUEST)
def create_student(
    payload: StudentIn,
    request: Request,
    response: Response,
    svc: StudentService = Depends(get_student_service),
):
    """Create a student and point `Location` at the new record.

    A client-supplied `id` is ignored; the database assigns one.
    """
    student = svc.create(payload)
    response.headers["Location"] = str(request.url_for("get_student", student_id=student.id))
    return student


@app.put("/api/students/{student_id:int}", status_code=204, responses={**_BAD_REQUEST, **_NOT_FOUND})
def update_student(student_id: int, payload: StudentIn, svc: StudentService = Depends(get_student_service)):
    """Replace name, email, phone and dateOfBirth of an existing student.

    The body `id` must equal the route id.
    """
    try:
        svc.update(student_id, payload)
    except IdentityMismatch as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StudentNotFound:
        raise HTTPException(status_code=404, detail="student not found")
    return Response(status_code=204)


@app.delete("/api/students/{student_id:int}", status_code=204, responses=_NOT_FOUND)
def delete_student(student_id: int, svc: StudentService = Depends(get_student_service)):
    """Delete a student."""
    try:
        svc.delete(student_id)
    except StudentNotFound:
        raise HTTPException(status_code=404, detail="student not found")
    return Response(status_code=204)


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
