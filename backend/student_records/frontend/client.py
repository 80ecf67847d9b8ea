"""Outbound HTTP client for the student record API.

`StudentApiClient` wraps a single `httpx.AsyncClient` bound to the API's
base address. The front end builds one per process and injects it into
its handlers. Nothing is retried or cached: every call is one round trip
and a failure surfaces to the caller exactly once.
"""

import logging
import time
from typing import List, Optional

import httpx

from ..config import settings

logger = logging.getLogger("student_records.client")

STUDENTS_PATH = "api/students"


class StudentApiError(Exception):
    """The record API was unreachable or answered with an unexpected status."""
    def __init__(self, status_code: int, message: str = ""):
        super().__init__(message or f"API error: {status_code}")
        self.status_code = status_code


class StudentApiClient:
    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    @classmethod
    def from_settings(cls) -> "StudentApiClient":
        """Build a client bound to `settings.STUDENT_API_BASE_URL`."""
        return cls(httpx.AsyncClient(
            base_url=settings.STUDENT_API_BASE_URL,
            timeout=settings.STUDENT_API_TIMEOUT,
        ))

    async def aclose(self) -> None:
        await self.http.aclose()

    async def _send(self, method: str, url: str, request_id: Optional[str] = None, **kwargs) -> httpx.Response:
        headers = {"X-Request-ID": request_id} if request_id else None
        started = time.perf_counter()
        try:
            resp = await self.http.request(method, url, headers=headers, **kwargs)
        except httpx.RequestError as exc:
            logger.warning("upstream unreachable %s %s: %s", method, url, exc)
            raise StudentApiError(503, f"API unreachable: {exc.__class__.__name__}") from exc
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        if resp.is_success:
            logger.info("upstream %s %s -> %s (%sms)", method, url, resp.status_code, elapsed_ms)
        else:
            logger.warning("upstream %s %s -> %s (%sms)", method, url, resp.status_code, elapsed_ms)
        return resp

    async def list_students(self, search: Optional[str] = None, request_id: Optional[str] = None) -> List[dict]:
        """Fetch the student list; a blank `search` requests everything."""
        params = {"searchString": search} if search and search.strip() else None
        resp = await self._send("GET", STUDENTS_PATH, request_id, params=params)
        if not resp.is_success:
            raise StudentApiError(resp.status_code)
        return resp.json() or []

    async def get_student(self, student_id: int, request_id: Optional[str] = None) -> Optional[dict]:
        """Fetch one student, or `None` when the API reports 404."""
        resp = await self._send("GET", f"{STUDENTS_PATH}/{student_id}", request_id)
        if resp.status_code == 404:
            return None
        if not resp.is_success:
            raise StudentApiError(resp.status_code)
        return resp.json()

    async def create_student(self, payload: dict, request_id: Optional[str] = None) -> httpx.Response:
        return await self._send("POST", STUDENTS_PATH, request_id, json=payload)

    async def update_student(self, student_id: int, payload: dict, request_id: Optional[str] = None) -> httpx.Response:
        return await self._send("PUT", f"{STUDENTS_PATH}/{student_id}", request_id, json=payload)

    async def delete_student(self, student_id: int, request_id: Optional[str] = None) -> httpx.Response:
        return await self._send("DELETE", f"{STUDENTS_PATH}/{student_id}", request_id)
