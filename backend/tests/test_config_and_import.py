import pytest

from student_records.config import Settings
from student_records.repositories import InMemoryStudentRepository
from student_records.services import StudentService
from scripts.import_students import import_rows


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv('STUDENT_API_BASE_URL', raising=False)
    monkeypatch.delenv('STUDENT_API_TIMEOUT', raising=False)
    s = Settings()
    assert s.STUDENT_API_BASE_URL == 'http://studentapi:8080/'
    assert s.STUDENT_API_TIMEOUT == 10.0


def test_settings_reject_bad_values(monkeypatch):
    monkeypatch.setenv('STUDENT_API_TIMEOUT', '0')
    with pytest.raises(RuntimeError):
        Settings()
    monkeypatch.setenv('STUDENT_API_TIMEOUT', '5')
    monkeypatch.setenv('STUDENT_API_BASE_URL', 'studentapi:8080')
    with pytest.raises(RuntimeError):
        Settings()


def test_import_rows_skips_invalid():
    repo = InMemoryStudentRepository()
    rows = [
        {'name': 'Alice', 'email': 'alice@x.com', 'phone': '', 'dateOfBirth': '2001-02-03T00:00:00'},
        {'name': '', 'email': 'bad', 'phone': '', 'dateOfBirth': ''},
        {'name': 'Bob', 'email': 'bob@x.com', 'phone': '555', 'dateOfBirth': ''},
    ]
    result = import_rows(StudentService(repo), rows)
    assert result['created'] == 2
    assert result['errors'][0]['line'] == 3
    assert set(result['errors'][0]['errors']) == {'name', 'email'}
    assert [s.name for s in repo.list_ordered()] == ['Alice', 'Bob']
