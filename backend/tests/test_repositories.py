import pytest
from sqlmodel import Session

from student_records import models
from student_records.repositories import InMemoryStudentRepository, SqlStudentRepository


@pytest.fixture(params=['sql', 'memory'])
def repo(request, engine):
    if request.param == 'memory':
        yield InMemoryStudentRepository()
        return
    with Session(engine) as session:
        yield SqlStudentRepository(session)


def _add(repo, name, email='s@x.com'):
    return repo.add(models.Student(name=name, email=email))


def test_add_assigns_increasing_ids(repo):
    a = _add(repo, 'Alice')
    b = _add(repo, 'Bob')
    assert (a.id, b.id) == (1, 2)
    assert repo.get(1).name == 'Alice'


def test_add_ignores_preset_id(repo):
    s = repo.add(models.Student(id=50, name='Alice', email='a@x.com'))
    assert s.id == 1
    assert repo.get(50) is None


def test_list_ordered_and_filtered(repo):
    for name in ('Zed', 'Alice', 'Malia'):
        _add(repo, name)
    assert [s.name for s in repo.list_ordered()] == ['Zed', 'Alice', 'Malia']
    assert [s.name for s in repo.list_by_name('li')] == ['Alice', 'Malia']
    assert repo.list_by_name('qq') == []


def test_update_and_delete(repo):
    s = _add(repo, 'Alice')
    s.phone = '555'
    repo.update(s)
    assert repo.get(s.id).phone == '555'
    repo.delete(repo.get(s.id))
    assert repo.get(s.id) is None
    assert repo.list_ordered() == []


def test_deleted_ids_are_not_reused(repo):
    _add(repo, 'Alice')
    b = _add(repo, 'Bob')
    repo.delete(repo.get(b.id))
    c = _add(repo, 'Carol')
    assert c.id == 3


def test_memory_repo_returns_copies():
    repo = InMemoryStudentRepository()
    s = _add(repo, 'Alice')
    s.name = 'Changed'
    assert repo.get(s.id).name == 'Alice'


def test_memory_repo_name_match_is_case_sensitive():
    repo = InMemoryStudentRepository()
    _add(repo, 'Alice')
    assert repo.list_by_name('alice') == []
    assert len(repo.list_by_name('Ali')) == 1
