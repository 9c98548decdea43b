import sqlite3

import pytest

from studentsapi.db import RecordNotFoundError, StudentStore, open_store
from studentsapi.schemas import Student


@pytest.fixture
def store():
    with open_store(":memory:") as opened:
        yield opened


def _student(name="Ana", active=True):
    return Student(name=name, cpf="000", email="ana@example.com", age=20, active=active)


def test_add_assigns_ids_and_timestamps(store):
    first = store.add_student(_student("Ana"))
    second = store.add_student(_student("Bia"))
    assert second.id > first.id > 0
    assert first.created_at is not None
    assert first.created_at == first.updated_at


def test_get_student_round_trip(store):
    added = store.add_student(_student())
    assert store.get_student(added.id) == added


def test_get_missing_student_raises(store):
    with pytest.raises(RecordNotFoundError):
        store.get_student(1)


def test_get_students_lists_in_id_order(store):
    names = ["Ana", "Bia", "Caio"]
    for name in names:
        store.add_student(_student(name))
    assert [s.name for s in store.get_students()] == names


def test_filtered_students(store):
    store.add_student(_student("Ana", active=True))
    store.add_student(_student("Bia", active=False))
    assert [s.name for s in store.get_filtered_students(False)] == ["Bia"]
    assert [s.name for s in store.get_filtered_students(True)] == ["Ana"]


def test_update_student_saves_fields(store):
    added = store.add_student(_student())
    changed = store.update_student(
        Student(**{**added.__dict__, "name": "Nova", "age": 33})
    )
    loaded = store.get_student(added.id)
    assert loaded.name == "Nova"
    assert loaded.age == 33
    assert loaded.created_at == added.created_at
    assert loaded.updated_at == changed.updated_at >= added.updated_at


def test_update_without_id_inserts(store):
    saved = store.update_student(_student("Dora"))
    assert saved.id > 0
    assert store.get_student(saved.id).name == "Dora"


def test_delete_is_soft(store):
    kept = store.add_student(_student("Ana"))
    gone = store.add_student(_student("Bia"))
    store.delete_student(gone)
    assert [s.id for s in store.get_students()] == [kept.id]
    with pytest.raises(RecordNotFoundError):
        store.get_student(gone.id)


def test_delete_without_id_raises(store):
    with pytest.raises(ValueError):
        store.delete_student(_student())


def test_data_persists_across_reopen(tmp_path):
    path = str(tmp_path / "students.db")
    with open_store(path) as first:
        added = first.add_student(_student("Eva"))
    with open_store(path) as second:
        assert second.get_student(added.id) == added


def test_open_store_closes_connection():
    with open_store(":memory:") as opened:
        opened.add_student(_student())
    with pytest.raises(sqlite3.ProgrammingError):
        opened.get_students()


def test_store_context_manager_closes():
    with StudentStore(":memory:") as direct:
        assert direct.get_students() == []
    with pytest.raises(sqlite3.ProgrammingError):
        direct.get_students()