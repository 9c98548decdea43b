import json

import pytest

from studentsapi.api import create_app, main, update_student_info
from studentsapi.db import StudentStore
from studentsapi.docs import swagger_spec
from studentsapi.schemas import Student


@pytest.fixture
def store(tmp_path):
    s = StudentStore(str(tmp_path / "student.db"))
    yield s
    s.close()


@pytest.fixture
def client(store):
    return create_app(store).test_client()


def _new(client, **overrides):
    body = {
        "name": "Ana",
        "cpf": "cpf-a",
        "email": "ana@example.com",
        "age": 20,
        "active": True,
    }
    body.update(overrides)
    return client.post("/students", json=body)


def test_update_student_info_merges_non_empty_fields():
    current = Student(id=3, name="Old", cpf="c1", email="old@example.com", age=30, active=True)
    received = Student(name="New", age=0, active=False)
    merged = update_student_info(received, current)
    assert merged.name == "New"
    assert merged.cpf == "c1"
    assert merged.email == "old@example.com"
    assert merged.age == 30
    assert merged.active is False
    assert merged.id == 3
    assert current.name == "Old"


def test_create_and_list(client):
    response = _new(client)
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "create student"
    listing = client.get("/students")
    assert listing.status_code == 200
    items = listing.get_json()
    assert len(items) == 1
    assert items[0]["name"] == "Ana"
    assert items[0]["email"] == "ana@example.com"
    assert items[0]["registration"] is True
    assert items[0]["id"] >= 1


def test_list_empty(client):
    assert client.get("/students").get_json() == []


def test_create_missing_active_is_rejected(client):
    response = client.post(
        "/students", json={"name": "Ana", "cpf": "c", "email": "a@example.com", "age": 3}
    )
    assert response.status_code == 400
    assert response.get_data(as_text=True) == "Error validating student"
    assert client.get("/students").get_json() == []


def test_create_empty_body_fails_validation(client):
    response = client.post("/students")
    assert response.status_code == 400
    assert response.get_data(as_text=True) == "Error validating student"


def test_create_malformed_json(client):
    response = client.post(
        "/students", data="{not json", content_type="application/json"
    )
    assert response.status_code == 400
    assert "message" in response.get_json()


def test_create_wrong_type(client):
    response = _new(client, age="old")
    assert response.status_code == 400


def test_get_student_bad_id(client):
    response = client.get("/students/abc")
    assert response.status_code == 500
    assert response.get_data(as_text=True) == "failed to get student ID"


def test_get_student_missing(client):
    response = client.get("/students/42")
    assert response.status_code == 404
    assert response.get_data(as_text=True) == "student not found"


def test_get_student_found(client, store):
    _new(client)
    student_id = store.get_students()[0].id
    response = client.get(f"/students/{student_id}")
    assert response.status_code == 200
    data = response.get_json()
    assert data["ID"] == student_id
    assert data["name"] == "Ana"
    assert data["DeletedAt"] is None


def test_update_student(client, store):
    _new(client)
    student_id = store.get_students()[0].id
    response = client.put(f"/students/{student_id}", json={"name": "Bia", "registration": True})
    assert response.status_code == 200
    assert response.get_json()["name"] == "Bia"
    assert response.get_json()["email"] == "ana@example.com"
    assert store.get_student(student_id).name == "Bia"


def test_update_missing(client):
    response = client.put("/students/7", json={"name": "Bia"})
    assert response.status_code == 404
    assert response.get_data(as_text=True) == "student not found"


def test_update_bad_id(client):
    response = client.put("/students/1x", json={"name": "Bia"})
    assert response.status_code == 500
    assert response.get_data(as_text=True) == "failed to get student ID"


def test_delete_student(client, store):
    _new(client)
    student_id = store.get_students()[0].id
    response = client.delete(f"/students/{student_id}")
    assert response.status_code == 200
    assert response.get_json()["ID"] == student_id
    assert client.get(f"/students/{student_id}").status_code == 404
    assert client.get("/students").get_json() == []


def test_delete_missing(client):
    response = client.delete("/students/5")
    assert response.status_code == 404


def test_swagger_doc(client):
    response = client.get("/swagger/doc.json")
    assert response.status_code == 200
    assert json.loads(response.get_data(as_text=True)) == swagger_spec()


def test_store_failure_on_list(tmp_path):
    broken = StudentStore(str(tmp_path / "x.db"))
    app_client = create_app(broken).test_client()
    broken.close()
    response = app_client.get("/students")
    assert response.status_code == 404
    assert response.get_data(as_text=True) == "Failed to get students"


def test_store_failure_on_create(tmp_path):
    broken = StudentStore(str(tmp_path / "y.db"))
    app_client = create_app(broken).test_client()
    broken.close()
    response = _new(app_client)
    assert response.status_code == 500
    assert response.get_data(as_text=True) == "Error to create student"


def test_main_rejects_bad_port():
    with pytest.raises(SystemExit) as info:
        main(["--port", "abc"])
    assert info.value.code == 2