# studentsapi

A small HTTP API for keeping student records in a SQLite database.
Each student has a name, a CPF, an e-mail address, an age and a
registration (active) flag.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
studentsapi
```

By default the server listens on `0.0.0.0`, port 8080, and keeps its data
in `student.db` in the current directory; the table is created on first
start. Options:

| Option   | Default      | Meaning                  |
|----------|--------------|--------------------------|
| `--host` | `0.0.0.0`    | address to listen on     |
| `--port` | `8080`       | port to listen on        |
| `--db`   | `student.db` | SQLite database file     |

The command exits with status 1 if the database cannot be opened or the
server cannot start. Each request is logged with its method, path and
status code.

## Endpoints

| Method | Path                 | What it does                            |
|--------|----------------------|-----------------------------------------|
| GET    | `/students`          | List all students                       |
| POST   | `/students`          | Create a student                        |
| GET    | `/students/<id>`     | Fetch one student                       |
| PUT    | `/students/<id>`     | Update the fields given in the body     |
| DELETE | `/students/<id>`     | Delete a student                        |
| GET    | `/swagger/doc.json`  | The Swagger 2.0 description of the API  |

Creating a student needs every field; a missing or empty one (or an age
that is not above zero, or no `active` flag) gives
`400 Error validating student`. A body that is not empty must be sent
as `application/json`, otherwise the answer is `415`; malformed JSON or a
value of the wrong type gives `400`.

```
curl -X POST localhost:8080/students \
  -H 'Content-Type: application/json' \
  -d '{"name": "Ana", "cpf": "cpf-sample", "email": "ana@example.com", "age": 20, "active": true}'
```

An update changes only the fields that are given and non-empty (an age
only when it is above zero). The registration flag is named
`registration` in responses and update bodies; an update body without it
sets it to false. An id that is not a whole number gives
`500 failed to get student ID`; an unknown id gives `404 student not found`.

The listing returns objects with the keys `id`, `createdAt`, `updateAt`,
`deletedAt`, `name`, `cpf`, `email`, `age` and `registration`. Fetching,
updating and deleting one student return the stored record with the keys
`ID`, `CreatedAt`, `UpdatedAt`, `DeletedAt`, `name`, `cpf`, `email`, `age`
and `registration`.

Deletion is soft: the row stays in the database with a deletion time and
no longer shows up in any query.

## Using it from Python

```python
from studentsapi.api import create_app
from studentsapi.db import open_store

with open_store("student.db") as store:
    create_app(store).run(port=8080)
```

`studentsapi.db.StudentStore` can also be used on its own (it is a
context manager too): `add_student`, `get_students`,
`get_filtered_students`, `get_student`, `update_student` and
`delete_student` work on `studentsapi.schemas.Student` records, and
`get_student` raises `studentsapi.db.RecordNotFoundError` for an unknown
or deleted id. `studentsapi.request.StudentRequest.validate` raises
`studentsapi.request.ValidationError` naming the first missing field.
`studentsapi.docs.swagger_spec()` returns the API description as a
dictionary, and `studentsapi.api.update_student_info` merges an update
into a stored record.

## What it does not do

Only the JSON description is served under `/swagger/`; there is no
interactive Swagger UI page. There is no authentication, and the
active-flag filter of the store is not exposed as an HTTP route.