"""SQLite storage for students with soft deletion."""

from __future__ import annotations

import dataclasses
import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from .schemas import Student

log = logging.getLogger(__name__)

DEFAULT_PATH = "student.db"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS students (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TEXT,
    updated_at TEXT,
    deleted_at TEXT,
    name TEXT,
    cpf TEXT,
    email TEXT,
    age INTEGER,
    active INTEGER
);
CREATE INDEX IF NOT EXISTS idx_students_deleted_at ON students(deleted_at);
"""

_COLUMNS = "id, created_at, updated_at, deleted_at, name, cpf, email, age, active"


class RecordNotFoundError(LookupError):
    """No live student has the requested id."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _dump_time(value: datetime | None) -> str | None:
    return None if value is None else value.isoformat()


def _load_time(value: str | None) -> datetime | None:
    return None if value is None else datetime.fromisoformat(value)


def _row_to_student(row: sqlite3.Row) -> Student:
    return Student(
        id=row["id"],
        created_at=_load_time(row["created_at"]),
        updated_at=_load_time(row["updated_at"]),
        deleted_at=_load_time(row["deleted_at"]),
        name=row["name"],
        cpf=row["cpf"],
        email=row["email"],
        age=row["age"],
        active=bool(row["active"]),
    )


def _values(student: Student) -> tuple:
    return (
        student.id,
        _dump_time(student.created_at),
        _dump_time(student.updated_at),
        _dump_time(student.deleted_at),
        student.name,
        student.cpf,
        student.email,
        student.age,
        int(student.active),
    )


class StudentStore:
    """Students kept in an SQLite database file."""

    def __init__(self, path: str = DEFAULT_PATH) -> None:
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        with self._lock, self._conn:
            self._conn.executescript(_SCHEMA)

    def __enter__(self) -> StudentStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def add_student(self, student: Student) -> Student:
        """Insert a student and return it with its id and timestamps set."""
        now = _now()
        created = dataclasses.replace(
            student,
            created_at=student.created_at or now,
            updated_at=student.updated_at or now,
        )
        values = _values(created)
        try:
            with self._lock, self._conn:
                if created.id:
                    cursor = self._conn.execute(
                        f"INSERT INTO students ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                        values,
                    )
                else:
                    cursor = self._conn.execute(
                        f"INSERT INTO students ({_COLUMNS}) "
                        "VALUES (NULL, ?, ?, ?, ?, ?, ?, ?, ?)",
                        values[1:],
                    )
        except sqlite3.Error:
            log.error("Failed to Create student!")
            raise
        log.info("Create student!")
        return dataclasses.replace(created, id=cursor.lastrowid)

    def _query(self, where: str, params: tuple) -> list[Student]:
        with self._lock:
            rows = self._conn.execute(
                f"SELECT {_COLUMNS} FROM students "
                f"WHERE deleted_at IS NULL{where} ORDER BY id",
                params,
            ).fetchall()
        return [_row_to_student(row) for row in rows]

    def get_students(self) -> list[Student]:
        """Return every student that has not been deleted."""
        return self._query("", ())

    def get_filtered_students(self, active: bool) -> list[Student]:
        """Return live students whose active flag matches."""
        return self._query(" AND active = ?", (int(active),))

    def get_student(self, student_id: int) -> Student:
        """Return one live student, raising RecordNotFoundError if there is none."""
        found = self._query(" AND id = ?", (student_id,))
        if not found:
            raise RecordNotFoundError(f"student {student_id} not found")
        return found[0]

    def update_student(self, student: Student) -> Student:
        """Save every field of a student, inserting it when no live row matches."""
        if not student.id:
            return self.add_student(student)
        saved = dataclasses.replace(student, updated_at=_now())
        values = _values(saved)
        with self._lock, self._conn:
            cursor = self._conn.execute(
                "UPDATE students SET created_at = ?, updated_at = ?, deleted_at = ?, "
                "name = ?, cpf = ?, email = ?, age = ?, active = ? "
                "WHERE id = ? AND deleted_at IS NULL",
                values[1:] + (saved.id,),
            )
            if cursor.rowcount == 0:
                self._conn.execute(
                    f"INSERT INTO students ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?) "
                    "ON CONFLICT(id) DO UPDATE SET created_at = excluded.created_at, "
                    "updated_at = excluded.updated_at, deleted_at = excluded.deleted_at, "
                    "name = excluded.name, cpf = excluded.cpf, email = excluded.email, "
                    "age = excluded.age, active = excluded.active",
                    values,
                )
        return saved

    def delete_student(self, student: Student) -> None:
        """Mark a student as deleted; it no longer appears in queries."""
        if not student.id:
            raise ValueError("cannot delete a student without an id")
        with self._lock, self._conn:
            self._conn.execute(
                "UPDATE students SET deleted_at = ? WHERE id = ? AND deleted_at IS NULL",
                (_dump_time(_now()), student.id),
            )

    def close(self) -> None:
        """Close the underlying database connection."""
        self._conn.close()


@contextmanager
def open_store(path: str = DEFAULT_PATH) -> Iterator[StudentStore]:
    """Open a store for the duration of a ``with`` block."""
    store = StudentStore(path)
    try:
        yield store
    finally:
        store.close()