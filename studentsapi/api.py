"""HTTP routes for creating, listing, updating and deleting students."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import re
import sqlite3
from collections.abc import Sequence
from typing import Any

from flask import Flask, Response, jsonify, request

from .db import DEFAULT_PATH, RecordNotFoundError, StudentStore
from .docs import swagger_spec
from .request import StudentRequest, ValidationError
from .schemas import Student, new_response

log = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class _BindError(Exception):
    """The request body could not be decoded into the expected shape."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


def _text(status: int, body: str) -> Response:
    return Response(body, status=status, mimetype="text/plain")


def _parse_id(raw: str) -> int | None:
    """Parse a path id the way a strict decimal conversion does, or return None."""
    if not _INT_RE.fullmatch(raw):
        return None
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def _bind_body() -> Any:
    """Decode the JSON request body; an empty body binds to an empty object."""
    raw = request.get_data(cache=True)
    if not raw:
        return {}
    if request.mimetype != "application/json":
        raise _BindError(415, "Unsupported Media Type")
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise _BindError(400, f"Syntax error: {exc}") from exc


def update_student_info(received: Student, student: Student) -> Student:
    """Merge the non-empty fields of ``received`` into ``student``."""
    changes: dict[str, Any] = {}
    if received.name:
        changes["name"] = received.name
    if received.cpf:
        changes["cpf"] = received.cpf
    if received.email:
        changes["email"] = received.email
    if received.age > 0:
        changes["age"] = received.age
    if received.active != student.active:
        changes["active"] = received.active
    return dataclasses.replace(student, **changes)


def create_app(store: StudentStore) -> Flask:
    """Build the application serving the students routes from ``store``."""
    app = Flask(__name__)

    @app.errorhandler(_BindError)
    def _bind_failed(exc: _BindError) -> tuple[Response, int]:
        return jsonify({"message": exc.message}), exc.status

    @app.after_request
    def _log_request(response: Response) -> Response:
        log.info("%s %s %s", request.method, request.path, response.status_code)
        return response

    def _lookup(student_id: int) -> Student | Response:
        try:
            return store.get_student(student_id)
        except RecordNotFoundError:
            return _text(404, "student not found")
        except sqlite3.Error:
            return _text(500, "failed to get student")

    @app.get("/students")
    def get_students() -> Any:
        try:
            students = store.get_students()
        except sqlite3.Error:
            return _text(404, "Failed to get students")
        return jsonify([item.to_dict() for item in new_response(students)])

    @app.post("/students")
    def create_student() -> Any:
        body = _bind_body()
        try:
            student_req = StudentRequest.from_dict(body)
        except (TypeError, ValueError) as exc:
            raise _BindError(400, str(exc)) from exc
        try:
            student_req.validate()
        except ValidationError as exc:
            log.error("[api] error validating struct: %s", exc)
            return _text(400, "Error validating student")
        student = Student(
            name=student_req.name,
            email=student_req.email,
            cpf=student_req.cpf,
            age=student_req.age,
            active=bool(student_req.active),
        )
        try:
            store.add_student(student)
        except sqlite3.Error:
            return _text(500, "Error to create student")
        return _text(200, "create student")

    @app.get("/students/<raw_id>")
    def get_student(raw_id: str) -> Any:
        student_id = _parse_id(raw_id)
        if student_id is None:
            return _text(500, "failed to get student ID")
        found = _lookup(student_id)
        if isinstance(found, Response):
            return found
        return jsonify(found.to_dict())

    @app.put("/students/<raw_id>")
    def update_student(raw_id: str) -> Any:
        student_id = _parse_id(raw_id)
        if student_id is None:
            return _text(500, "failed to get student ID")
        body = _bind_body()
        try:
            received = Student.from_dict(body)
        except (TypeError, ValueError) as exc:
            raise _BindError(400, str(exc)) from exc
        found = _lookup(student_id)
        if isinstance(found, Response):
            return found
        student = update_student_info(received, found)
        try:
            store.update_student(student)
        except sqlite3.Error:
            return _text(500, "failed to save student")
        return jsonify(student.to_dict())

    @app.delete("/students/<raw_id>")
    def delete_student(raw_id: str) -> Any:
        student_id = _parse_id(raw_id)
        if student_id is None:
            return _text(500, "failed to get student ID")
        found = _lookup(student_id)
        if isinstance(found, Response):
            return found
        try:
            store.delete_student(found)
        except (sqlite3.Error, ValueError):
            return _text(500, "failed to delete student")
        return jsonify(found.to_dict())

    @app.get("/swagger/doc.json")
    def swagger_doc() -> Any:
        return jsonify(swagger_spec())

    return app


def main(argv: Sequence[str] | None = None) -> int:
    """Run the students API server."""
    parser = argparse.ArgumentParser(description="Serve the students API.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    parser.add_argument("--db", default=DEFAULT_PATH, help="SQLite database file")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    try:
        store = StudentStore(args.db)
    except sqlite3.Error as exc:
        log.critical("failed to initialize SQLite: %s", exc)
        return 1
    try:
        create_app(store).run(host=args.host, port=args.port)
    except OSError as exc:
        log.critical("failed to start server: %s", exc)
        return 1
    finally:
        store.close()
    return 0