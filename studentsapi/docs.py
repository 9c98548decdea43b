"""The Swagger 2.0 description of the students API."""

from __future__ import annotations

from typing import Any

_JSON = ["application/json"]


def _string(description: str) -> dict[str, Any]:
    return {"description": description, "schema": {"type": "string"}}


def _ref(description: str, name: str) -> dict[str, Any]:
    return {"description": description, "schema": {"$ref": f"#/definitions/{name}"}}


def _id_param() -> dict[str, Any]:
    return {
        "type": "integer",
        "description": "Student ID",
        "name": "id",
        "in": "path",
        "required": True,
    }


def _operation(
    description: str,
    summary: str,
    responses: dict[str, Any],
    parameters: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    operation: dict[str, Any] = {
        "description": description,
        "consumes": list(_JSON),
        "produces": list(_JSON),
        "tags": ["students"],
        "summary": summary,
    }
    if parameters is not None:
        operation["parameters"] = parameters
    operation["responses"] = responses
    return operation


def _properties(**types: str) -> dict[str, Any]:
    return {name: {"type": kind} for name, kind in types.items()}


def swagger_spec() -> dict[str, Any]:
    """Return a fresh copy of the API description."""
    request_properties = _properties(
        active="boolean", age="integer", cpf="string", email="string", name="string"
    )
    request_properties["active"] = {
        "description": "using bool as a pointer to force true/false input",
        "type": "boolean",
    }
    return {
        "schemes": [],
        "swagger": "2.0",
        "info": {"description": "", "title": "", "contact": {}, "version": ""},
        "host": "",
        "basePath": "",
        "paths": {
            "/students": {
                "get": _operation(
                    "Retrieve all student records",
                    "Get all students",
                    {
                        "200": {
                            "description": "OK",
                            "schema": {
                                "type": "array",
                                "items": {"$ref": "#/definitions/schemas.StudentResponse"},
                            },
                        },
                        "404": _string("not found"),
                    },
                ),
                "post": _operation(
                    "Create a new student record",
                    "Create a new student",
                    {
                        "200": _string("create student"),
                        "400": _string("bad request"),
                        "500": _string("internal error"),
                    },
                    [
                        {
                            "description": "Student info",
                            "name": "student",
                            "in": "body",
                            "required": True,
                            "schema": {"$ref": "#/definitions/api.StudentRequest"},
                        }
                    ],
                ),
            },
            "/students/{id}": {
                "get": _operation(
                    "Get a single student record by ID",
                    "Get student by ID",
                    {
                        "200": _ref("OK", "schemas.StudentResponse"),
                        "404": _string("student not found"),
                        "500": _string("internal error"),
                    },
                    [_id_param()],
                ),
                "put": _operation(
                    "Update a student's details by ID",
                    "Update a student",
                    {
                        "200": _ref("OK", "schemas.Student"),
                        "404": _string("student not found"),
                        "500": _string("internal error"),
                    },
                    [
                        _id_param(),
                        {
                            "description": "Student data to update",
                            "name": "student",
                            "in": "body",
                            "required": True,
                            "schema": {"$ref": "#/definitions/schemas.Student"},
                        },
                    ],
                ),
                "delete": _operation(
                    "Delete a student by ID",
                    "Delete a student",
                    {
                        "200": _ref("OK", "schemas.Student"),
                        "404": _string("student not found"),
                        "500": _string("internal error"),
                    },
                    [_id_param()],
                ),
            },
        },
        "definitions": {
            "api.StudentRequest": {"type": "object", "properties": request_properties},
            "schemas.Student": {"type": "object"},
            "schemas.StudentResponse": {
                "type": "object",
                "properties": _properties(
                    age="integer",
                    cpf="string",
                    createdAt="string",
                    deletedAt="string",
                    email="string",
                    id="integer",
                    name="string",
                    registration="boolean",
                    updateAt="string",
                ),
            },
        },
    }