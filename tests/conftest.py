"""Shared test fixtures for the schema validator test suite."""

import json

import pytest


@pytest.fixture(autouse=True)
def set_test_environment(monkeypatch):
    """Ensure all tests run with ENVIRONMENT=test."""
    monkeypatch.setenv("ENVIRONMENT", "test")


@pytest.fixture
def person_schema():
    """Return an object schema with one required and one optional field."""
    return {
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "age": {"type": "number"},
        },
        "required": ["name"],
    }


@pytest.fixture
def nested_schema():
    """Return a schema exercising nested objects, arrays and nullables."""
    return {
        "type": "object",
        "properties": {
            "user": {
                "type": "object",
                "properties": {
                    "email": {"type": "string", "format": "email"},
                    "nickname": {"type": ["string", "null"]},
                },
                "required": ["email"],
            },
            "tags": {"type": "array", "items": {"type": "string"}},
        },
        "required": ["user"],
    }


@pytest.fixture
def schemas_dir(monkeypatch, tmp_path):
    """Point SCHEMAS_DIR at a temporary directory holding sample documents."""
    import execution.schema_validator as sv

    documents = {
        "person": {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "age": {"type": "integer"},
            },
            "required": ["name"],
        },
        "tags": {"type": "array", "items": {"type": "string"}},
        "broken": {"type": "array"},
    }
    for name, document in documents.items():
        (tmp_path / f"{name}.schema.json").write_text(json.dumps(document), encoding="utf-8")
    (tmp_path / "notes.txt").write_text("not a schema", encoding="utf-8")

    monkeypatch.setattr(sv, "SCHEMAS_DIR", tmp_path)
    return tmp_path
