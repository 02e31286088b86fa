"""Shared dependencies for the FastAPI web layer."""

from fastapi import HTTPException

from execution.schema_validator import load_schema, schema_path_for


def get_stored_schema(name: str) -> dict:
    """Load a stored schema document or raise 404."""
    try:
        path = schema_path_for(name)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Schema '{name}' not found")
    try:
        return load_schema(path)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail=f"Schema '{name}' not found")
