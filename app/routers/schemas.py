"""Stored schema routes: list schemas and validate against one by name."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.dependencies import get_stored_schema
from app.models.validation import ValidateStoredRequest
from execution.schema_validator import list_schemas, run_validation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["schemas"])


@router.get("/schemas")
async def get_schemas():
    """List the names of the stored schema documents."""
    return JSONResponse(content={"schemas": list_schemas()})


@router.post("/schemas/{name}/validate")
async def validate_with_stored_schema(name: str, body: ValidateStoredRequest):
    """Validate a value against a stored schema document."""
    schema = get_stored_schema(name)
    report = run_validation(body.data, schema)
    logger.info("Validated against '%s': valid=%s", name, report["valid"])
    return JSONResponse(content=report)
