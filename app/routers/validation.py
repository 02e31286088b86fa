"""Validation of values against inline JSON Schema documents."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.models.validation import ValidateRequest
from execution.schema_validator import run_validation

router = APIRouter(prefix="/api/v1", tags=["validation"])


@router.post("/validate")
async def validate(body: ValidateRequest):
    """Compile the given schema and validate the given value against it."""
    report = run_validation(body.data, body.json_schema)
    return JSONResponse(content=report)
