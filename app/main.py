"""FastAPI application for the JSON Schema validation service."""

import json
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from jsonschema import SchemaError

from app.routers import schemas, validation
from config.settings import ENVIRONMENT, LOG_LEVEL
from execution.exceptions import SchemaConversionError

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="JSON Schema Validator")

# Include routers
app.include_router(validation.router)
app.include_router(schemas.router)


@app.get("/health")
async def health():
    return {"status": "ok", "environment": ENVIRONMENT}


@app.exception_handler(SchemaConversionError)
async def schema_conversion_error_handler(request: Request, exc: SchemaConversionError):
    """Report schemas that cannot be compiled as a client error."""
    logger.info("Rejected schema at %s: %s", exc.path, exc.message)
    return JSONResponse(status_code=400, content={"detail": str(exc), "path": exc.path})


@app.exception_handler(SchemaError)
async def schema_document_error_handler(request: Request, exc: SchemaError):
    """Stored documents that are not valid JSON Schema are a server-side fault."""
    logger.error("Invalid stored schema document: %s", exc.message)
    return JSONResponse(status_code=500, content={"detail": f"Invalid schema document: {exc.message}"})


@app.exception_handler(json.JSONDecodeError)
async def schema_decode_error_handler(request: Request, exc: json.JSONDecodeError):
    """Stored documents that are not valid JSON are a server-side fault."""
    logger.error("Unreadable stored schema document: %s", exc)
    return JSONResponse(status_code=500, content={"detail": f"Unreadable schema document: {exc.msg}"})
