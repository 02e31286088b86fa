"""Central configuration loader for the schema validation service."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Base paths
PROJECT_ROOT = Path(__file__).parent.parent
SCHEMAS_DIR = Path(os.getenv("SCHEMAS_DIR", str(PROJECT_ROOT / "config" / "schemas")))

# Environment
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Check stored schema documents against the JSON Schema 2020-12 meta-schema
# before compiling them.
CHECK_SCHEMA_DOCUMENTS = os.getenv("CHECK_SCHEMA_DOCUMENTS", "true").lower() in ("true", "1", "yes")
