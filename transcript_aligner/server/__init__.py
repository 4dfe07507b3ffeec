"""HTTP API for the aligner (FastAPI app and pydantic models)."""
