"""FastAPI application exposing the aligner over HTTP.

WHY: Correction tools (web editors, n8n flows, caption services) need to
align transcripts without shelling out to the CLI. FastAPI provides
request validation and OpenAPI documentation for free.

HOW: POST /alignments runs extraction, parsing, alignment and
reconstruction in one request and returns the structured result plus any
requested rendered formats. The endpoint is a plain ``def`` so FastAPI
runs the CPU-bound alignment in its threadpool instead of the event loop.

RULES:
- Error responses use a consistent ErrorResponse schema
- TranscriptValidationError → 422, AlignmentCapacityError → 413
- Alignment is synchronous and stateless; no job store is needed
"""

from __future__ import annotations

import logging
from typing import Dict, List

from fastapi import FastAPI, HTTPException

from transcript_aligner import __version__
from transcript_aligner.config import API_HOST, API_PORT, INHERIT_SOURCE_SPEAKERS, MAX_ALIGNMENT_WORDS
from transcript_aligner.core.alignment import AlignmentCapacityError
from transcript_aligner.core.extraction import TranscriptValidationError, extract_source
from transcript_aligner.core.parsing import parse_corrected_text
from transcript_aligner.core.pipeline import align_transcript
from transcript_aligner.formatters import FORMATTERS
from transcript_aligner.server.models import (
    AlignmentRequest,
    AlignmentResponse,
    ErrorResponse,
    FormatInfo,
    HealthResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Transcript Aligner API",
    description=(
        "Transfer word-level timing from a timestamped machine transcript "
        "onto corrected plain text. Submit both, receive the corrected "
        "transcript with word and paragraph timing."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Endpoints: Alignments
# ---------------------------------------------------------------------------


@app.post(
    "/alignments",
    response_model=AlignmentResponse,
    tags=["alignments"],
    summary="Align corrected text to a machine transcript",
    description=(
        "Validates the machine transcript, parses the corrected text, aligns "
        "the two word sequences and transfers timing. Rendered outputs are "
        "included for each format listed in 'formats'."
    ),
    responses={
        413: {"model": ErrorResponse, "description": "Transcript exceeds the word limit"},
        422: {"model": ErrorResponse, "description": "Invalid machine transcript"},
    },
)
def create_alignment(request: AlignmentRequest) -> AlignmentResponse:
    try:
        source = extract_source(request.transcript)
    except TranscriptValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    corrected = parse_corrected_text(request.corrected_text)
    max_words = request.max_words if request.max_words is not None else MAX_ALIGNMENT_WORDS
    inherit = (
        request.inherit_speakers
        if request.inherit_speakers is not None
        else INHERIT_SOURCE_SPEAKERS
    )

    try:
        transcript = align_transcript(
            source, corrected, max_words=max_words, inherit_speakers=inherit,
        )
    except AlignmentCapacityError as exc:
        logger.warning("Rejected alignment request: %s", exc)
        raise HTTPException(status_code=413, detail=str(exc))

    outputs: Dict[str, str] = {}
    for fmt in request.formats or []:
        formatter = FORMATTERS[fmt.value]()
        rendered = formatter.format(transcript)
        if rendered:
            outputs[fmt.value] = rendered[0].content

    body = transcript.to_dict()
    return AlignmentResponse(
        words=body["words"],
        paragraphs=body["paragraphs"],
        text=body["text"],
        stats=transcript.stats.to_dict(),
        outputs=outputs,
    )


# ---------------------------------------------------------------------------
# Endpoints: Formats
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available output formats",
)
async def list_formats() -> List[FormatInfo]:
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        result.append(FormatInfo(key=key, name=formatter.name, suffix=formatter.suffix))
    return result


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the transcript-aligner-api console script."""
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)
