"""Format mode API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from models.format import (
    EditsRequest,
    EditsResponse,
    FormatRequest,
    FormatResponse,
    OutputResponse,
)
from services.edit_generator import EditGenerator, InvalidInputError
from services.format_service import (
    DuplicateRequestError,
    FormatCancelledError,
    FormatterError,
    get_format_service,
)

router = APIRouter()
edit_generator = EditGenerator()


@router.post("", response_model=FormatResponse)
async def format_document(request: FormatRequest) -> FormatResponse:
    """Format a document and return the edits to apply"""
    service = get_format_service()

    try:
        return await service.format_document(request)
    except (FormatCancelledError, DuplicateRequestError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    except FormatterError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/edits", response_model=EditsResponse)
async def compute_edits(request: EditsRequest) -> EditsResponse:
    """Compute edits between an original and a formatted buffer"""
    try:
        edits = edit_generator.compute_edits(request.original, request.formatted)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return EditsResponse(edits=edits, edit_count=len(edits))


@router.post("/{request_id}/cancel")
async def cancel_format(request_id: str) -> dict[str, Any]:
    """Cancel a running format request"""
    if not get_format_service().cancel(request_id):
        raise HTTPException(status_code=404, detail=f"No running request '{request_id}'")

    return {"status": "success", "message": "Cancellation requested"}


@router.get("/output", response_model=OutputResponse)
async def get_output() -> OutputResponse:
    """Get the formatter's last diagnostic output"""
    channel = get_format_service().output_channel
    return OutputResponse(lines=channel.lines, visible=channel.visible)
