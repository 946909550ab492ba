"""
Combine Routes

Endpoints for combining uploaded GPX files and tracking progress.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import Response

from app.config import settings
from app.features.combine import (
    CancelResponse,
    CombineStatusResponse,
    ProcessingCoordinator,
    UploadFileSource,
)
from app.features.gpx.exceptions import (
    CombineCancelledError,
    CombineInProgressError,
    ParseError,
    ReadError,
    ValidationError,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# One coordinator per process: runs are serialized by its busy flag
_coordinator = ProcessingCoordinator()


def get_coordinator() -> ProcessingCoordinator:
    return _coordinator


def _document_response(document: str) -> Response:
    return Response(
        content=document,
        media_type=settings.output_media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{settings.output_filename}"'
        },
    )


def _validate_upload(file: UploadFile) -> None:
    if not file.filename or not file.filename.lower().endswith('.gpx'):
        raise HTTPException(status_code=400, detail="Only .gpx files are allowed")

    if file.size is not None:
        if file.size == 0:
            raise HTTPException(status_code=400, detail=f"File is empty: {file.filename}")
        if file.size > settings.max_file_size_bytes:
            raise HTTPException(
                status_code=400,
                detail=f"File too large (max {settings.max_file_size_mb}MB): {file.filename}"
            )


@router.post("", response_class=Response)
async def combine_gpx(
    files: List[UploadFile] = File(...),
    coordinator: ProcessingCoordinator = Depends(get_coordinator)
):
    """
    Combine uploaded GPX files into one document.

    Files become tracks in upload order. Returns the combined GPX
    as an attachment.
    """
    for file in files:
        _validate_upload(file)

    sources = [UploadFileSource(file) for file in files]

    try:
        document = await coordinator.combine(sources)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (CombineInProgressError, CombineCancelledError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ReadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ParseError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return _document_response(document)


@router.get("/status", response_model=CombineStatusResponse)
async def get_status(coordinator: ProcessingCoordinator = Depends(get_coordinator)):
    """Get progress and per-file status of the current (or last) run."""
    return CombineStatusResponse.from_state(
        coordinator.state,
        has_result=coordinator.document is not None
    )


@router.get("/result", response_class=Response)
async def get_result(coordinator: ProcessingCoordinator = Depends(get_coordinator)):
    """Download the combined document of the last successful run."""
    if coordinator.document is None:
        raise HTTPException(status_code=404, detail="No combined GPX available")
    return _document_response(coordinator.document)


@router.post("/cancel", response_model=CancelResponse)
async def cancel_combine(coordinator: ProcessingCoordinator = Depends(get_coordinator)):
    """Stop the in-flight run before its next file."""
    return CancelResponse(cancelled=coordinator.cancel())
