"""
Combine-related schemas.

Pydantic models for the combine API.
"""

from pydantic import BaseModel
from typing import List, Optional

from .state import FileStatus, ProcessingState


class FileStatusInfo(BaseModel):
    """Status of one file in the current run."""

    name: str
    ordinal: int
    status: FileStatus
    error: Optional[str] = None


class CombineStatusResponse(BaseModel):
    """Progress of the current (or last) combine run."""

    busy: bool
    progress: int  # 0..100
    files: List[FileStatusInfo] = []
    error: Optional[str] = None
    has_result: bool = False

    @classmethod
    def from_state(cls, state: ProcessingState, has_result: bool = False) -> "CombineStatusResponse":
        return cls(
            busy=state.busy,
            progress=state.progress,
            files=[
                FileStatusInfo(
                    name=ref.name,
                    ordinal=ref.ordinal,
                    status=ref.status,
                    error=ref.error,
                )
                for ref in state.files
            ],
            error=state.error,
            has_result=has_result,
        )


class CancelResponse(BaseModel):
    """Response for a cancellation request."""

    cancelled: bool
