"""
Combine module.

Usage:
    from app.features.combine import ProcessingCoordinator, PathFileSource

    coordinator = ProcessingCoordinator()
    document = await coordinator.combine([PathFileSource("a.gpx"), PathFileSource("b.gpx")])

Components:
- ProcessingCoordinator: Sequential, fail-fast combine runner
- ProcessingState / FileStatus / FileReference: Per-file state machine
- FileSelection: Reorderable list of selected files
- PathFileSource / UploadFileSource / TextFileSource: Readable file sources
"""

from .coordinator import ProcessingCoordinator
from .selection import FileSelection
from .sources import FileSource, PathFileSource, UploadFileSource, TextFileSource
from .state import FileStatus, FileReference, ProcessingState, percent
from .schemas import CombineStatusResponse, FileStatusInfo, CancelResponse

__all__ = [
    # Services
    "ProcessingCoordinator",
    "FileSelection",
    # Sources
    "FileSource",
    "PathFileSource",
    "UploadFileSource",
    "TextFileSource",
    # State
    "FileStatus",
    "FileReference",
    "ProcessingState",
    "percent",
    # Schemas
    "CombineStatusResponse",
    "FileStatusInfo",
    "CancelResponse",
]
