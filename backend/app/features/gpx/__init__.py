"""
GPX file handling module.

Usage:
    from app.features.gpx import GPXParserService, TrackAssembler, GPXSerializer

Components:
- TrackPoint / Segment / Track: track value objects
- GPXParserService: Parse GPX text into track points
- TrackAssembler: One single-segment track per source file
- GPXSerializer: Render tracks into one GPX document (gpxpy)
- Errors: ValidationError, ReadError, ParseError, ...
"""

from .models import TrackPoint, Segment, Track
from .parser import GPXParserService
from .assembler import TrackAssembler
from .serializer import GPXSerializer
from .exceptions import (
    GPXCombineError,
    ValidationError,
    CombineInProgressError,
    CombineCancelledError,
    InvalidTransitionError,
    FileError,
    ReadError,
    ParseError,
)

__all__ = [
    # Models
    "TrackPoint",
    "Segment",
    "Track",
    # Services
    "GPXParserService",
    "TrackAssembler",
    "GPXSerializer",
    # Errors
    "GPXCombineError",
    "ValidationError",
    "CombineInProgressError",
    "CombineCancelledError",
    "InvalidTransitionError",
    "FileError",
    "ReadError",
    "ParseError",
]
