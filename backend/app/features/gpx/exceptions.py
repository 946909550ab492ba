"""
Combine errors.

Every error surfaced to callers carries enough context (file name and,
for parse errors, the offending point) to let the user fix or remove the
bad file and retry.
"""

from typing import Optional


class GPXCombineError(Exception):
    """Base combine error."""
    pass


class ValidationError(GPXCombineError):
    """Combine request rejected before any processing (e.g. too few files)."""
    pass


class CombineInProgressError(GPXCombineError):
    """A combine run is already in flight."""
    pass


class CombineCancelledError(GPXCombineError):
    """The in-flight run was stopped by a cancellation request."""
    pass


class InvalidTransitionError(GPXCombineError):
    """File status moved against the Pending -> Reading -> Parsed/Failed order."""
    pass


class FileError(GPXCombineError):
    """Error tied to one source file."""

    kind = "error"

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"{filename}: {reason}")


class ReadError(FileError):
    """I/O or decoding failure while retrieving a file's content."""

    kind = "read_error"


class ParseError(FileError):
    """Malformed document, or a track point with bad coordinates."""

    kind = "parse_error"

    def __init__(self, filename: str, reason: str, position: Optional[int] = None):
        self.position = position
        if position is not None:
            reason = f"track point #{position}: {reason}"
        super().__init__(filename, reason)
