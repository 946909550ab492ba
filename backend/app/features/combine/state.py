"""
Processing state for a combine run.

Each selected file moves through a small state machine:

    PENDING -> READING -> PARSED
                       -> FAILED

PARSED and FAILED are terminal. Any other move raises
InvalidTransitionError, so a status never regresses.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from app.features.gpx.exceptions import InvalidTransitionError

from .sources import FileSource

logger = logging.getLogger(__name__)


class FileStatus(str, Enum):
    """Per-file processing status."""
    PENDING = "pending"
    READING = "reading"
    PARSED = "parsed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (FileStatus.PARSED, FileStatus.FAILED)


ALLOWED_TRANSITIONS: Dict[FileStatus, Tuple[FileStatus, ...]] = {
    FileStatus.PENDING: (FileStatus.READING,),
    FileStatus.READING: (FileStatus.PARSED, FileStatus.FAILED),
    FileStatus.PARSED: (),
    FileStatus.FAILED: (),
}


@dataclass
class FileReference:
    """A selected file and its place in the combine order."""
    name: str
    ordinal: int
    source: FileSource
    status: FileStatus = FileStatus.PENDING
    error: Optional[str] = None


def percent(done: int, total: int) -> int:
    """Integer percentage, rounded half-up (1/8 -> 13)."""
    if total <= 0:
        return 0
    return (200 * done + total) // (2 * total)


StateListener = Callable[["ProcessingState"], None]


class ProcessingState:
    """
    Status of every file in one run, plus run-level flags.

    Owned by ProcessingCoordinator. Listeners are called after every
    change, so a UI can render status and progress without polling.
    """

    def __init__(self, sources: Sequence[FileSource] = ()):
        self.files: Tuple[FileReference, ...] = tuple(
            FileReference(name=source.name, ordinal=i, source=source)
            for i, source in enumerate(sources)
        )
        self.progress: int = 0
        self.busy: bool = False
        self.error: Optional[str] = None
        self._listeners: List[StateListener] = []

    @property
    def total(self) -> int:
        return len(self.files)

    @property
    def parsed_count(self) -> int:
        return sum(1 for f in self.files if f.status == FileStatus.PARSED)

    @property
    def terminal_count(self) -> int:
        return sum(1 for f in self.files if f.status.is_terminal)

    def statuses(self) -> Dict[int, FileStatus]:
        """Mapping of file ordinal to status."""
        return {f.ordinal: f.status for f in self.files}

    def subscribe(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def transition(
        self,
        ordinal: int,
        status: FileStatus,
        error: Optional[str] = None
    ) -> FileReference:
        """
        Move one file to a new status.

        Progress is recomputed after terminal moves. Only parsed files
        count toward it, so a run reaches 100 only when every file parsed.

        Raises:
            InvalidTransitionError: If the move is not allowed
        """
        ref = self.files[ordinal]
        if status not in ALLOWED_TRANSITIONS[ref.status]:
            raise InvalidTransitionError(
                f"{ref.name}: {ref.status.value} -> {status.value} not allowed"
            )

        ref.status = status
        if error is not None:
            ref.error = error
        logger.debug(f"{ref.name} [{ordinal}] -> {status.value}")

        if status.is_terminal:
            # Never decreases: parsed count only grows
            self.progress = max(self.progress, percent(self.parsed_count, self.total))

        self.notify()
        return ref

    def set_busy(self, busy: bool) -> None:
        self.busy = busy
        self.notify()

    def fail(self, error: str) -> None:
        """Record the error that ended the run."""
        self.error = error
        self.notify()

    def notify(self) -> None:
        for listener in self._listeners:
            listener(self)

    def __repr__(self):
        return f"<ProcessingState {self.terminal_count}/{self.total} progress={self.progress}>"
