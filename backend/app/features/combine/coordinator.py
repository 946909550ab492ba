"""
Processing Coordinator

Drives a combine run:
- Validates the request (at least two files, no run in flight)
- Reads and parses files strictly in order, one await per file
- Tracks per-file status and progress in a ProcessingState
- Stops at the first read or parse failure
- Assembles and serializes the combined document on success

This is the main entry point for combining GPX files.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from app.config import settings
from app.features.gpx import (
    GPXParserService,
    GPXSerializer,
    TrackAssembler,
    TrackPoint,
)
from app.features.gpx.exceptions import (
    CombineCancelledError,
    CombineInProgressError,
    FileError,
    GPXCombineError,
    ParseError,
    ReadError,
    ValidationError,
)

from .selection import FileSelection
from .sources import FileSource
from .state import FileReference, FileStatus, ProcessingState, StateListener

logger = logging.getLogger(__name__)


class ProcessingCoordinator:
    """
    Sequential combine runner.

    One instance serves one user (or one API process). The busy flag
    serializes runs: a second combine() while one is in flight is
    rejected, not queued.

    Usage:
        coordinator = ProcessingCoordinator()
        coordinator.subscribe(lambda state: print(state.progress))
        document = await coordinator.combine([source_a, source_b])
    """

    def __init__(
        self,
        parser: Optional[GPXParserService] = None,
        assembler: Optional[TrackAssembler] = None,
        serializer: Optional[GPXSerializer] = None,
        min_files: Optional[int] = None,
    ):
        self.parser = parser or GPXParserService()
        self.assembler = assembler or TrackAssembler()
        self.serializer = serializer or GPXSerializer()
        self.min_files = min_files or settings.min_files

        self._state = ProcessingState()
        self._busy = False
        self._cancel_requested = False
        self._document: Optional[str] = None
        self._listeners: List[StateListener] = []

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def state(self) -> ProcessingState:
        """State of the current (or last) run."""
        return self._state

    @property
    def progress(self) -> int:
        return self._state.progress

    @property
    def document(self) -> Optional[str]:
        """Combined document of the last successful run."""
        return self._document

    @property
    def last_error(self) -> Optional[str]:
        return self._state.error

    def statuses(self) -> dict:
        return self._state.statuses()

    def subscribe(self, listener: StateListener) -> None:
        """Call `listener(state)` after every status or progress change."""
        self._listeners.append(listener)
        self._state.subscribe(listener)

    # =========================================================================
    # Operations
    # =========================================================================

    async def combine(self, ordered_files: Iterable[FileSource]) -> str:
        """
        Combine files into one GPX document, one track per file.

        Args:
            ordered_files: Readable sources in final track order.
                The order is read once; later changes do not affect the run.

        Returns:
            Combined GPX text (also kept in `document`)

        Raises:
            ValidationError: Fewer than `min_files` files (no state change)
            CombineInProgressError: A run is already in flight (no state change)
            ReadError: A file could not be read (run aborted)
            ParseError: A file is not valid GPX (run aborted)
            CombineCancelledError: cancel() was called (run stopped between files
                or before assembly)
        """
        files = tuple(ordered_files)
        self._validate(files)

        # Set before the first await so a concurrent call sees it
        self._busy = True
        self._cancel_requested = False
        state = ProcessingState(files)
        for listener in self._listeners:
            state.subscribe(listener)
        self._state = state

        logger.info(f"Combining {state.total} files: {', '.join(f.name for f in state.files)}")
        state.set_busy(True)
        try:
            return await self._run(state)
        except GPXCombineError as e:
            logger.warning(f"Combine aborted: {e}")
            state.fail(str(e))
            raise
        finally:
            self._busy = False
            state.set_busy(False)

    async def combine_selection(self, selection: FileSelection) -> str:
        """Combine a selection in its current order, locking it for the run."""
        files = selection.snapshot()
        self._validate(files)

        selection.lock()
        try:
            return await self.combine(files)
        finally:
            selection.unlock()

    def cancel(self) -> bool:
        """
        Ask the in-flight run to stop before its next file,
        or before assembling if the last file is being read.

        Returns:
            True if a run was in flight
        """
        if not self._busy:
            return False
        logger.info("Cancellation requested")
        self._cancel_requested = True
        return True

    # =========================================================================
    # Internals
    # =========================================================================

    def _validate(self, files: Sequence[FileSource]) -> None:
        if len(files) < self.min_files:
            raise ValidationError(
                f"Please select at least {self.min_files} GPX files (got {len(files)})"
            )
        if self._busy:
            raise CombineInProgressError("A combine run is already in progress")

    def _check_cancelled(self, state: ProcessingState) -> None:
        if self._cancel_requested:
            raise CombineCancelledError(
                f"Cancelled after {state.parsed_count} of {state.total} files"
            )

    async def _run(self, state: ProcessingState) -> str:
        # Discarded with the frame if the run aborts
        accumulated: List[Tuple[str, List[TrackPoint]]] = []

        for ref in state.files:
            self._check_cancelled(state)
            points = await self._process_file(state, ref)
            accumulated.append((ref.name, points))

        # A cancel during the last read still wins over the result
        self._check_cancelled(state)

        tracks = self.assembler.assemble(accumulated)
        document = self.serializer.serialize(tracks)
        self._document = document

        logger.info(
            f"Combined {len(tracks)} tracks, "
            f"{sum(t.points_count for t in tracks)} points"
        )
        return document

    async def _process_file(self, state: ProcessingState, ref: FileReference) -> List[TrackPoint]:
        """Read and parse one file, moving it to a terminal status."""
        state.transition(ref.ordinal, FileStatus.READING)

        try:
            content = await ref.source.read()
        except ReadError as e:
            self._fail_file(state, ref, e)
            raise
        except Exception as e:
            error = ReadError(ref.name, str(e) or type(e).__name__)
            self._fail_file(state, ref, error)
            raise error from e

        try:
            points = self.parser.parse_points(content, ref.name)
        except ParseError as e:
            self._fail_file(state, ref, e)
            raise

        state.transition(ref.ordinal, FileStatus.PARSED)
        return points

    @staticmethod
    def _fail_file(state: ProcessingState, ref: FileReference, error: FileError) -> None:
        logger.error(f"{error.kind} in {ref.name}: {error.reason}")
        state.transition(ref.ordinal, FileStatus.FAILED, error=str(error))
