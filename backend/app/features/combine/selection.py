"""
File selection.

The list of files picked by the user and their order. The order can be
changed freely until a combine run starts; the run takes a snapshot and
the selection stays locked until the run ends.
"""

import logging
from typing import List, Sequence, Tuple

from app.features.gpx.exceptions import CombineInProgressError

from .sources import FileSource
from .state import FileReference

logger = logging.getLogger(__name__)


class FileSelection:
    """Ordered, reorderable list of selected files."""

    def __init__(self, sources: Sequence[FileSource] = ()):
        self._files: List[FileReference] = []
        self._locked = False
        if sources:
            self.select(sources)

    @property
    def files(self) -> Tuple[FileReference, ...]:
        return tuple(self._files)

    @property
    def locked(self) -> bool:
        return self._locked

    def __len__(self) -> int:
        return len(self._files)

    def select(self, sources: Sequence[FileSource]) -> None:
        """Replace the selection. Every file starts Pending."""
        self._check_unlocked()
        self._files = [
            FileReference(name=source.name, ordinal=i, source=source)
            for i, source in enumerate(sources)
        ]
        logger.debug(f"Selected {len(self._files)} files")

    def move(self, from_index: int, to_index: int) -> None:
        """
        Move one file to a new position.

        Raises:
            IndexError: If either index is out of range
            CombineInProgressError: If a run is in flight
        """
        self._check_unlocked()
        size = len(self._files)
        for index in (from_index, to_index):
            if not 0 <= index < size:
                raise IndexError(f"index {index} out of range for {size} files")
        if from_index == to_index:
            return

        ref = self._files.pop(from_index)
        self._files.insert(to_index, ref)
        self._renumber()

    def remove(self, index: int) -> FileReference:
        """Drop one file, e.g. the one that failed the last run."""
        self._check_unlocked()
        ref = self._files.pop(index)
        self._renumber()
        return ref

    def snapshot(self) -> Tuple[FileSource, ...]:
        """Current order as a tuple of sources."""
        return tuple(ref.source for ref in self._files)

    def lock(self) -> None:
        self._locked = True

    def unlock(self) -> None:
        self._locked = False

    def _renumber(self) -> None:
        for i, ref in enumerate(self._files):
            ref.ordinal = i

    def _check_unlocked(self) -> None:
        if self._locked:
            raise CombineInProgressError("selection cannot change while a combine run is in flight")
