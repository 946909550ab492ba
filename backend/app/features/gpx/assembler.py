"""
Track Assembler

Wraps each file's points into a single-segment track.
"""

from typing import Iterable, List, Sequence, Tuple

from .models import Segment, Track, TrackPoint


class TrackAssembler:
    """Builds the track list of a combined document."""

    @staticmethod
    def assemble(files: Iterable[Tuple[str, Sequence[TrackPoint]]]) -> List[Track]:
        """
        Build one track per file, in the given order.

        Args:
            files: (file name, points) pairs in final combine order

        Returns:
            List of Track, each with exactly one Segment holding that
            file's points unchanged
        """
        return [
            Track(segments=[Segment(points=list(points))], source=filename)
            for filename, points in files
        ]
