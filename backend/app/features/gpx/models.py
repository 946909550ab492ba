"""
GPX track models.

Plain value objects shared by the parser, assembler and serializer.
A combined document is an ordered list of Track, one per source file.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class TrackPoint:
    """Single geographic sample."""
    latitude: float
    longitude: float
    elevation: Optional[float] = None


@dataclass
class Segment:
    """Contiguous ordered run of track points. May be empty."""
    points: List[TrackPoint] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)


@dataclass
class Track:
    """
    Ordered sequence of segments.

    Tracks built by TrackAssembler always hold exactly one segment,
    sourced from the file named by `source`.
    """
    segments: List[Segment] = field(default_factory=list)
    source: Optional[str] = None

    @property
    def points_count(self) -> int:
        return sum(len(segment) for segment in self.segments)
