"""
GPX Serializer

Renders tracks into a GPX 1.1 document using gpxpy.
"""

import logging
from typing import Optional, Sequence

import gpxpy.gpx

from app.config import settings

from .models import Track

logger = logging.getLogger(__name__)

GPX_VERSION = "1.1"


class GPXSerializer:
    """Serializes a combined document to GPX text."""

    def __init__(self, creator: Optional[str] = None):
        self.creator = creator or settings.gpx_creator

    def serialize(self, tracks: Sequence[Track]) -> str:
        """
        Render tracks as a GPX document.

        One trk per Track, one trkseg per Segment, one trkpt per point.
        An ele child is written only when elevation is known. The output
        carries no timestamps, so identical input gives identical text.

        Args:
            tracks: Tracks in output order

        Returns:
            GPX XML text
        """
        gpx = gpxpy.gpx.GPX()
        gpx.creator = self.creator

        for track in tracks:
            gpx_track = gpxpy.gpx.GPXTrack()
            for segment in track.segments:
                gpx_segment = gpxpy.gpx.GPXTrackSegment()
                for point in segment.points:
                    gpx_segment.points.append(gpxpy.gpx.GPXTrackPoint(
                        latitude=point.latitude,
                        longitude=point.longitude,
                        elevation=point.elevation,
                    ))
                gpx_track.segments.append(gpx_segment)
            gpx.tracks.append(gpx_track)

        xml = gpx.to_xml(version=GPX_VERSION)
        logger.debug(
            f"Serialized {len(tracks)} tracks, "
            f"{sum(t.points_count for t in tracks)} points"
        )
        return xml
