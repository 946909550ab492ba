"""
GPX Parser Service

Extracts track points from GPX documents.
"""

import logging
import math
import re
import xml.etree.ElementTree as ET
from typing import Iterator, List, Optional

from .exceptions import ParseError
from .models import TrackPoint

logger = logging.getLogger(__name__)

TRACK_POINT_TAG = "trkpt"
ELEVATION_TAG = "ele"

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)

# Plain decimal with optional exponent, ASCII digits only ("4_5" is rejected)
DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _local_name(tag) -> str:
    """Strip the namespace from an ElementTree tag: '{ns}trkpt' -> 'trkpt'."""
    if not isinstance(tag, str):
        # Comments and processing instructions
        return ""
    return tag.rsplit("}", 1)[-1]


def _iter_local(element: ET.Element, name: str) -> Iterator[ET.Element]:
    """Iterate descendants (and self) with the given local name, in document order."""
    for child in element.iter():
        if _local_name(child.tag) == name:
            yield child


class GPXParserService:
    """Service for parsing GPX files."""

    @staticmethod
    def parse_points(content: str, filename: str) -> List[TrackPoint]:
        """
        Parse GPX content into track points.

        Points are collected from every trkpt element in document order,
        regardless of the track/segment structure around them.

        Args:
            content: GPX file content as text
            filename: Source file name, used in error messages

        Returns:
            List of TrackPoint (empty if the document has no trkpt)

        Raises:
            ParseError: If the document is not well-formed or a point
                has missing or invalid coordinates
        """
        try:
            root = ET.fromstring(content.lstrip("\ufeff"))
        except ET.ParseError as e:
            logger.warning(f"Failed to parse GPX {filename}: {e}")
            raise ParseError(filename, f"not a well-formed document ({e})")

        points: List[TrackPoint] = []
        for position, element in enumerate(_iter_local(root, TRACK_POINT_TAG), start=1):
            points.append(GPXParserService._parse_point(element, filename, position))

        logger.debug(f"Parsed {len(points)} track points from {filename}")
        return points

    @staticmethod
    def _parse_point(element: ET.Element, filename: str, position: int) -> TrackPoint:
        """Build a TrackPoint from one trkpt element."""
        latitude = GPXParserService._parse_coordinate(
            element, "lat", LATITUDE_RANGE, filename, position
        )
        longitude = GPXParserService._parse_coordinate(
            element, "lon", LONGITUDE_RANGE, filename, position
        )

        elevation: Optional[float] = None
        # First ele wins
        ele = next(_iter_local(element, ELEVATION_TAG), None)
        if ele is not None and ele.text and ele.text.strip():
            elevation = _to_float(ele.text)
            if elevation is None:
                raise ParseError(
                    filename, f"invalid elevation {ele.text.strip()!r}", position
                )

        return TrackPoint(latitude=latitude, longitude=longitude, elevation=elevation)

    @staticmethod
    def _parse_coordinate(
        element: ET.Element,
        attribute: str,
        bounds: tuple,
        filename: str,
        position: int
    ) -> float:
        raw = element.get(attribute)
        if raw is None:
            raise ParseError(filename, f"missing '{attribute}' attribute", position)

        value = _to_float(raw)
        if value is None:
            raise ParseError(filename, f"invalid '{attribute}' value {raw!r}", position)

        low, high = bounds
        if not low <= value <= high:
            raise ParseError(
                filename, f"'{attribute}' {value} outside [{low:g}, {high:g}]", position
            )
        return value


def _to_float(text: str) -> Optional[float]:
    """Parse a finite float, or None."""
    text = text.strip()
    if not DECIMAL_PATTERN.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value
