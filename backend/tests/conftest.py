"""
Shared fixtures: GPX documents and in-memory file sources.
"""

import asyncio

import pytest

from app.features.combine import TextFileSource


GPX_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">\n'
)


def build_gpx(points) -> str:
    """
    Build a single-track GPX document.

    points: (lat, lon) or (lat, lon, elevation) tuples;
    elevation None means no ele child.
    """
    lines = [GPX_HEADER, "<trk><trkseg>\n"]
    for point in points:
        lat, lon = point[0], point[1]
        ele = point[2] if len(point) > 2 else None
        if ele is None:
            lines.append(f'<trkpt lat="{lat}" lon="{lon}"></trkpt>\n')
        else:
            lines.append(f'<trkpt lat="{lat}" lon="{lon}"><ele>{ele}</ele></trkpt>\n')
    lines.append("</trkseg></trk>\n</gpx>\n")
    return "".join(lines)


class GatedSource:
    """Source whose read() waits until the test releases it."""

    def __init__(self, name: str, text: str):
        self.name = name
        self.text = text
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def read(self) -> str:
        self.started.set()
        await self.release.wait()
        return self.text


class FailingSource:
    """Source whose read() raises."""

    def __init__(self, name: str, error: Exception):
        self.name = name
        self.error = error
        self.reads = 0

    async def read(self) -> str:
        self.reads += 1
        raise self.error


@pytest.fixture
def gpx_builder():
    return build_gpx


@pytest.fixture
def file_a():
    """Two points, second without elevation."""
    return TextFileSource("a.gpx", build_gpx([
        (43.23, 76.94, 1000.0),
        (43.231, 76.941, None),
    ]))


@pytest.fixture
def file_b():
    """Three points with elevation."""
    return TextFileSource("b.gpx", build_gpx([
        (51.5, -0.12, 11.0),
        (51.501, -0.121, 12.5),
        (51.502, -0.122, 14.0),
    ]))


@pytest.fixture
def file_c():
    """Single point."""
    return TextFileSource("c.gpx", build_gpx([(-33.8688, 151.2093, 3.0)]))


@pytest.fixture
def gated_source():
    return GatedSource


@pytest.fixture
def failing_source():
    return FailingSource
