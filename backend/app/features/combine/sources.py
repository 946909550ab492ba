"""
Readable file sources.

A source is anything with a `name` and an awaitable `read()` returning
the file's text. Content is loaded lazily, when the coordinator reaches
the file.
"""

import asyncio
import codecs
import logging
import re
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from fastapi import UploadFile

from app.config import settings
from app.features.gpx.exceptions import ReadError

logger = logging.getLogger(__name__)


@runtime_checkable
class FileSource(Protocol):
    """Readable file handle."""

    name: str

    async def read(self) -> str:
        ...


# <?xml version="1.0" encoding="ISO-8859-1"?>
XML_DECLARATION_ENCODING = re.compile(
    rb'^<\?xml[^>]*?\sencoding\s*=\s*["\']([A-Za-z][A-Za-z0-9._-]*)["\']'
)

BYTE_ORDER_MARKS = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def detect_encoding(content: bytes, default: str) -> str:
    """
    Pick the encoding of an XML document.

    A byte-order mark wins, then the encoding named in the XML
    declaration, then `default`.
    """
    for bom, encoding in BYTE_ORDER_MARKS:
        if content.startswith(bom):
            return encoding

    match = XML_DECLARATION_ENCODING.match(content)
    if match:
        return match.group(1).decode("ascii")
    return default


def _decode(content: bytes, name: str, default: str) -> str:
    encoding = detect_encoding(content, default)
    try:
        return content.decode(encoding)
    except LookupError:
        raise ReadError(name, f"unknown encoding {encoding!r}")
    except UnicodeDecodeError as e:
        raise ReadError(name, f"cannot decode as {encoding} ({e.reason})")


class PathFileSource:
    """GPX file on disk."""

    def __init__(self, path, encoding: Optional[str] = None):
        self.path = Path(path)
        self.name = self.path.name
        self.encoding = encoding or settings.file_encoding

    async def read(self) -> str:
        try:
            content = await asyncio.to_thread(self.path.read_bytes)
        except OSError as e:
            logger.error(f"Failed to read {self.path}: {e}")
            raise ReadError(self.name, e.strerror or str(e))
        return _decode(content, self.name, self.encoding)

    def __repr__(self):
        return f"<PathFileSource {self.path}>"


class UploadFileSource:
    """File uploaded through the API."""

    def __init__(self, upload: UploadFile, encoding: Optional[str] = None):
        self.upload = upload
        self.name = upload.filename or "upload.gpx"
        self.encoding = encoding or settings.file_encoding

    async def read(self) -> str:
        try:
            await self.upload.seek(0)
            content = await self.upload.read()
        except OSError as e:
            logger.error(f"Failed to read upload {self.name}: {e}")
            raise ReadError(self.name, str(e))
        return _decode(content, self.name, self.encoding)

    def __repr__(self):
        return f"<UploadFileSource {self.name}>"


class TextFileSource:
    """In-memory GPX content."""

    def __init__(self, name: str, text: str):
        self.name = name
        self.text = text

    async def read(self) -> str:
        return self.text

    def __repr__(self):
        return f"<TextFileSource {self.name}>"
