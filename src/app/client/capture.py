"""Client – turn a picked or camera-captured file into a data URI."""

from __future__ import annotations

import asyncio
import base64
import logging
import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import BinaryIO, Union

from src.app.errors import InvalidFileType, ReadError

logger = logging.getLogger(__name__)

FileHandle = Union[str, Path, BinaryIO]


class CaptureSource(str, Enum):
    PICKER = "picker"
    CAMERA = "camera"


# User-facing messages, per source
INVALID_TYPE_MESSAGES = {
    CaptureSource.PICKER: "Please upload a valid image file",
    CaptureSource.CAMERA: "Please capture a valid image",
}
READ_ERROR_MESSAGES = {
    CaptureSource.PICKER: "Error reading file",
    CaptureSource.CAMERA: "Error reading captured image",
}


@dataclass(frozen=True)
class CapturedImage:
    data_uri: str
    mime_type: str
    size: int
    source: CaptureSource = CaptureSource.PICKER
    filename: str | None = None


def _filename_of(file: FileHandle) -> str | None:
    if isinstance(file, (str, Path)):
        return Path(file).name
    name = getattr(file, "name", None)
    return Path(name).name if isinstance(name, str) else None


def _read_bytes(file: FileHandle) -> bytes:
    if isinstance(file, (str, Path)):
        return Path(file).read_bytes()
    return file.read()


def encode_data_uri(content: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(content).decode('ascii')}"


async def capture_image(
    file: FileHandle,
    mime_type: str | None = None,
    *,
    source: CaptureSource = CaptureSource.PICKER,
) -> CapturedImage:
    """Validate and read *file* into a :class:`CapturedImage`.

    The MIME type is taken from *mime_type*, or guessed from the file name.
    Nothing is read unless it starts with ``image/``.

    Raises
    ------
    InvalidFileType – the file is not an image.
    ReadError       – the underlying read failed.
    """
    filename = _filename_of(file)
    if mime_type is None and filename:
        mime_type, _ = mimetypes.guess_type(filename)

    if not mime_type or not mime_type.startswith("image/"):
        raise InvalidFileType(INVALID_TYPE_MESSAGES[source])

    try:
        content = await asyncio.to_thread(_read_bytes, file)
    except (OSError, ValueError) as exc:
        logger.warning("Could not read %s: %s", filename or "captured file", exc)
        raise ReadError(READ_ERROR_MESSAGES[source]) from exc

    logger.debug("Captured %s (%s, %d bytes) from %s", filename, mime_type, len(content), source.value)
    return CapturedImage(
        data_uri=encode_data_uri(content, mime_type),
        mime_type=mime_type,
        size=len(content),
        source=source,
        filename=filename,
    )
