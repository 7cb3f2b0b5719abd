"""Creative loading - hash and pixel dimensions of an uploaded file."""

import os
import tempfile
from io import BytesIO

import cv2
from PIL import Image, UnidentifiedImageError

from ..models import Creative
from .hashing import content_hash


class CreativeLoadError(Exception):
    """File is corrupt or in an unsupported format."""

    pass


def load_creative(data: bytes, filename: str, mime_type: str) -> Creative:
    """
    Build a Creative from raw upload bytes.

    Images are measured with Pillow, videos with OpenCV.

    Raises:
        CreativeLoadError: if the dimensions cannot be read.
    """
    if mime_type.startswith("image/"):
        width, height = _image_size(data)
    else:
        width, height = _video_size(data, filename)

    return Creative(
        data=data,
        filename=filename,
        mime_type=mime_type,
        width=width,
        height=height,
        hash=content_hash(data),
    )


def _image_size(data: bytes) -> tuple[int, int]:
    try:
        with Image.open(BytesIO(data)) as img:
            return img.size
    except (UnidentifiedImageError, OSError) as e:
        raise CreativeLoadError(f"Cannot read image: {e}") from e


def _video_size(data: bytes, filename: str) -> tuple[int, int]:
    """OpenCV needs a path, so the bytes go through a temp file."""
    suffix = os.path.splitext(filename)[1] or ".mp4"
    fd, path = tempfile.mkstemp(suffix=suffix)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        capture = cv2.VideoCapture(path)
        try:
            width = int(capture.get(cv2.CAP_PROP_FRAME_WIDTH))
            height = int(capture.get(cv2.CAP_PROP_FRAME_HEIGHT))
        finally:
            capture.release()
    finally:
        os.remove(path)

    if width <= 0 or height <= 0:
        raise CreativeLoadError(f"Cannot read video dimensions of {filename}")
    return width, height
