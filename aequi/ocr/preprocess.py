"""Image normalization before OCR: downscale, grayscale, contrast stretch."""

from __future__ import annotations

import io
import os

from PIL import Image

_MAX_DIMENSION = 2800


class PreprocessError(Exception):
    """Raised when an image cannot be loaded or re-encoded."""


def prepare_for_ocr(path: str | os.PathLike[str]) -> bytes:
    """Load an image file, normalize it and return PNG bytes."""
    try:
        with Image.open(path) as img:
            img.load()
            loaded = img.copy()
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise PreprocessError(f"Failed to load image: {exc}") from exc
    return _encode_as_png(normalize(loaded))


def prepare_for_ocr_from_bytes(data: bytes) -> bytes:
    """Decode image bytes (JPEG, PNG, WEBP, ...) and return normalized PNG bytes."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            loaded = img.copy()
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise PreprocessError(f"Failed to load image: {exc}") from exc
    return _encode_as_png(normalize(loaded))


def normalize(image: Image.Image) -> Image.Image:
    """Return a grayscale copy scaled to at most 2800 px with stretched contrast."""
    if image.width > _MAX_DIMENSION or image.height > _MAX_DIMENSION:
        image = image.copy()
        image.thumbnail((_MAX_DIMENSION, _MAX_DIMENSION), Image.Resampling.LANCZOS)

    gray = image.convert("L")
    low, high = gray.getextrema()
    if low == high:
        return gray

    span = high - low
    lut = [min(255, max(0, p - low) * 255 // span) for p in range(256)]
    return gray.point(lut)


def _encode_as_png(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    try:
        image.save(buffer, format="PNG")
    except (OSError, ValueError) as exc:
        raise PreprocessError(f"Failed to encode processed image: {exc}") from exc
    return buffer.getvalue()