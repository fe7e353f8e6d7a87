"""SHA-256 helpers and the content-addressed attachment layout."""

from __future__ import annotations

import hashlib
import os
from pathlib import Path

_CHUNK_SIZE = 8192


def sha256_file(path: str | os.PathLike[str]) -> bytes:
    """Return the SHA-256 digest of a file, read in fixed-size chunks."""
    hasher = hashlib.sha256()
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.digest()


def sha256_bytes(data: bytes) -> bytes:
    """Return the SHA-256 digest of in-memory bytes."""
    return hashlib.sha256(data).digest()


def to_hex(digest: bytes) -> str:
    """Encode a digest as a lowercase hex string."""
    return digest.hex()


def attachment_path(attachments_dir: str | os.PathLike[str], hash_hex: str, ext: str) -> Path:
    """Return ``<base>/<first two hex chars>/<full hex>.<ext>``."""
    if len(hash_hex) < 2:
        raise ValueError(f"hash too short for attachment path: {hash_hex!r}")
    return Path(attachments_dir) / hash_hex[:2] / f"{hash_hex}.{ext}"