"""Digest and random identifier helpers."""

from __future__ import annotations

import hashlib
import os
import secrets

_CHUNK = 64 * 1024


def md5(body: bytes) -> str:
    """Return the hex MD5 digest of body."""
    return hashlib.md5(body).hexdigest()


def file_md5(path: str | os.PathLike[str]) -> str:
    """Return the hex MD5 digest of the file at path."""
    digest = hashlib.md5()
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK), b""):
            digest.update(chunk)
    return digest.hexdigest()


def gen_unique_id(n: int) -> str:
    """Return a random hex string built from n // 2 random bytes."""
    return secrets.token_hex(max(n, 0) // 2)