"""SHA-256 digests of readers and of archived directory trees."""

from __future__ import annotations

import hashlib
import os
from typing import IO, Protocol

from sealkit.compress import decompress, root_dir_not_included
from sealkit.fileutil import clean_file

EMPTY_SHA256_TAR_DIGEST = "sha256:4f4fb700ef54461cfa02571ae0db9a0dc1e0cdb5577484a6d75e68dc38e8acc1"

_CHUNK = 64 * 1024


class _Reader(Protocol):
    def read(self, size: int = ..., /) -> bytes: ...


def _digest_hex(digest: str) -> str:
    return digest.partition(":")[2]


class SHA256:
    """Content digests in the algorithm:hex form."""

    def check_sum(self, reader: _Reader) -> str:
        """Digest everything readable from reader."""
        hasher = hashlib.sha256()
        for chunk in iter(lambda: reader.read(_CHUNK), b""):
            hasher.update(chunk)
        return f"sha256:{hasher.hexdigest()}"

    def tar_check_sum(self, src: str) -> tuple[IO[bytes], str]:
        """Archive src without its root folder; return the archive rewound and its digest."""
        file = root_dir_not_included(None, src)
        try:
            file.seek(0)
            digest = self.check_sum(file)
            file.seek(0)
        except Exception:
            clean_file(file)
            raise
        return file, digest

    def empty_digest(self) -> str:
        """The digest of an empty layer."""
        return EMPTY_SHA256_TAR_DIGEST


def check_sum_and_place_layer(src: str, layer_dir: str) -> str:
    """Archive src, extract it under layer_dir/<digest hex> and return the digest."""
    file, digest = SHA256().tar_check_sum(src)
    try:
        decompress(file, os.path.join(layer_dir, _digest_hex(digest)))
    finally:
        clean_file(file)
    return digest