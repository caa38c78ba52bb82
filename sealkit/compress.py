"""Gzip-compressed tar archives of directory trees."""

from __future__ import annotations

import gzip
import os
import posixpath
import shutil
import tarfile
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass
from typing import IO

from sealkit.fileutil import FILE_MODE_0755, clean_file, mkdir_if_not_exists

_ROOT_OWNER = "root"


class CompressError(ValueError):
    """Archive sources or archive contents are not acceptable."""


def _validate_path(path: str) -> None:
    if not os.path.isabs(path):
        raise CompressError(f"dir {path} must be absolute path")
    try:
        os.stat(path)
    except OSError as exc:
        raise CompressError(f"dir {path} does not exist, err: {exc}") from exc


def compress(target_file: IO[bytes] | None, *args: str) -> IO[bytes]:
    """Archive each path, keeping a directory's own name as the top folder.

    The archive goes to target_file, or to a new temporary file when it is None.
    The file is returned positioned at its end.
    """
    return _compress(target_file, True, args)


def root_dir_not_included(target_file: IO[bytes] | None, *args: str) -> IO[bytes]:
    """Archive each path, placing a directory's contents at the archive root."""
    return _compress(target_file, False, args)


def _compress(
    target_file: IO[bytes] | None, keep_root_dir: bool, paths: tuple[str, ...]
) -> IO[bytes]:
    if not paths:
        raise CompressError("[compress] source must be provided")
    for path in paths:
        _validate_path(path)

    file = target_file
    if file is None:
        try:
            file = tempfile.NamedTemporaryFile(prefix="sealer_compress", delete=False)
        except OSError as exc:
            raise CompressError("create tmp compress file failed") from exc

    try:
        # A fixed gzip header (no name, zero mtime) keeps the archive's hash stable.
        with gzip.GzipFile(filename="", mode="wb", fileobj=file, mtime=0) as zipped, \
                tarfile.open(fileobj=zipped, mode="w") as tar:
            for path in paths:
                new_folder = ""
                if keep_root_dir and os.path.isdir(path):
                    new_folder = os.path.basename(path.rstrip("/"))
                _write_tree(path, new_folder, tar)
    except Exception:
        clean_file(file)
        raise
    return file


def _walk(path: str) -> Iterator[str]:
    """Yield path and everything beneath it, depth first in lexical order."""
    yield path
    if os.path.isdir(path) and not os.path.islink(path):
        for name in sorted(os.listdir(path)):
            yield from _walk(os.path.join(path, name))


def _arc_join(folder: str, name: str) -> str:
    return posixpath.normpath(posixpath.join(folder, name)) if folder else posixpath.normpath(name)


def _write_tree(root: str, new_folder: str, tar: tarfile.TarFile) -> None:
    if root.endswith("/"):
        root = root[:-1]
    for path in _walk(root):
        if path != root:
            rel = os.path.relpath(path, root).replace(os.sep, "/")
            arcname = _arc_join(new_folder, rel)
        else:
            if os.path.isdir(path) and not os.path.islink(path):
                continue
            arcname = _arc_join(new_folder, os.path.basename(root))

        info = tar.gettarinfo(path, arcname=arcname)
        if info is None:
            continue
        # Owner names vary between machines; fixing them keeps the hash stable.
        info.uname = _ROOT_OWNER
        info.gname = _ROOT_OWNER
        if info.isreg():
            with open(path, "rb") as data:
                tar.addfile(info, data)
        else:
            tar.addfile(info)


@dataclass
class _DirNode:
    member: tarfile.TarInfo
    path: str
    prev: _DirNode | None = None
    next: _DirNode | None = None


def _valid_rel_path(name: str) -> bool:
    """Reject names that could escape the destination directory."""
    return not (not name or "\\" in name or name.startswith("/") or "../" in name)


def _times(member: tarfile.TarInfo) -> tuple[float, float]:
    mtime = float(member.mtime)
    atime = float(member.pax_headers.get("atime", mtime))
    return atime, mtime


def decompress(src: IO[bytes], dst: str) -> None:
    """Extract a gzip-compressed tar stream into dst, keeping modes and times."""
    # Entries may carry modes wider than the usual umask allows.
    old_mask = os.umask(0)
    try:
        _extract(src, dst)
    finally:
        os.umask(old_mask)


def _extract(src: IO[bytes], dst: str) -> None:
    os.makedirs(dst, FILE_MODE_0755, exist_ok=True)
    nodes: dict[str, _DirNode] = {}

    with tarfile.open(fileobj=src, mode="r|gz") as tar:
        for member in tar:
            name = member.name
            if not _valid_rel_path(name):
                raise CompressError(f"tar contained invalid name error {name!r}")
            target = os.path.join(dst, name)

            if member.isdir():
                if not os.path.exists(target):
                    os.makedirs(target, member.mode & 0o7777)
                    parent = nodes.get(os.path.dirname(target))
                    node = _DirNode(member, target, prev=parent)
                    if parent is not None:
                        parent.next = node
                    nodes[target] = node
            elif member.isreg():
                _extract_file(tar, member, target)

    # Writing into a directory changes its times, so restore them last,
    # from the deepest directory of each chain up to its root.
    for node in nodes.values():
        if node.next is not None:
            continue
        current: _DirNode | None = node
        while current is not None:
            os.utime(current.path, _times(current.member))
            current = current.prev


def _extract_file(tar: tarfile.TarFile, member: tarfile.TarInfo, target: str) -> None:
    mkdir_if_not_exists(os.path.dirname(target))
    fd = os.open(target, os.O_CREAT | os.O_TRUNC | os.O_RDWR, member.mode & 0o7777)
    with os.fdopen(fd, "r+b") as out:
        source = tar.extractfile(member)
        if source is not None:
            shutil.copyfileobj(source, out)
    os.utime(target, _times(member))