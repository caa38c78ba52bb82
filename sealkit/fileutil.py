"""Local file and directory helpers."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from typing import IO

from sealkit.hashing import gen_unique_id

log = logging.getLogger(__name__)

FILE_MODE_0755 = 0o755
FILE_MODE_0644 = 0o644


class FileUtilError(OSError):
    """A file operation failed."""


def _parent(path: str) -> str:
    return os.path.dirname(os.fspath(path)) or "."


def _write(path: str, data: bytes, mode: int) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    with os.fdopen(fd, "wb") as handle:
        handle.write(data)


def _remove_all(path: str) -> None:
    if os.path.islink(path) or (os.path.exists(path) and not os.path.isdir(path)):
        os.remove(path)
    elif os.path.isdir(path):
        shutil.rmtree(path)


def read_all(file_name: str) -> bytes:
    """Return the whole content of file_name."""
    with open(file_name, "rb") as handle:
        return handle.read()


def mk_file_full_path_dir(file_name: str) -> None:
    """Create the directory that will hold file_name."""
    local_dir = _parent(file_name)
    try:
        mkdir(local_dir)
    except OSError as exc:
        raise FileUtilError(f"create local dir failed {local_dir} {exc}") from exc


def mkdir(dir_name: str) -> None:
    """Create dir_name and any missing parents."""
    os.makedirs(dir_name, exist_ok=True)


def mk_tmpdir() -> str:
    """Create a uniquely named directory under the system temp dir and return it."""
    temp_dir = os.path.join(tempfile.gettempdir(), gen_unique_id(32))
    os.makedirs(temp_dir, exist_ok=True)
    return temp_dir


def is_file_exist(filename: str) -> bool:
    """True unless filename is known not to exist."""
    try:
        os.stat(filename)
    except FileNotFoundError:
        return False
    except OSError:
        return True
    return True


def write_file(file_name: str, content: bytes | str) -> None:
    """Write content to file_name, creating its directory when needed."""
    data = content.encode() if isinstance(content, str) else bytes(content)
    directory = _parent(file_name)
    if not os.path.exists(directory):
        os.makedirs(directory, FILE_MODE_0755, exist_ok=True)
    _write(file_name, data, FILE_MODE_0644)


def recursion_copy(src: str, dst: str) -> None:
    """Copy a file or a whole directory tree from src to dst."""
    if is_dir(src):
        copy_dir(src, dst)
    else:
        copy_single_file(src, dst)


def copy_dir(src_path: str, dst_path: str) -> None:
    """Copy the contents of src_path into dst_path, recursively."""
    with os.scandir(src_path) as entries:
        ordered = sorted(entries, key=lambda entry: entry.name)
    for entry in ordered:
        src = os.path.join(src_path, entry.name)
        dst = os.path.join(dst_path, entry.name)
        if entry.is_dir(follow_symlinks=False):
            copy_dir(src, dst)
        else:
            copy_single_file(src, dst)


def copy_single_file(src: str, dst: str) -> int:
    """Copy the regular file src to dst, overwriting dst; return bytes copied."""
    import stat

    info = os.stat(src)
    if not stat.S_ISREG(info.st_mode):
        raise FileUtilError(f"{src} is not a regular file")
    with open(src, "rb") as source:
        directory = _parent(dst)
        if not os.path.exists(directory):
            os.makedirs(directory, 0o766, exist_ok=True)
        with open(dst, "wb") as destination:
            shutil.copyfileobj(source, destination)
            return destination.tell()


def clean_file(file: IO[bytes] | IO[str] | None) -> None:
    """Close file and delete it from disk, logging any failure."""
    if file is None:
        return
    try:
        file.close()
    except OSError as exc:
        log.warning("%s", exc)
    try:
        os.remove(file.name)
    except OSError as exc:
        log.warning("%s", exc)


def clean_dir(dir_name: str) -> None:
    """Remove dir_name and everything beneath it, logging any failure."""
    if not dir_name:
        log.error("clean dir path is empty")
        return
    try:
        _remove_all(dir_name)
    except OSError:
        log.warning("failed to remove dir %s ", dir_name)


def clean_dirs(*args: str) -> None:
    """Remove every directory given."""
    for dir_name in args:
        clean_dir(dir_name)


def clean_files(*args: str) -> None:
    """Remove every file or directory given; stop at the first failure."""
    for path in args:
        try:
            _remove_all(path)
        except OSError as exc:
            raise FileUtilError(f"failed to clean file {path}") from exc


def append_file(file_name: str, content: str) -> None:
    """Append content on a new line unless the file already contains it."""
    try:
        existing = read_all(file_name)
    except OSError as exc:
        raise FileUtilError(f"read file {file_name} failed: {exc}") from exc
    addition = content.encode()
    if addition in existing:
        return
    try:
        write_file(file_name, existing + b"\n" + addition)
    except OSError as exc:
        raise FileUtilError(f"write file {file_name} failed: {exc}") from exc


def remove_file_content(file_name: str, content: str) -> None:
    """Remove the single occurrence of content from the file."""
    try:
        existing = read_all(file_name)
    except OSError as exc:
        raise FileUtilError(f"read file {file_name} failed: {exc}") from exc
    parts = existing.split(content.encode())
    if len(parts) != 2:
        raise FileUtilError(f"remove file content failed {file_name} {content}")
    try:
        write_file(file_name, parts[0] + parts[1])
    except OSError as exc:
        raise FileUtilError(f"write file {file_name} failed: {exc}") from exc


def is_dir(path: str) -> bool:
    """True when path exists and is a directory."""
    return os.path.isdir(path)


def count_dir_files(dir_name: str) -> int:
    """Count the non-directory entries beneath dir_name; 0 if it is not a directory."""
    if not is_dir(dir_name):
        return 0
    count = 0
    for root, dirs, files in os.walk(dir_name):
        count += len(files)
        count += sum(1 for d in dirs if os.path.islink(os.path.join(root, d)))
    return count


def mkdir_if_not_exists(dir_name: str) -> None:
    """Create dir_name when it does not exist; log and raise on failure."""
    try:
        os.stat(dir_name)
    except FileNotFoundError:
        try:
            os.makedirs(dir_name, FILE_MODE_0755, exist_ok=True)
        except OSError as exc:
            log.error("failed to mkdir, err %s", exc)
            raise
    except OSError as exc:
        log.error("failed to mkdir, err %s", exc)
        raise