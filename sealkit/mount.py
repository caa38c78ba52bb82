"""Merging image layers into one directory tree."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from typing import Protocol

from sealkit.fileutil import mkdir

_DIR_MODE = 0o755
_PROC_FILESYSTEMS = "/proc/filesystems"


class MountError(OSError):
    """Layers could not be mounted or unmounted."""


class Mounter(Protocol):
    def mount(self, target: str, upper_dir: str, *args: str) -> None: ...

    def unmount(self, target: str) -> None: ...


def path_exists(path: str) -> bool:
    """True when path exists, False when it does not; raise on other stat failures."""
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise MountError(f"os.Stat({path}) err: {exc}") from exc
    return True


def _ensure_dir(path: str) -> None:
    if not path_exists(path):
        try:
            os.mkdir(path, _DIR_MODE)
        except OSError as exc:
            raise MountError(f"mkdir [{path}] error {exc}") from exc


def _copy_file(src: str, dst: str) -> None:
    try:
        source = open(src, "rb")
    except OSError as exc:
        raise MountError(f"open file [{src}] failed: {exc}") from exc
    with source:
        try:
            destination = open(dst, "wb")
        except OSError as exc:
            raise MountError(f"create file err: {exc}") from exc
        with destination:
            try:
                shutil.copyfileobj(source, destination)
            except OSError as exc:
                raise MountError(f"copy file err: {exc}") from exc


def _copy_dir(src_path: str, dst_path: str) -> None:
    _ensure_dir(dst_path)
    with os.scandir(src_path) as entries:
        ordered = sorted(entries, key=lambda entry: entry.name)
    for entry in ordered:
        src = os.path.join(src_path, entry.name)
        dst = os.path.join(dst_path, entry.name)
        if entry.is_dir():
            _copy_dir(src, dst)
        else:
            _copy_file(src, dst)


class DefaultMounter:
    """Merges layers by copying them, in reverse order, into the target."""

    def mount(self, target: str, upper_dir: str, *args: str) -> None:
        """Copy every layer into target; earlier layers override later ones."""
        if not target:
            raise MountError("target is empty")
        for layer in reversed(args):
            try:
                info = os.stat(layer)
            except OSError as exc:
                raise MountError(f"get srcInfo err: {exc}") from exc
            if os.path.isdir(layer) and info:
                try:
                    _copy_dir(layer, target)
                except OSError as exc:
                    raise MountError(f"copyDir [{layer}] to [{target}] failed: {exc}") from exc
            else:
                _ensure_dir(target)
                _copy_file(layer, os.path.join(target, os.path.basename(layer)))

    def unmount(self, target: str) -> None:
        """Remove target and everything in it."""
        try:
            if os.path.islink(target) or os.path.isfile(target):
                os.remove(target)
            elif os.path.exists(target):
                shutil.rmtree(target)
        except OSError as exc:
            raise MountError(f"remote target failed: {exc}") from exc


def _run(argv: list[str]) -> None:
    subprocess.run(argv, check=True, stdout=subprocess.PIPE, stderr=subprocess.PIPE)


class Overlay2Mounter:
    """Merges layers with an overlay filesystem mount."""

    def mount(self, target: str, upper_dir: str, *args: str) -> None:
        """Mount args as lower layers and upper_dir as the writable layer on target."""
        if not target:
            raise MountError("target cannot be empty")
        if not args:
            raise MountError("layers cannot be empty")
        workdir = os.path.join(target, "work")
        try:
            mkdir(workdir)
        except OSError as exc:
            raise MountError("create workdir failed") from exc
        data = f"lowerdir={':'.join(args)},upperdir={upper_dir},workdir={workdir}"
        try:
            _run(["mount", "-t", "overlay", "overlay", "-o", data, target])
        except (subprocess.CalledProcessError, OSError) as exc:
            shutil.rmtree(workdir, ignore_errors=True)
            raise MountError(f"error creating overlay mount to {target}: {exc}") from exc

    def unmount(self, target: str) -> None:
        """Unmount target."""
        try:
            _run(["umount", target])
        except (subprocess.CalledProcessError, OSError) as exc:
            raise MountError(f"unmount {target} failed: {exc}") from exc


def supports_overlay() -> bool:
    """True when the overlay module loads and the kernel lists the overlay filesystem."""
    try:
        _run(["modprobe", "overlay"])
    except (subprocess.CalledProcessError, OSError):
        return False
    try:
        with open(_PROC_FILESYSTEMS, encoding="utf-8") as handle:
            return any(line.rstrip("\n") == "nodev\toverlay" for line in handle)
    except OSError:
        return False


def new_mount_driver() -> DefaultMounter | Overlay2Mounter:
    """Pick overlay mounting where the system supports it, copying otherwise."""
    if sys.platform.startswith("linux") and supports_overlay():
        return Overlay2Mounter()
    return DefaultMounter()