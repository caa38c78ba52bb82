"""Running local commands."""

from __future__ import annotations

import os
import subprocess
import sys


def cmd(name: str, *args: str) -> None:
    """Run a command attached to this process's standard streams.

    Raises subprocess.CalledProcessError when it exits non-zero.
    """
    subprocess.run([name, *args], check=True)


def cmd_output(name: str, *args: str) -> bytes:
    """Run a command and return its combined standard output and error."""
    result = subprocess.run(
        [name, *args],
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        check=True,
    )
    return result.stdout


def run_simple_cmd(command: str) -> str:
    """Run command through /bin/sh and return its standard output."""
    result = subprocess.run(
        ["/bin/sh", "-c", command],
        stdout=subprocess.PIPE,
        check=True,
    )
    return result.stdout.decode()


def check_cmd_is_exist(command: str) -> str | None:
    """Return the location the shell reports for command, or None if it is unknown."""
    try:
        out = run_simple_cmd(f"type {command}")
    except (subprocess.CalledProcessError, OSError):
        return None
    last = out.split("is")[-1]
    if last and "not found" not in last:
        return last.strip()
    return None


def executable_file_path(binary_name: str) -> str:
    """Return binary_name placed next to the running executable."""
    return os.path.join(os.path.dirname(sys.executable), binary_name)