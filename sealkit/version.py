"""Build and runtime version information."""

from __future__ import annotations

import json
import platform
import sys
from dataclasses import dataclass
from typing import Any

# Fallback values used when the build does not stamp real ones.
GIT_MAJOR = ""
GIT_MINOR = ""
GIT_VERSION = "latest"
GIT_COMMIT = ""
BUILD_DATE = "1970-01-01T00:00:00Z"


@dataclass(frozen=True)
class Info:
    """Version information of the running codebase."""

    git_version: str
    build_date: str
    python_version: str
    compiler: str
    platform: str
    major: str = ""
    minor: str = ""
    git_commit: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the document form; empty major, minor and commit are left out."""
        out: dict[str, Any] = {}
        if self.major:
            out["major"] = self.major
        if self.minor:
            out["minor"] = self.minor
        out["gitVersion"] = self.git_version
        if self.git_commit:
            out["gitCommit"] = self.git_commit
        out["buildDate"] = self.build_date
        out["pythonVersion"] = self.python_version
        out["compiler"] = self.compiler
        out["platform"] = self.platform
        return out

    def to_json(self) -> str:
        """Return the compact JSON form."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    def __str__(self) -> str:
        return self.git_version


def get() -> Info:
    """Return the version information of this build and interpreter."""
    return Info(
        major=GIT_MAJOR,
        minor=GIT_MINOR,
        git_version=GIT_VERSION,
        git_commit=GIT_COMMIT,
        build_date=BUILD_DATE,
        python_version=platform.python_version(),
        compiler=sys.implementation.name,
        platform=f"{sys.platform}/{platform.machine()}",
    )