"""Registry credentials stored in a docker-style auth file."""

from __future__ import annotations

import base64
import binascii
import json
import os
from dataclasses import dataclass, field

from sealkit.fileutil import FILE_MODE_0644, FILE_MODE_0755, is_file_exist

_EMPTY_CONFIG = '{"auths":{}}'


class DockerAuthError(ValueError):
    """Stored registry credentials are missing or malformed."""


@dataclass
class AuthConfig:
    """Credentials for one registry server."""

    username: str = ""
    password: str = ""
    server_address: str = ""


@dataclass
class DockerInfo:
    """The auth file's content: base64 user:password entries keyed by hostname."""

    auths: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: object) -> DockerInfo:
        if not isinstance(data, dict):
            raise DockerAuthError("docker auth config must be a JSON object")
        raw = data.get("auths") or {}
        if not isinstance(raw, dict):
            raise DockerAuthError("auths must be a JSON object")
        auths: dict[str, str] = {}
        for host, item in raw.items():
            value = item.get("auth", "") if isinstance(item, dict) else ""
            auths[host] = value if isinstance(value, str) else ""
        return cls(auths=auths)

    def to_dict(self) -> dict[str, dict[str, dict[str, str]]]:
        return {"auths": {host: {"auth": auth} for host, auth in self.auths.items()}}

    def local_docker_auth(self, hostname: str) -> str:
        """Return the encoded credentials for hostname, or an empty string."""
        return self.auths.get(hostname, "")

    def decode_docker_auth(self, hostname: str) -> tuple[str, str]:
        """Return (username, password) stored for hostname."""
        auth = self.local_docker_auth(hostname)
        if not auth:
            raise DockerAuthError(f"auth for {hostname} doesn't exist")
        try:
            decoded = base64.b64decode(auth, validate=True).decode()
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise DockerAuthError(f"{hostname} auth is not valid base64: {exc}") from exc
        parts = decoded.split(":")
        if len(parts) != 2:
            raise DockerAuthError(f"{hostname} auth base64 has problem of format")
        return parts[0], parts[1]


def _write(path: str, data: str) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE_0644)
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(data)


def docker_config(auth_file: str) -> DockerInfo:
    """Load the auth file, creating an empty one when it does not exist."""
    if not is_file_exist(auth_file):
        _write(auth_file, _EMPTY_CONFIG)
        return DockerInfo()
    with open(auth_file, encoding="utf-8") as handle:
        data = json.load(handle)
    return DockerInfo.from_dict(data)


def set_docker_config(auth_file: str, hostname: str, username: str, password: str) -> None:
    """Store credentials for hostname in the auth file."""
    encoded = base64.b64encode(f"{username}:{password}".encode()).decode()
    if not is_file_exist(auth_file):
        os.makedirs(os.path.dirname(auth_file) or ".", FILE_MODE_0755, exist_ok=True)
        info = DockerInfo()
    else:
        info = docker_config(auth_file)
    info.auths[hostname] = encoded
    data = json.dumps(info.to_dict(), indent="\t", sort_keys=True)
    try:
        _write(auth_file, data)
    except OSError as exc:
        raise OSError(f"write {auth_file} failed,{exc}") from exc


def get_docker_auth_info_from_docker(auth_file: str, domain: str) -> AuthConfig:
    """Return the stored credentials for domain."""
    info = docker_config(auth_file)
    username, secret = info.decode_docker_auth(domain)
    return AuthConfig(username=username, password=secret, server_address=domain)