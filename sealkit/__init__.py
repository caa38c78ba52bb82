"""Cluster image utilities: resource types, network and IP list helpers, files, layer archiving and mounting, and the seautil command."""

__version__ = "0.1.0"

__all__ = [
    "types",
    "cidr",
    "iplist",
    "hashing",
    "fileutil",
    "execs",
    "yamlio",
    "docker_config",
    "compress",
    "sha256",
    "mount",
    "version",
    "cli",
]