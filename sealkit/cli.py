"""The seautil command line."""

from __future__ import annotations

import argparse
import os
import sys

import yaml

from sealkit import version

_CONFIG_NAME = ".seautil"
_CONFIG_EXTENSIONS = ("json", "yaml", "yml")


class _UsageError(Exception):
    """The command line could not be parsed."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        sys.stderr.write(f"Error: {message}\n")
        sys.stderr.write(self.format_usage())
        raise _UsageError(message)


def _read_config(path: str) -> bool:
    ext = os.path.splitext(path)[1].lstrip(".").lower()
    if ext not in _CONFIG_EXTENSIONS:
        return False
    try:
        with open(path, encoding="utf-8") as handle:
            yaml.safe_load(handle)
    except (OSError, yaml.YAMLError):
        return False
    return True


def init_config(cfg_file: str | None) -> str | None:
    """Locate and read the configuration file; return its path when one was read.

    Without cfg_file, a file named .seautil with a supported extension is looked
    for in the home directory.
    """
    if cfg_file:
        candidates = [cfg_file]
    else:
        home = os.path.expanduser("~")
        if home == "~":
            print("unable to determine home directory")
            raise SystemExit(1)
        candidates = [os.path.join(home, f"{_CONFIG_NAME}.{ext}") for ext in _CONFIG_EXTENSIONS]
        candidates = [path for path in candidates if os.path.isfile(path)][:1]
    for path in candidates:
        if _read_config(path):
            print("Using config file:", path)
            return path
    return None


def _build_parser() -> _Parser:
    parser = _Parser(
        prog="seautil",
        description="Utilities for preparing and operating cluster hosts.",
    )
    parser.add_argument("--config", default="", help="config file (default is $HOME/.seautil.yaml)")
    parser.add_argument("-t", "--toggle", action="store_true", help="Help message for toggle")
    commands = parser.add_subparsers(dest="command")

    version_cmd = commands.add_parser("version", help="version")
    version_cmd.add_argument(
        "--short", action="store_true", help="If true, print just the version number."
    )

    route_cmd = commands.add_parser("route", help="manage host routes")
    route_commands = route_cmd.add_subparsers(dest="route_command")
    route_commands.add_parser("add", help="add router")
    route_commands.add_parser("del", help="delete router")
    return parser


def _run_version(short: bool) -> None:
    info = version.get()
    print(str(info) if short else info.to_json())


def _run_route(sub: str | None) -> None:
    messages = {None: "route called", "add": "add called", "del": "del called"}
    print(messages[sub])


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except _UsageError as exc:
        print(exc)
        return 1

    if args.command is None:
        print(parser.format_help(), end="")
        return 0

    init_config(args.config)
    if args.command == "version":
        _run_version(args.short)
    elif args.command == "route":
        _run_route(args.route_command)
    return 0


if __name__ == "__main__":
    sys.exit(main())