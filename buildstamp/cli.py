"""Buildstamp CLI.

Entry point for the ``buildstamp`` command-line tool.

Usage:
    buildstamp [--file PATH] [--settings PATH] [-v] show [--format json|text]
    buildstamp set MAJOR MINOR PATCH [--stage alpha|beta|rc|release] [--build N]
    buildstamp bump major|minor|patch|build

The version file defaults to $BUILDSTAMP_FILE, or versionConfig.json.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from .core.codec import state_to_dict
from .core.errors import VersionEncodingError, VersionStateError
from .core.types import VersionStage, VersionState
from .hooks import on_build
from .publish import BuildSettingsPublisher, NullPublisher
from .storage.store import VersionStore
from .version import DEFAULT_SAVE_PATH

FILE_ENV_VAR = "BUILDSTAMP_FILE"

# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def _numeric_or_none(state: VersionState):
    try:
        return state.version_numeric
    except VersionEncodingError:
        return None


def _format_text(state: VersionState) -> str:
    numeric = _numeric_or_none(state)
    stage = state.stage
    lines = [
        f"Version: {state.version_string}",
        f"  short:   {state.short_version_string}",
        f"  numeric: {numeric if numeric is not None else 'n/a'}",
        f"  stage:   {stage.name.lower() if stage is not None else 'unknown'}",
        f"  build:   {state.build}",
    ]
    return "\n".join(lines)


def _format_json(state: VersionState) -> str:
    payload = state_to_dict(state)
    payload["versionString"] = state.version_string
    payload["shortVersionString"] = state.short_version_string
    payload["versionNumeric"] = _numeric_or_none(state)
    return json.dumps(payload, indent=2)


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def _cmd_show(store: VersionStore, args: argparse.Namespace) -> None:
    state = store.current()
    if args.format == "json":
        print(_format_json(state))
    else:
        print(_format_text(state))


def _cmd_set(store: VersionStore, args: argparse.Namespace) -> None:
    store.set_version(args.major, args.minor, args.patch, args.stage, args.build)
    store.save()
    print(store.current().version_string)


def _cmd_bump(store: VersionStore, args: argparse.Namespace) -> None:
    if args.part == "build":
        previous, current = on_build(store)
    else:
        previous = store.current().version_string
        getattr(store, f"increment_{args.part}")()
        store.save()
        current = store.current().version_string
    print(f"{previous} -> {current}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _stage_arg(text: str) -> VersionStage:
    try:
        return VersionStage.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _build_store(args: argparse.Namespace) -> VersionStore:
    if args.settings:
        publisher = BuildSettingsPublisher(path=args.settings)
    else:
        publisher = NullPublisher()
    return VersionStore(path=args.file, publisher=publisher)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="buildstamp",
        description="Buildstamp: keep a project's version in a JSON file",
    )
    parser.add_argument(
        "--file",
        default=os.environ.get(FILE_ENV_VAR, DEFAULT_SAVE_PATH),
        help=f"Path to the version file (default: ${FILE_ENV_VAR} or {DEFAULT_SAVE_PATH})",
    )
    parser.add_argument(
        "--settings",
        default=None,
        help="Write build settings (bundle version, version code, ...) to this JSON file",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command")

    show_parser = subparsers.add_parser("show", help="Print the current version")
    show_parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)",
    )
    show_parser.set_defaults(func=_cmd_show)

    set_parser = subparsers.add_parser("set", help="Set and save the version")
    set_parser.add_argument("major", type=int)
    set_parser.add_argument("minor", type=int)
    set_parser.add_argument("patch", type=int)
    set_parser.add_argument(
        "--stage",
        type=_stage_arg,
        default=VersionStage.ALPHA,
        help="alpha, beta, rc or release (default: alpha)",
    )
    set_parser.add_argument(
        "--build", type=int, default=0, help="Build number (default: 0)"
    )
    set_parser.set_defaults(func=_cmd_set)

    bump_parser = subparsers.add_parser("bump", help="Increment and save the version")
    bump_parser.add_argument("part", choices=["major", "minor", "patch", "build"])
    bump_parser.set_defaults(func=_cmd_bump)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    store = _build_store(args)
    try:
        # Refuse to touch a file written by an incompatible format
        store.load(strict=True)
        args.func(store, args)
    except (VersionStateError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
