"""CLI entry point for pathname — I/O boundary only."""

from __future__ import annotations

import argparse
import sys

from pathname.errors import PathnameError
from pathname.handle import Pathname


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser.

    Returns:
        argparse.ArgumentParser: Configured parser for the ``pathname`` command.
    """
    parser = argparse.ArgumentParser(
        prog="pathname",
        description="inspect, list, copy and delete filesystem trees",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    ls = commands.add_parser("ls", help="List immediate children of a directory")
    ls.add_argument("path", help="Directory to list")
    ls.add_argument(
        "-g",
        "--glob",
        default=None,
        help="Only list children matching this glob (matched on the base name)",
    )

    walk = commands.add_parser("walk", help="Walk a tree depth-first in sorted order")
    walk.add_argument("path", help="Directory to walk")
    walk.add_argument(
        "-d",
        "--dirs-only",
        action="store_true",
        dest="dirs_only",
        help="Visit directories only",
    )

    info = commands.add_parser("info", help="Show metadata for a path")
    info.add_argument("path", help="Path to inspect")

    cp = commands.add_parser("cp", help="Copy a directory tree")
    cp.add_argument("source", help="Directory to copy")
    cp.add_argument("destination", help="Directory to create")
    cp.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace the destination if it already exists",
    )

    rm = commands.add_parser("rm", help="Delete a tree")
    rm.add_argument("path", help="Path to delete")
    return parser


def run_pathname(argv: list[str] | None = None) -> str:
    """Run pathname with provided CLI args and return formatted output.

    Args:
        argv: Command-line argument list without program name.

    Returns:
        str: Final rendered output.

    Raises:
        PathnameError: On any storage failure or invalid target.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return _run_with_args(args)


def _list(args: argparse.Namespace) -> str:
    children = Pathname(args.path).get_list_sync(args.glob)
    if children is None:
        raise PathnameError(args.path, "ls", "not a directory")
    return "\n".join(children)


def _walk(args: argparse.Namespace) -> str:
    root = Pathname(args.path)
    visitor = Pathname.is_directory_sync if args.dirs_only else None
    return "\n".join(node.get_name() for node in root.walk_sync(visitor))


def _info(args: argparse.Namespace) -> str:
    target = Pathname(args.path)
    meta = target.stat_sync()
    rows = [
        ("path", target.get_canonical_path()),
        ("kind", meta.kind.value),
        ("size", str(meta.size)),
        ("modified", meta.mtime.isoformat(sep=" ", timespec="seconds")),
        ("extension", target.get_path_extension() or "-"),
        ("depth", str(target.get_depth_sync())),
        ("hidden", "yes" if target.is_hidden_sync() else "no"),
        ("readable", "yes" if target.is_readable_sync() else "no"),
        ("writable", "yes" if target.is_writable_sync() else "no"),
    ]
    width = max(len(key) for key, _ in rows)
    return "\n".join(f"{key.ljust(width)}  {value}" for key, value in rows)


def _copy(args: argparse.Namespace) -> str:
    Pathname(args.source).copy_recursively_sync(args.destination, overwrite=args.overwrite)
    return f"copied {args.source} -> {args.destination}"


def _remove(args: argparse.Namespace) -> str:
    Pathname(args.path).delete_recursively_sync()
    return f"removed {args.path}"


_COMMANDS = {
    "ls": _list,
    "walk": _walk,
    "info": _info,
    "cp": _copy,
    "rm": _remove,
}


def _run_with_args(args: argparse.Namespace) -> str:
    """Dispatch parsed arguments to the selected command.

    Args:
        args: Parsed CLI namespace.

    Returns:
        str: Rendered output.

    Raises:
        PathnameError: On any storage failure or invalid target.
    """
    return _COMMANDS[args.command](args)


def main() -> None:
    """Run the CLI entry point with process arguments.

    Exits with code 1 on pathname errors.
    """
    parser = build_parser()
    args = parser.parse_args()

    try:
        output = _run_with_args(args)
    except PathnameError as exc:
        sys.stderr.write(f"pathname: {exc}\n")
        sys.exit(1)

    sys.stdout.write(output + "\n")
