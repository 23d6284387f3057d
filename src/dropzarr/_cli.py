"""Command-line interface for dropzarr."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dropzarr._errors import MultiscalesError
from dropzarr._io import read_attributes
from dropzarr._parse import open_multiscales
from dropzarr._paths import (
    ZarrPathInfo,
    find_highest_resolution_dataset,
    resolve_zarr_path,
)

logger = logging.getLogger(__name__)


def _fmt(values: tuple) -> str:
    return "[" + ", ".join(f"{v:g}" for v in values) + "]"


def _multiscales_group(info: ZarrPathInfo) -> Path:
    """Nearest group holding multiscales metadata, from the image folder upward.

    A dropped resolution level resolves to the level array itself as the image
    folder, so its parent groups are searched too.  Falls back to the root.
    """
    start = info.image_folder or info.root_folder
    for folder in (start, *start.parents):
        try:
            attrs = read_attributes(folder)
        except FileNotFoundError:
            attrs = {}
        ome = attrs.get("ome")
        if "multiscales" in attrs or (isinstance(ome, dict) and "multiscales" in ome):
            return folder
        logger.debug("No multiscales metadata in %s", folder)
        if folder == info.root_folder:
            break
    return info.root_folder


def info_command(args: argparse.Namespace) -> int:
    """Execute the info subcommand.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command-line arguments

    Returns
    -------
    int
        Exit code (0 for success, 1 for unusable path or metadata, 2 for other
        errors)
    """
    try:
        info = resolve_zarr_path(args.path)
        if info is None:
            print(f"✗ Not inside a Zarr hierarchy: {args.path}", file=sys.stderr)
            return 1

        print(f"  Root: {info.root_folder}")
        if info.image_folder is None:
            print("  Image folder: ambiguous (pick one of the sub-datasets)")
        else:
            print(f"  Image folder: {info.image_folder}")
        print(f"  Relative path: {info.relative_path or '.'}")

        group = _multiscales_group(info)
        logger.debug("Reading multiscales metadata from %s", group)
        multiscales = open_multiscales(group)
    except ImportError as e:  # pragma: no cover
        print(f"ImportError: {e}", file=sys.stderr)
        return 2
    except (MultiscalesError, FileNotFoundError) as e:
        print(f"✗ No usable multiscales metadata: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        return 2

    axes = ", ".join(ax.name for ax in multiscales.axes_in_memory)
    print(f"  Version: {multiscales.version}")
    print(f"  Axes (in-memory order): {axes}")
    for level, scale in enumerate(multiscales.scales):
        print(
            f"  Level {level} ({scale.path}): scale={_fmt(scale.scale_factors)} "
            f"offset={_fmt(scale.offsets)}"
        )
    return 0


def highest_command(args: argparse.Namespace) -> int:
    """Execute the highest subcommand: print the finest dataset found by name."""
    info = resolve_zarr_path(args.path)
    if info is None:
        print(f"✗ Not inside a Zarr hierarchy: {args.path}", file=sys.stderr)
        return 1
    dataset = find_highest_resolution_dataset(info.root_folder)
    if dataset is None:
        print(f"✗ No arrays found below: {info.root_folder}", file=sys.stderr)
        return 1
    print(dataset)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Parameters
    ----------
    argv : list[str] | None
        Command-line arguments (defaults to sys.argv[1:])

    Returns
    -------
    int
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="dropzarr",
        description="Locate OME-Zarr images and inspect their multiscales metadata",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    info_parser = subparsers.add_parser(
        "info",
        help="Resolve a path inside an OME-Zarr and describe its image pyramid",
    )
    info_parser.add_argument("path", help="Any folder inside the OME-Zarr")
    info_parser.set_defaults(func=info_command)

    highest_parser = subparsers.add_parser(
        "highest",
        help="Print the highest resolution dataset, chosen by name",
    )
    highest_parser.add_argument("path", help="Any folder inside the OME-Zarr")
    highest_parser.set_defaults(func=highest_command)

    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    # Show help if no command specified
    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
