"""
diskscope - folder size analyzer.

Scans a directory tree and prints its total size, category breakdown,
largest files and largest immediate children, or the whole result as JSON.
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional
from .drives import list_drives
from .listing import get_common_directories
from .models import NodeKind
from .scanner import (DEFAULT_WORKERS, IGNORED_NAMES, LARGE_FILE_FLOOR, MAX_DEPTH,
                      TOP_FILES, scan)
from .summary import result_to_json, top_children, top_folders
from .utils import format_bytes, format_share, parse_size

logger = logging.getLogger("diskscope")


class ColorFormatter(logging.Formatter):
    """Logging formatter that colors messages by level with ANSI codes."""

    COLORS = {
        logging.INFO: "\033[32m",  # Green
        logging.WARNING: "\033[33m",  # Yellow
        logging.ERROR: "\033[31m",  # Red
        logging.CRITICAL: "\033[41m",  # Red background
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno, "")
        message = super().format(record)
        if color:
            message = f"{color}{message}{self.RESET}"
        return message


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColorFormatter("[%(levelname)s] %(message)s"))
    logger.handlers[:] = [handler]
    logger.propagate = False
    if verbose:
        logger.setLevel(logging.DEBUG)
    elif quiet:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diskscope",
        description="Analyze disk usage of a directory tree.",
    )
    parser.add_argument("path", nargs="?", default=".", help="Directory or file to scan.")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON.")
    parser.add_argument("--no-tree", action="store_true", help="With --json, omit the node tree.")
    parser.add_argument("--children", type=int, default=10, metavar="N",
                        help="Show the N largest immediate children (default: 10).")
    parser.add_argument("--folders", type=int, default=10, metavar="N",
                        help="Show the N largest folders anywhere in the tree (default: 10).")
    parser.add_argument("--max-depth", type=int, default=MAX_DEPTH,
                        help=f"Directory depth beyond which branches are dropped (default: {MAX_DEPTH}).")
    parser.add_argument("--workers", type=int, default=DEFAULT_WORKERS,
                        help=f"Concurrent filesystem workers (default: {DEFAULT_WORKERS}).")
    parser.add_argument("--top", type=int, default=TOP_FILES,
                        help=f"How many largest files to keep (default: {TOP_FILES}).")
    parser.add_argument("--floor", type=parse_size, default=LARGE_FILE_FLOOR,
                        help="Only files above this size count as large (default: 10MB).")
    parser.add_argument("--timeout", type=float, default=None,
                        help="Give up on a directory listing after this many seconds.")
    parser.add_argument("--follow-symlinks", action="store_true", help="Follow symbolic links.")
    parser.add_argument("--ignore", action="append", default=[], metavar="NAME",
                        help="Extra entry name to skip (repeatable).")
    parser.add_argument("--drives", action="store_true", help="List mounted volumes and exit.")
    parser.add_argument("--roots", action="store_true", help="List common directories and exit.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only warnings and errors.")
    return parser


def print_drives() -> None:
    for d in list_drives():
        flag = " (removable)" if d.removable else ""
        print(f"{d.mountpoint:<30} {d.fstype:<8} {format_bytes(d.used):>12} / "
              f"{format_bytes(d.total):>12}  {d.percent:5.1f}%{flag}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.quiet)

    if args.drives:
        print_drives()
        return 0
    if args.roots:
        for node in get_common_directories():
            print(f"{node.name:<12} {node.path}")
        return 0

    result = scan(
        args.path,
        max_depth=args.max_depth,
        ignore=IGNORED_NAMES | set(args.ignore),
        follow_symlinks=args.follow_symlinks,
        max_workers=args.workers,
        top_files=args.top,
        large_file_floor=args.floor,
        entry_timeout=args.timeout,
    )
    if result is None:
        logger.error("Path not found or not readable: %s", args.path)
        return 1

    if args.json:
        print(result_to_json(result, include_tree=not args.no_tree))
        return 0

    stats = result.stats
    print(f"{result.root.path}")
    print(f"Total: {format_bytes(stats.total_size)} | Files: {stats.file_count} | "
          f"Folders: {stats.dir_count} | Skipped: {stats.skipped}")
    print("\nCategories:")
    for label, b in stats.category_breakdown.items():
        print(f"  {label:<12} {format_bytes(b):>12} {format_share(b, stats.total_size):>7}")
    if stats.largest_files:
        print(f"\nLargest files (over {format_bytes(args.floor)}):")
        for f in stats.largest_files:
            print(f"  {format_bytes(f.size):>12}  {f.path}")
    kids = top_children(result.root, args.children)
    if kids:
        print("\nLargest items:")
        for n in kids:
            print(f"  {format_bytes(n.size):>12}  {n.name}{'/' if n.kind is NodeKind.DIRECTORY else ''}")
    folders = top_folders(result.root, args.folders) if args.folders > 0 else []
    if folders:
        print("\nLargest folders:")
        for size, path in folders:
            print(f"  {format_bytes(size):>12} {format_share(size, stats.total_size):>7}  {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
