from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from .codec import Direction
from .runner import FileOpError, OperationCancelled, SUFFIX, run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="byteshift",
        description=(
            "Shift every byte of a file by one to produce '<file>" + SUFFIX + "', "
            "or shift it back. This is NOT secure encryption."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging (includes a hex dump of the last 16 input bytes).",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not print progress.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    encrypt_parser = subparsers.add_parser(
        "encrypt",
        help=f"Write '<file>{SUFFIX}' next to each input file.",
    )
    encrypt_parser.add_argument("paths", nargs="+", type=Path, help="Files to encrypt.")
    encrypt_parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Write outputs into this directory instead of next to the inputs.",
    )

    decrypt_parser = subparsers.add_parser(
        "decrypt",
        help=f"Restore '<file>' from each '<file>{SUFFIX}'.",
    )
    decrypt_parser.add_argument("paths", nargs="+", type=Path, help="Files to decrypt.")
    decrypt_parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Write outputs into this directory instead of next to the inputs.",
    )
    decrypt_parser.add_argument(
        "--force",
        action="store_true",
        help=f"Decrypt files lacking the '{SUFFIX}' suffix (output gets '.decrypted').",
    )

    subparsers.add_parser("gui", help="Open the desktop window.")

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _progress_printer(label: str) -> Callable[[int, int], None]:
    def report(processed: int, total: int) -> None:
        percent = int(processed * 100 / total) if total else 100
        end = "\n" if processed >= total else ""
        print(f"\r{label}: {percent:3d}%", end=end, file=sys.stderr, flush=True)

    return report


def run_paths(
    paths: Sequence[Path],
    direction: Direction,
    out_dir: Optional[Path] = None,
    force: bool = False,
    quiet: bool = False,
) -> int:
    failures = 0
    for path in paths:
        progress_cb = None if quiet else _progress_printer(path.name)
        try:
            out_path = run(
                path,
                direction,
                out_dir=out_dir,
                strict=not force,
                progress_cb=progress_cb,
            )
        except (FileOpError, OperationCancelled) as exc:
            failures += 1
            print(f"error: {exc}", file=sys.stderr)
            continue
        print(out_path)
    return 1 if failures else 0


def run_gui() -> int:
    from . import app

    return app.main()


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "encrypt":
        return run_paths(args.paths, Direction.ENCODE, out_dir=args.out_dir, quiet=args.quiet)

    if args.command == "decrypt":
        return run_paths(
            args.paths,
            Direction.DECODE,
            out_dir=args.out_dir,
            force=args.force,
            quiet=args.quiet,
        )

    if args.command == "gui":
        return run_gui()

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
