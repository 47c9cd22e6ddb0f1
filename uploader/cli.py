"""
Command line helpers

    uploader hash FILE [FILE ...]
    uploader commit SOURCE DEST [--on-file-exists overwrite|compare_hash] [--root DIR]
"""

import argparse
import logging
import sys
from typing import List, Optional

from uploader.core.config import settings
from uploader.core.logging_config import configure_logging
from uploader.services.storage import LocalBackend, OnFileExists, ReadError, hash_file_content

logger = logging.getLogger(__name__)


def cmd_hash(args: argparse.Namespace) -> int:
    status = 0
    for path in args.paths:
        try:
            print(f"{hash_file_content(path, args.chunk_size)}  {path}")
        except ReadError as e:
            logger.error(f"Cannot hash {e.path}")
            status = 1
    return status


def cmd_commit(args: argparse.Namespace) -> int:
    backend = LocalBackend(root=args.root, chunk_size=args.chunk_size)
    outcome = backend.commit(args.source, args.dest, OnFileExists.parse(args.on_file_exists))

    if not outcome.ok:
        print(f"failed: {outcome.failure}", file=sys.stderr)
        return 1

    print("skipped (identical content)" if outcome.skipped else f"stored: {args.dest}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="uploader", description="Commit uploaded files to storage")
    parser.add_argument("--log-level", default=None, help="Logging level (default from settings)")
    parser.add_argument("--chunk-size", type=int, default=settings.hash_chunk_size,
                        help="Read size used when hashing files")
    subparsers = parser.add_subparsers(dest="command", required=True)

    hash_parser = subparsers.add_parser("hash", help="Print the SHA-256 of files")
    hash_parser.add_argument("paths", nargs="+")
    hash_parser.set_defaults(func=cmd_hash)

    commit_parser = subparsers.add_parser("commit", help="Copy a file into storage")
    commit_parser.add_argument("source")
    commit_parser.add_argument("dest")
    commit_parser.add_argument("--on-file-exists", choices=[s.value for s in OnFileExists],
                               default=OnFileExists.NONE.value)
    commit_parser.add_argument("--root", default=None, help="Directory relative destinations resolve against")
    commit_parser.set_defaults(func=cmd_commit)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
