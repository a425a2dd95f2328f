#!/usr/bin/env python3
"""
dupsweep CLI: find duplicate files by content and optionally delete them.
Dry run by default: nothing is removed unless --delete is given.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import logging
import os
import sys
import time
from typing import List, Optional, NoReturn

from dupsweep.aliases import READ_ERROR_ALIASES, READ_ERROR_CHOICES, READ_ERROR_HELP_TEXT, EPILOG_TEXT
from dupsweep.commands import DeduplicationCommand
from dupsweep.core.exceptions import DeduplicationError, OperationCancelled
from dupsweep.core.models import DeduplicationParams, DuplicateGroup, ReadErrorPolicy
from dupsweep.utils.convert_utils import ConvertUtils

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dupsweep",
            description="dupsweep: find duplicate files by content, keep the one with the shortest path",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--root",
            default="test",
            type=str,
            help="Root directory for the duplicate check. Default: test"
        )

        # Actions
        parser.add_argument(
            "--delete",
            action="store_true",
            help="Really delete the duplicates (all but the shortest path of each set)"
        )
        parser.add_argument(
            "--emptydir",
            action="store_true",
            help="After deleting a duplicate, also remove its directory if it became empty.\n"
                 "Only meaningful with --delete"
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            help="Move duplicates to the system trash instead of unlinking them"
        )

        # Engine options
        parser.add_argument(
            "--ncpu",
            default=os.cpu_count() or 1,
            type=int,
            metavar='N',
            help="Number of hashing workers. Default: number of CPUs"
        )
        parser.add_argument(
            "--prefilter",
            action="store_true",
            help="Split size groups by a fast xxHash of the first 64 KiB before full SHA-1 hashing"
        )
        parser.add_argument(
            "--read-errors",
            choices=READ_ERROR_CHOICES,
            default="abort",
            type=str,
            dest="read_errors",
            help=READ_ERROR_HELP_TEXT
        )

        # Filtering options
        parser.add_argument(
            "--min-size", "-m",
            default="0",
            type=str,
            metavar='',
            help="Minimum file size (e.g., 500KB, 1MB). Default: 0"
        )
        parser.add_argument(
            "--max-size", "-M",
            default=None,
            type=str,
            metavar='',
            help="Maximum file size (e.g., 10MB, 1GB). Default: no limit"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress the duplicate report"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show debug logging, progress and statistics"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.ncpu < 1:
            self.error_exit("--ncpu must be at least 1")

        if args.emptydir and not args.delete:
            self.warning("--emptydir has no effect without --delete")
        if args.trash and not args.delete:
            self.warning("--trash has no effect without --delete")

        if not os.path.exists(args.root):
            self.error_exit(f"Directory not found: {args.root}")

        try:
            min_size = ConvertUtils.human_to_bytes(args.min_size)
            if args.max_size is not None and ConvertUtils.human_to_bytes(args.max_size) < min_size:
                self.error_exit("Maximum size cannot be less than minimum size")
        except ValueError as e:
            self.error_exit(f"Invalid size format: {e}")

    def create_params(self, args: argparse.Namespace) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        try:
            return DeduplicationParams(
                root_dir=args.root,
                delete=args.delete,
                emptydir=args.emptydir,
                workers=args.ncpu,
                trash=args.trash,
                prefilter=args.prefilter,
                read_errors=READ_ERROR_ALIASES.get(args.read_errors, ReadErrorPolicy.ABORT),
                min_size_bytes=ConvertUtils.human_to_bytes(args.min_size),
                max_size_bytes=ConvertUtils.human_to_bytes(args.max_size) if args.max_size else None,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def configure_logging(self) -> None:
        logging.basicConfig(level=logging.ERROR, format=LOG_FORMAT)
        logging.getLogger("dupsweep").setLevel(logging.DEBUG if self.verbose else logging.ERROR)

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def report_error(self, path: str, error: BaseException) -> None:
        """Non-fatal per-file error: always printed, even with --quiet, then the run carries on."""
        print(f"⚠️  {path}: {error}", file=sys.stderr)

    def output_group(self, group: DuplicateGroup) -> None:
        """Print one duplicate set, already in retention order."""
        if self.quiet:
            return
        size_str = ConvertUtils.bytes_to_human(group.size)
        print(f"\nFiles with hash {group.hex_digest} ({size_str}, {len(group.files)} files):")
        for path in group.files:
            print(f"   {path}")
        print(f"   [KEEP] {group.keep}")

    def output_delete(self, path: str) -> None:
        if self.quiet:
            return
        print(f"Deleting dup {path}")

    def output_summary(self, groups: List[DuplicateGroup], params: DeduplicationParams) -> None:
        if self.quiet:
            return

        if not groups:
            print("No duplicate groups found.")
            return

        candidates = sum(len(g.to_delete) for g in groups)
        reclaimable = ConvertUtils.bytes_to_human(sum(g.reclaimable_bytes for g in groups))
        print()
        print("=" * 60)
        print(f"Found {len(groups)} duplicate groups ({candidates} files to delete, {reclaimable})")
        if not params.delete:
            print("Dry run: nothing was removed. Use --delete to remove the duplicates.")

    def run_deduplication(self, params: DeduplicationParams) -> List[DuplicateGroup]:
        """Execute the deduplication workflow."""
        command = DeduplicationCommand()
        try:
            groups, stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None,
                error_callback=self.report_error,
                group_callback=self.output_group,
                delete_callback=self.output_delete
            )
        except OperationCancelled:
            raise
        except DeduplicationError as e:
            self.error_exit(str(e))

        if self.verbose:
            sys.stderr.write("\n")
            print("\n" + stats.print_summary())
        return groups

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.configure_logging()

        self.validate_args(args)
        params = self.create_params(args)

        if self.verbose:
            print(f"Scanning {params.root_dir} with {params.workers} workers")

        groups = self.run_deduplication(params)
        self.output_summary(groups, params)

        if self.verbose:
            elapsed = time.time() - self.start_time
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


def main(argv=None) -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run(argv)
    except (KeyboardInterrupt, OperationCancelled):
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
