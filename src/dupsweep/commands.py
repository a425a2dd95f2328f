"""
Unified command orchestrator for deduplication.
This is the SINGLE source of truth for the run workflow: the CLI and library
callers both go through it.
"""
import logging
import time
from typing import List, Optional, Callable, Tuple

from dupsweep.core.grouper import FileGrouperImpl
from dupsweep.core.models import DuplicateGroup, DeduplicationStats, DeduplicationParams, Stage
from dupsweep.core.pool import ThreadDigestPool
from dupsweep.core.scanner import FileScannerImpl
from dupsweep.core.stages import SizeStageImpl, FrontHashStage, FullHashStage
from dupsweep.services.duplicate_service import DuplicateService

logger = logging.getLogger(__name__)


class DeduplicationCommand:
    """
    Orchestrates the whole run:
    1. Walk the tree and build the size index
    2. For every size bucket, in turn: hash on the pool (optionally after a
       front-chunk prefilter), group by digest, apply the retention policy
    3. Return the duplicate groups and statistics

    Usage:
        params = DeduplicationParams(root_dir="photos", delete=True)
        groups, stats = DeduplicationCommand().execute(
            params,
            error_callback=lambda path, err: print(path, err),
            group_callback=print_group,
        )
    """

    def __init__(self):
        self._errors: List[Tuple[str, BaseException]] = []

    def execute(
            self,
            params: DeduplicationParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None,
            error_callback: Optional[Callable[[str, BaseException], None]] = None,
            group_callback: Optional[Callable[[DuplicateGroup], None]] = None,
            delete_callback: Optional[Callable[[str], None]] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Execute one run with the given parameters.

        Args:
            params: Validated run parameters
            progress_callback: (stage, current, total) -> None
            stopped_flag: () -> bool, True when the run should stop
            error_callback: (path, error) -> None for non-fatal per-file errors
            group_callback: called with each duplicate group, already in
                retention order, before any of its files is removed
            delete_callback: called with each deletion candidate right before
                it is removed (or would be, in a dry run)

        Returns:
            Tuple of (duplicate_groups, statistics)

        Raises:
            TraversalError, DigestReadError, DeletionError: fatal errors
            OperationCancelled: stopped_flag returned True
        """
        self._errors = []
        stats = DeduplicationStats()
        total_start_time = time.time()

        def report_error(path: str, error: BaseException) -> None:
            stats.hash_errors += 1
            self._errors.append((path, error))
            if error_callback:
                error_callback(path, error)

        grouper = FileGrouperImpl(read_errors=params.read_errors)
        scanner = FileScannerImpl(
            root_dir=params.root_dir,
            min_size=params.min_size_bytes or None,
            max_size=params.max_size_bytes
        )

        # Step 1: size index
        start_time = time.time()
        size_index, stats.files_scanned = SizeStageImpl(grouper).process(
            scanner, stopped_flag=stopped_flag, progress_callback=progress_callback
        )
        stats.update_stage(Stage.SIZE, len(size_index), stats.files_scanned, time.time() - start_time)

        all_groups: List[DuplicateGroup] = []
        total_candidates = sum(len(paths) for paths in size_index.values())
        processed = 0

        # Step 2: one size bucket at a time, all on the same pool
        with ThreadDigestPool(workers=params.workers) as pool:
            front_stage = FrontHashStage(pool, grouper) if params.prefilter else None
            full_stage = FullHashStage(pool, grouper)

            for size, paths in size_index.items():
                logger.debug(f"File with size {size}: {len(paths)} candidates")
                candidates = [paths]

                if front_stage:
                    start_time = time.time()
                    candidates = front_stage.process(size, paths, report_error, stopped_flag)
                    stats.update_stage(
                        Stage.FRONT, len(candidates), len(paths) if size > front_stage.chunk_size else 0,
                        time.time() - start_time
                    )

                for bucket in candidates:
                    start_time = time.time()
                    groups = full_stage.process(size, bucket, report_error, stopped_flag)
                    stats.files_hashed += len(bucket)
                    stats.update_stage(Stage.FULL, len(groups), len(bucket), time.time() - start_time)

                    start_time = time.time()
                    for group in groups:
                        self._retain(group, params, stats, group_callback, delete_callback)
                    stats.update_stage(
                        Stage.RETENTION, len(groups), sum(len(g.files) for g in groups), time.time() - start_time
                    )
                    all_groups.extend(groups)

                processed += len(paths)
                if progress_callback:
                    progress_callback(Stage.FULL.value, processed, total_candidates)

        stats.groups_found = len(all_groups)
        stats.total_time = time.time() - total_start_time
        return all_groups, stats

    @staticmethod
    def _retain(
            group: DuplicateGroup,
            params: DeduplicationParams,
            stats: DeduplicationStats,
            group_callback: Optional[Callable[[DuplicateGroup], None]],
            delete_callback: Optional[Callable[[str], None]]
    ) -> None:
        DuplicateService.plan_retention(group)
        if group_callback:
            group_callback(group)

        outcome = DuplicateService.apply_retention(
            group,
            delete=params.delete,
            emptydir=params.emptydir,
            trash=params.trash,
            root_dir=params.root_dir,
            on_delete=delete_callback
        )
        stats.reclaimable_bytes += group.reclaimable_bytes
        stats.files_deleted += len(outcome.deleted)
        stats.dirs_removed += len(outcome.removed_dirs)

    def get_errors(self) -> List[Tuple[str, BaseException]]:
        """Non-fatal per-file errors reported by the last run."""
        return list(self._errors)
