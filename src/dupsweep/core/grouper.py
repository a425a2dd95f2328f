"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Builds the size index for a walk and the digest index for one size bucket.
"""

import logging
from collections import defaultdict
from typing import List, Dict, Tuple, Iterable, Callable, Optional

from dupsweep.core.exceptions import DigestReadError
from dupsweep.core.interfaces import FileGrouper
from dupsweep.core.models import HashResult, ErrorKind, ReadErrorPolicy

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[str, BaseException], None]


class FileGrouperImpl(FileGrouper):

    def __init__(self, read_errors: ReadErrorPolicy = ReadErrorPolicy.ABORT):
        self.read_errors = read_errors

    @staticmethod
    def group_by_size(entries: Iterable[Tuple[str, int]]) -> Dict[int, List[str]]:
        """
        Groups walked (path, size) entries by size, walk order preserved.
        Sizes with a single file are dropped.
        """
        index: Dict[int, List[str]] = defaultdict(list)
        for path, size in entries:
            index[size].append(path)
        return {size: paths for size, paths in index.items() if len(paths) >= 2}

    def group_by_digest(
            self,
            results: List[HashResult],
            error_callback: Optional[ErrorCallback] = None
    ) -> Dict[bytes, List[str]]:
        """
        Groups the results of one size bucket by digest.

        Members are ordered by their position in the bucket, not by the order
        the results arrived in. Failed results are reported through
        `error_callback` and left out; digests with a single file are dropped.

        Raises:
            DigestReadError: the first read failure under ReadErrorPolicy.ABORT,
                raised once the other errors of the bucket have been reported
        """
        groups: Dict[bytes, List[HashResult]] = defaultdict(list)
        fatal: Optional[HashResult] = None
        for result in sorted(results, key=lambda r: r.index):
            if result.ok:
                groups[result.digest].append(result)
                continue

            if result.error_kind == ErrorKind.READ and self.read_errors == ReadErrorPolicy.ABORT:
                # the rest of the bucket is still reported before aborting
                fatal = fatal or result
                continue

            logger.warning(f"{result.path}: {result.error}")
            if error_callback:
                error_callback(result.path, result.error)

        if fatal:
            raise DigestReadError(fatal.path, fatal.error) from fatal.error

        return {
            digest: [r.path for r in members]
            for digest, members in groups.items()
            if len(members) >= 2
        }
