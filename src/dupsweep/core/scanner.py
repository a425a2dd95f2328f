"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Recursive directory walker.
Features:
- Yields (path, size) for every regular file, in lexical order
- Skips directories, symlinks, devices, sockets and FIFOs; symlinked
  directories are never descended
- Optional size filters
- Any traversal error aborts the walk with TraversalError
"""

import os
import stat
import logging
from typing import Iterator, Optional, Callable, Tuple

from dupsweep.core.interfaces import FileWalker
from dupsweep.core.exceptions import TraversalError, OperationCancelled

logger = logging.getLogger(__name__)


class FileScannerImpl(FileWalker):
    """
    Walks a tree rooted at `root_dir`.

    Attributes:
        root_dir: Root directory (or single file) to walk
        min_size: Minimum file size in bytes (optional)
        max_size: Maximum file size in bytes (optional)
    """

    def __init__(
        self,
        root_dir: str,
        min_size: Optional[int] = None,
        max_size: Optional[int] = None,
    ):
        self.root_dir = root_dir
        self.min_size = min_size
        self.max_size = max_size

    def walk(self, stopped_flag: Optional[Callable[[], bool]] = None) -> Iterator[Tuple[str, int]]:
        """
        Yields (path, size) for each regular file that passes the size filters.
        Raises:
            TraversalError: root missing, directory unreadable, or lstat failure
            OperationCancelled: stopped_flag returned True
        """
        logger.debug(f"Walking {self.root_dir} (min_size={self.min_size}, max_size={self.max_size})")

        try:
            root_stat = os.lstat(self.root_dir)
        except OSError as e:
            raise TraversalError(self.root_dir, e) from e

        if stat.S_ISREG(root_stat.st_mode):
            entry = self._accept(self.root_dir, root_stat)
            if entry:
                yield entry
            return
        if not stat.S_ISDIR(root_stat.st_mode):
            logger.debug(f"Root {self.root_dir} is not a directory or regular file, nothing to walk")
            return

        for root, dirs, files in os.walk(self.root_dir, onerror=self._raise_traversal_error):
            if stopped_flag and stopped_flag():
                logger.debug("Walk interrupted by user")
                raise OperationCancelled("Scan cancelled")

            # lexical order, so repeated runs see the same walk order
            dirs.sort()
            for filename in sorted(files):
                path = os.path.join(root, filename)
                try:
                    st = os.lstat(path)
                except OSError as e:
                    raise TraversalError(path, e) from e

                # skip over non-regular files
                if not stat.S_ISREG(st.st_mode):
                    logger.debug(f"Skipping non-regular entry: {path}")
                    continue

                entry = self._accept(path, st)
                if entry:
                    yield entry

    def _accept(self, path: str, st: os.stat_result) -> Optional[Tuple[str, int]]:
        size = st.st_size
        if not self._size_passes(size):
            logger.debug(f"Skipping {path} (size {size} bytes outside range)")
            return None
        logger.debug(f"walk path {path} ({size} bytes)")
        return path, size

    @staticmethod
    def _raise_traversal_error(error: OSError) -> None:
        raise TraversalError(error.filename or "<unknown>", error) from error

    def _size_passes(self, size: int) -> bool:
        if self.min_size is not None and size < self.min_size:
            return False
        if self.max_size is not None and size > self.max_size:
            return False
        return True
