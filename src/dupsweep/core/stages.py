"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Pipeline stages of the duplicate detection engine.

STAGE CONTRACTS
---------------
SizeStageImpl   : walk → size index (buckets of 2+ same-size paths)
FrontHashStage  : optional; splits one size bucket by an xxHash64 of the
                  first 64 KiB, keeping only sub-buckets of 2+ paths
FullHashStage   : hashes one bucket with SHA-1 on the pool and returns its
                  duplicate groups

Hashing stages run their bucket through the shared DigestPool, so results
are collected by count, and honour stopped_flag through the pool.
"""

import logging
from typing import List, Dict, Optional, Callable, Tuple

from dupsweep.core.grouper import FileGrouperImpl, ErrorCallback
from dupsweep.core.hasher import Sha1AlgorithmImpl, XXHashAlgorithmImpl, FRONT_CHUNK_SIZE
from dupsweep.core.interfaces import DigestPool, FileWalker
from dupsweep.core.models import DuplicateGroup, Stage

logger = logging.getLogger(__name__)


class SizeStageImpl:
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(
            self,
            walker: FileWalker,
            stopped_flag: Optional[Callable[[], bool]] = None,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Tuple[Dict[int, List[str]], int]:
        """
        Walks the tree and groups regular files by size.
        Returns:
            (size index with 2+ paths per size, number of files walked)
        """
        scanned = 0

        def counted():
            nonlocal scanned
            for entry in walker.walk(stopped_flag=stopped_flag):
                scanned += 1
                if progress_callback and scanned % 5000 == 0:
                    progress_callback(Stage.SIZE.value, scanned, None)
                yield entry

        index = self.grouper.group_by_size(counted())
        if progress_callback:
            progress_callback(Stage.SIZE.value, scanned, scanned)
        logger.debug(f"Walked {scanned} files, {len(index)} size buckets with candidates")
        return index, scanned


class FrontHashStage:
    def __init__(self, pool: DigestPool, grouper: FileGrouperImpl, chunk_size: int = FRONT_CHUNK_SIZE):
        self.pool = pool
        self.grouper = grouper
        self.chunk_size = chunk_size
        self.algorithm = XXHashAlgorithmImpl()

    def process(
            self,
            size: int,
            paths: List[str],
            error_callback: Optional[ErrorCallback] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> List[List[str]]:
        """
        Splits one size bucket by front-chunk hash.
        Buckets no larger than the chunk are returned untouched.
        """
        if size <= self.chunk_size:
            return [paths]

        results = self.pool.hash_paths(
            paths, algorithm=self.algorithm, limit=self.chunk_size, stopped_flag=stopped_flag
        )
        sub_buckets = list(self.grouper.group_by_digest(results, error_callback).values())
        logger.debug(f"Front hash split {len(paths)} files of {size} bytes into {len(sub_buckets)} candidates")
        return sub_buckets


class FullHashStage:
    def __init__(self, pool: DigestPool, grouper: FileGrouperImpl):
        self.pool = pool
        self.grouper = grouper
        self.algorithm = Sha1AlgorithmImpl()

    def process(
            self,
            size: int,
            paths: List[str],
            error_callback: Optional[ErrorCallback] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> List[DuplicateGroup]:
        results = self.pool.hash_paths(paths, algorithm=self.algorithm, stopped_flag=stopped_flag)
        digest_index = self.grouper.group_by_digest(results, error_callback)
        return [
            DuplicateGroup(size=size, digest=digest, files=files)
            for digest, files in digest_index.items()
        ]
