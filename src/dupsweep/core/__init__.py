"""
Core deduplication engine: walker, hasher, digest pool, grouper and stages.

This package contains the performance-critical foundation of dupsweep:
- FileScannerImpl: recursive walk yielding (path, size) for regular files
- HasherImpl + Sha1AlgorithmImpl / XXHashAlgorithmImpl: streaming content hashing
- ThreadDigestPool: bounded worker threads with count-based result collection
- FileGrouperImpl: size index and per-bucket digest index
- Stages: size → optional front-chunk prefilter → full SHA-1
- Sorter: retention order inside duplicate groups
"""

from .scanner import FileScannerImpl
from .hasher import HasherImpl, Sha1AlgorithmImpl, XXHashAlgorithmImpl
from .pool import ThreadDigestPool
from .grouper import FileGrouperImpl
from .sorter import Sorter
from .exceptions import (
    DeduplicationError, TraversalError, DigestReadError, DeletionError, OperationCancelled)
from .models import (
    HashResult, DuplicateGroup, DeduplicationParams, DeduplicationStats,
    ReadErrorPolicy, ErrorKind, RetentionOutcome)

__all__ = [
    "FileScannerImpl",
    "HasherImpl",
    "Sha1AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "ThreadDigestPool",
    "FileGrouperImpl",
    "Sorter",
    "DeduplicationError",
    "TraversalError",
    "DigestReadError",
    "DeletionError",
    "OperationCancelled",
    "HashResult",
    "DuplicateGroup",
    "DeduplicationParams",
    "DeduplicationStats",
    "ReadErrorPolicy",
    "ErrorKind",
    "RetentionOutcome",
]
