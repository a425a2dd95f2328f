"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the deduplication system.

Key Components:
---------------
- HashAlgorithm: factory for incremental hash objects (SHA-1, xxHash64, ...).
- FileWalker: yields (path, size) for every regular file under a root.
- DigestPool: hashes batches of paths on a bounded set of workers.
- FileGrouper: builds the size index and the per-bucket digest index.
"""

from typing import Protocol, List, Dict, Tuple, Iterator, Optional, Callable
from dupsweep.core.models import HashResult


class HashState(Protocol):
    """The subset of the hashlib object API the hasher relies on."""
    def update(self, data: bytes) -> None: ...
    def digest(self) -> bytes: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-1 or xxHash
    without affecting the rest of the deduplication logic.
    """
    name: str
    digest_size: int

    def new(self) -> HashState:
        """Returns a fresh incremental hash object."""
        ...


class FileWalker(Protocol):
    def walk(self, stopped_flag: Optional[Callable[[], bool]] = None) -> Iterator[Tuple[str, int]]:
        """Yield (path, size) for each regular file; raise TraversalError on failure."""
        ...


class DigestPool(Protocol):
    def hash_paths(
        self,
        paths: List[str],
        algorithm: Optional[HashAlgorithm] = None,
        limit: Optional[int] = None,
        stopped_flag: Optional[Callable[[], bool]] = None,
    ) -> List[HashResult]:
        """Return exactly one HashResult per submitted path."""
        ...


class FileGrouper(Protocol):
    def group_by_size(self, entries: Iterator[Tuple[str, int]]) -> Dict[int, List[str]]:
        ...

    def group_by_digest(
        self,
        results: List[HashResult],
        error_callback: Optional[Callable[[str, BaseException], None]] = None,
    ) -> Dict[bytes, List[str]]:
        ...
