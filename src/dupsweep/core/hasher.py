"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
File hashing utilities with pluggable hash algorithms.

Content is streamed through the hash object in fixed-size chunks, so memory
use does not depend on file size. Open failures and read failures are kept
apart: the first means the file is gone or unreadable, the second that the
I/O layer broke mid-read.
"""

import hashlib
import logging
from typing import Optional

import xxhash

from dupsweep.core.interfaces import HashAlgorithm, HashState
from dupsweep.core.models import HashResult, ErrorKind

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 64 * 1024
FRONT_CHUNK_SIZE = 64 * 1024


# Use the same way to implement and use any other hashing algorithm
class Sha1AlgorithmImpl(HashAlgorithm):
    name = "sha1"
    digest_size = 20

    def new(self) -> HashState:
        return hashlib.sha1()


class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxh64"
    digest_size = 8

    def new(self) -> HashState:
        return xxhash.xxh64()


class HasherImpl:
    """
    Hashes one file at a time. Never raises for I/O problems: every outcome
    comes back as a HashResult.
    """

    def __init__(self, algorithm: HashAlgorithm = None, chunk_size: int = READ_CHUNK_SIZE):
        self.algorithm = algorithm or Sha1AlgorithmImpl()
        self.chunk_size = chunk_size

    def hash_file(
            self,
            path: str,
            index: int = 0,
            algorithm: Optional[HashAlgorithm] = None,
            limit: Optional[int] = None
    ) -> HashResult:
        """
        Computes the digest of `path`, or of its first `limit` bytes.
        Args:
            path: File to hash
            index: Position of the path in its batch, copied into the result
            algorithm: Overrides the hasher's default algorithm
            limit: Hash at most this many bytes from the start of the file
        Returns:
            HashResult carrying either the digest or the error and its kind
        """
        algorithm = algorithm or self.algorithm
        try:
            f = open(path, "rb")
        except OSError as e:
            logger.debug(f"Cannot open {path}: {e}")
            return HashResult(path=path, index=index, error=e, error_kind=ErrorKind.OPEN)

        with f:
            try:
                digest = self._digest_stream(f, algorithm.new(), limit)
            except OSError as e:
                logger.debug(f"Read failed for {path}: {e}")
                return HashResult(path=path, index=index, error=e, error_kind=ErrorKind.READ)

        logger.debug(f"path {path}, {algorithm.name} {digest.hex()}")
        return HashResult(path=path, index=index, digest=digest)

    def _digest_stream(self, f, state: HashState, limit: Optional[int]) -> bytes:
        remaining = limit
        while remaining is None or remaining > 0:
            size = self.chunk_size if remaining is None else min(self.chunk_size, remaining)
            data = f.read(size)
            if not data:
                break
            state.update(data)
            if remaining is not None:
                remaining -= len(data)
        return state.digest()
