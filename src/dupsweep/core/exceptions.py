"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/exceptions.py
Fatal error types raised by the pipeline. Non-fatal per-file problems are
reported through callbacks instead.
"""


class DeduplicationError(RuntimeError):
    """Base class for errors that abort a run."""


class TraversalError(DeduplicationError):
    """The walker could not stat or enter an entry."""

    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"Cannot traverse {path}: {cause}")
        self.path = path
        self.cause = cause


class DigestReadError(DeduplicationError):
    """A file opened fine but failed while being read."""

    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"Read failure while hashing {path}: {cause}")
        self.path = path
        self.cause = cause


class DeletionError(DeduplicationError):
    """A duplicate or its emptied parent directory could not be removed."""

    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"Failed to remove {path}: {cause}")
        self.path = path
        self.cause = cause


class OperationCancelled(DeduplicationError):
    """Stop was requested while the pipeline was running."""
