"""
dupsweep: find duplicate files by content and keep only one of each.

Core features:
- Size grouping, then SHA-1 content digests computed on a bounded thread pool
- Optional xxHash64 front-chunk prefilter for large trees
- Deterministic retention: the file with the shortest path string is kept
- Dry run by default; deletion (or move to trash via send2trash) on request,
  with optional cleanup of directories left empty
"""

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("dupsweep")
except PackageNotFoundError:
    from pathlib import Path
    try:
        import tomllib  # Python 3.11+
    except ImportError:
        import tomli as tomllib  # Python < 3.11: pip install tomli

    _pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if _pyproject.exists():
        with open(_pyproject, "rb") as f:
            __version__ = tomllib.load(f)["project"]["version"]
    else:
        __version__ = "0.0.0"

# Public API, only what users should import directly
from dupsweep.commands import DeduplicationCommand
from dupsweep.core import (
    DeduplicationParams, DeduplicationStats, DuplicateGroup, HashResult, ReadErrorPolicy,
    ThreadDigestPool, DeduplicationError, TraversalError, DigestReadError, DeletionError,
    OperationCancelled)
from dupsweep.utils.convert_utils import ConvertUtils
from dupsweep.services import DuplicateService, FileService

__all__ = [
    "DeduplicationCommand",
    "DeduplicationParams",
    "DeduplicationStats",
    "DuplicateGroup",
    "HashResult",
    "ReadErrorPolicy",
    "ThreadDigestPool",
    "DeduplicationError",
    "TraversalError",
    "DigestReadError",
    "DeletionError",
    "OperationCancelled",
    "ConvertUtils",
    "DuplicateService",
    "FileService",
    "__version__",
]
