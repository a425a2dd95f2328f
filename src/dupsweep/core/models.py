"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for scanning, hashing and retention.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Optional, Union


# =============================
# Enums
# =============================

class ReadErrorPolicy(Enum):
    """
    What to do when a file opens fine but fails while being read.
    """
    ABORT = "abort"
    SKIP = "skip"

    @property
    def description(self) -> str:
        mapping = {
            ReadErrorPolicy.ABORT: "Stop the whole run on a mid-read I/O failure",
            ReadErrorPolicy.SKIP: "Report the file and leave it out of its group",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class ErrorKind(Enum):
    OPEN = "open"
    READ = "read"
    CANCELLED = "cancelled"


class Stage(str, Enum):
    SIZE = "Size grouping"
    FRONT = "Front-chunk Hash"
    FULL = "Full Hash"
    RETENTION = "Retention"


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class HashResult:
    """
    Outcome of hashing one path. Exactly one of `digest` / `error` is set.
    `index` is the position of the path in the batch it was submitted with.
    """
    path: str
    index: int
    digest: Optional[bytes] = None
    error: Optional[BaseException] = None
    error_kind: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __repr__(self):
        if self.ok:
            return f"<HashResult path={self.path}, digest={self.digest.hex()}>"
        return f"<HashResult path={self.path}, error={self.error_kind.value}: {self.error}>"


@dataclass
class DuplicateGroup:
    """
    Files of one size bucket sharing one digest.
    Once the retention order is applied, the last file is the one that survives.
    """
    size: int
    digest: bytes
    files: List[str]

    @property
    def hex_digest(self) -> str:
        return self.digest.hex()

    @property
    def keep(self) -> Optional[str]:
        return self.files[-1] if self.files else None

    @property
    def to_delete(self) -> List[str]:
        return self.files[:-1]

    @property
    def reclaimable_bytes(self) -> int:
        return self.size * len(self.to_delete)

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, digest={self.hex_digest[:12]}, count={len(self.files)}>"


@dataclass
class RetentionOutcome:
    kept: str
    deleted: List[str] = field(default_factory=list)
    removed_dirs: List[str] = field(default_factory=list)


class DeduplicationStats:
    """
    Statistics collected during one run.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.stage_stats: Dict[Stage, Dict[str, Union[int, float]]] = {}
        self.files_scanned: int = 0
        self.files_hashed: int = 0
        self.hash_errors: int = 0
        self.groups_found: int = 0
        self.files_deleted: int = 0
        self.dirs_removed: int = 0
        self.reclaimable_bytes: int = 0

    def update_stage(
            self,
            stage: Stage,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage not in self.stage_stats:
            self.stage_stats[stage] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage]["groups"] += groups_found
        self.stage_stats[stage]["files"] += files_processed
        self.stage_stats[stage]["time"] += duration

    def print_summary(self) -> str:
        labels = {
            Stage.SIZE: "📁 Size Groups",
            Stage.FRONT: "📄 Front Hash Groups",
            Stage.FULL: "🔍 Full Content Hash Groups",
            Stage.RETENTION: "🗑  Retention",
        }

        lines = [
            "📊 Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s",
            f"Files scanned: {self.files_scanned}, hashed: {self.files_hashed}, errors: {self.hash_errors}",
            f"Duplicate groups: {self.groups_found}, reclaimable: {self.reclaimable_bytes} bytes",
            f"Deleted files: {self.files_deleted}, removed directories: {self.dirs_removed}\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage, stage.value)
            if data["groups"] > 0 or data["time"] > 0:
                lines.append(f"{label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        return "\n".join(lines)


"""
DTO for run parameters with built-in validation.
Built once by the CLI (or a caller) and passed into the command.
"""

@dataclass
class DeduplicationParams:
    """Parameters for one deduplication run with validation."""
    root_dir: str
    delete: bool = False
    emptydir: bool = False
    workers: Optional[int] = None
    trash: bool = False
    prefilter: bool = False
    read_errors: ReadErrorPolicy = ReadErrorPolicy.ABORT
    min_size_bytes: int = 0
    max_size_bytes: Optional[int] = None

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.workers is None:
            self.workers = os.cpu_count() or 1
        if self.workers < 1:
            raise ValueError("Worker count must be at least 1")

        if self.min_size_bytes < 0:
            raise ValueError("Minimum size cannot be negative")

        if self.max_size_bytes is not None and self.max_size_bytes < self.min_size_bytes:
            raise ValueError("Maximum size cannot be less than minimum size")

        if not isinstance(self.read_errors, ReadErrorPolicy):
            self.read_errors = ReadErrorPolicy(self.read_errors)
