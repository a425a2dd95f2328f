"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/duplicate_service.py
Retention policy: keep one file per duplicate group, remove the others.
"""
import logging
import os
from typing import List, Optional, Callable, Tuple

from dupsweep.core.models import DuplicateGroup, RetentionOutcome
from dupsweep.core.sorter import Sorter
from dupsweep.services.file_service import FileService

logger = logging.getLogger(__name__)


class DuplicateService:

    @staticmethod
    def plan_retention(group: DuplicateGroup) -> Tuple[str, List[str]]:
        """
        Applies the retention order to the group (in place).
        Returns:
            - path of the file to keep (shortest path string)
            - paths of the files to delete
        """
        Sorter.sort_files_inside_groups([group])
        return group.keep, group.to_delete

    @staticmethod
    def apply_retention(
            group: DuplicateGroup,
            delete: bool = False,
            emptydir: bool = False,
            trash: bool = False,
            root_dir: Optional[str] = None,
            on_delete: Optional[Callable[[str], None]] = None
    ) -> RetentionOutcome:
        """
        Keeps one file of the group and deletes the rest when `delete` is set.

        Args:
            group: Duplicate group; reordered in place for retention
            delete: Actually remove files. Otherwise nothing is touched (dry run)
            emptydir: After each removal, remove the parent directory if it is empty
            trash: Move files to the system trash instead of unlinking them
            root_dir: Scan root; never removed by the empty directory cleanup
            on_delete: Called with each deletion candidate before it is removed

        Raises:
            DeletionError: a file, or an emptied directory, could not be removed
        """
        kept, candidates = DuplicateService.plan_retention(group)
        outcome = RetentionOutcome(kept=kept)
        protected = os.path.normpath(root_dir) if root_dir else None

        for path in candidates:
            if on_delete:
                on_delete(path)
            if not delete:
                continue

            logger.debug(f"really del {path}")
            FileService.remove(path, trash=trash)
            outcome.deleted.append(path)

            if emptydir:
                parent = os.path.dirname(path)
                if not parent or os.path.normpath(parent) == protected:
                    continue
                logger.debug(f"attempt del dir {parent}")
                if FileService.remove_dir_if_empty(parent):
                    outcome.removed_dirs.append(parent)

        return outcome
