"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Filesystem mutations used by the retention policy: unlink or trash a file,
and remove a directory only if it is empty.
"""
import errno
import logging
import os

from send2trash import send2trash

from dupsweep.core.exceptions import DeletionError

logger = logging.getLogger(__name__)

# rmdir reports a non-empty directory as ENOTEMPTY, or EEXIST on some systems
_NOT_EMPTY_ERRNOS = (errno.ENOTEMPTY, errno.EEXIST)


class FileService:

    @staticmethod
    def delete_file(file_path: str) -> None:
        """Permanently removes a file."""
        try:
            os.remove(file_path)
        except OSError as e:
            raise DeletionError(file_path, e) from e

    @staticmethod
    def move_to_trash(file_path: str) -> None:
        """Moves a file to the system trash."""
        try:
            send2trash(file_path)
        except Exception as e:
            raise DeletionError(file_path, e) from e

    @classmethod
    def remove(cls, file_path: str, trash: bool = False) -> None:
        if trash:
            cls.move_to_trash(file_path)
        else:
            cls.delete_file(file_path)

    @staticmethod
    def remove_dir_if_empty(dir_path: str) -> bool:
        """
        Removes `dir_path` if it is empty.
        Returns:
            True if the directory was removed, False if it still has entries
        Raises:
            DeletionError: any other removal failure
        """
        try:
            os.rmdir(dir_path)
        except OSError as e:
            if e.errno in _NOT_EMPTY_ERRNOS:
                logger.debug(f"{dir_path} is not empty")
                return False
            raise DeletionError(dir_path, e) from e
        logger.debug(f"Removed empty directory {dir_path}")
        return True
