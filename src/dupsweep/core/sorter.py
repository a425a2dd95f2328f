"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/sorter.py
Pure ordering logic for duplicate groups: zero dependencies outside core.
"""
from typing import List
from dupsweep.core.models import DuplicateGroup


class Sorter:
    """
    Orders the files inside duplicate groups for retention. Modifies groups in-place.

    Files are sorted by path string length, longest first. The sort is stable,
    so paths of equal length keep their walk order. The LAST file after
    sorting (a shortest path) is the one that is kept; every other file is a
    deletion candidate.
    """

    @staticmethod
    def retention_order(paths: List[str]) -> List[str]:
        return sorted(paths, key=len, reverse=True)

    @staticmethod
    def sort_files_inside_groups(groups: List[DuplicateGroup]) -> None:
        for group in groups:
            group.files = Sorter.retention_order(group.files)
