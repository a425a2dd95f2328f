"""
Shared fixtures for dupsweep tests.
Creates isolated temporary directory trees with controlled file contents.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def hello_tree(temp_dir) -> Dict[str, Path]:
    """
    The basic three-file tree:
    - a.txt   = "hello"
    - b/b.txt = "hello"  (duplicate of a.txt, longer path)
    - c.txt   = "world"  (same size, different content)
    """
    (temp_dir / "b").mkdir()
    files = {
        "a": temp_dir / "a.txt",
        "b": temp_dir / "b" / "b.txt",
        "c": temp_dir / "c.txt",
    }
    files["a"].write_bytes(b"hello")
    files["b"].write_bytes(b"hello")
    files["c"].write_bytes(b"world")
    return files


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    A mixed tree:
    - 3 copies of 1KB of 'A' (one in a subdirectory)
    - 2 copies of 2KB of 'B'
    - 2 unique files, one sharing the 1KB size
    - 1 empty file
    """
    files = {}

    content_a = b"A" * 1024
    files["dup1_a"] = temp_dir / "dup1_a.txt"
    files["dup1_b"] = temp_dir / "dup1_b.txt"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)

    content_b = b"B" * 2048
    files["dup2_a"] = temp_dir / "dup2_a.bin"
    files["dup2_b"] = temp_dir / "dup2_b.bin"
    files["dup2_a"].write_bytes(content_b)
    files["dup2_b"].write_bytes(content_b)

    files["unique1"] = temp_dir / "unique1.txt"
    files["unique1"].write_bytes(b"C" * 1024)
    files["unique2"] = temp_dir / "unique2.txt"
    files["unique2"].write_bytes(b"D" * 2500)

    files["empty"] = temp_dir / "empty.txt"
    files["empty"].write_bytes(b"")

    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)

    return files
