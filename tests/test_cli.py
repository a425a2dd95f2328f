"""
CLI tests: argument parsing, report output, exit codes and deletion safety.
"""
import os
import sys
from unittest import mock

import pytest

from dupsweep.cli import CLIApplication, main
from dupsweep.core.models import ReadErrorPolicy
from dupsweep.services import file_service as file_service_module


class TestArgumentParsing:

    def test_defaults(self):
        args = CLIApplication.parse_args([])
        assert args.root == "test"
        assert args.delete is False
        assert args.emptydir is False
        assert args.trash is False
        assert args.prefilter is False
        assert args.read_errors == "abort"
        assert args.ncpu == (os.cpu_count() or 1)

    def test_all_flags(self):
        args = CLIApplication.parse_args([
            "--root", "/data", "--delete", "--emptydir", "--ncpu", "3",
            "--trash", "--prefilter", "--read-errors", "skip", "-m", "1K", "-M", "2MB", "-v"
        ])
        params = CLIApplication().create_params(args)

        assert params.root_dir == "/data"
        assert params.delete and params.emptydir and params.trash and params.prefilter
        assert params.workers == 3
        assert params.read_errors == ReadErrorPolicy.SKIP
        assert params.min_size_bytes == 1024
        assert params.max_size_bytes == 2 * 1024 * 1024

    def test_invalid_read_error_policy(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication.parse_args(["--read-errors", "retry"])
        assert exc_info.value.code == 2

    def test_ncpu_must_be_positive(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication().run(["--root", str(temp_dir), "--ncpu", "0"])
        assert exc_info.value.code == 1
        assert "--ncpu must be at least 1" in capsys.readouterr().err

    def test_emptydir_without_delete_warns(self, temp_dir, capsys):
        CLIApplication().run(["--root", str(temp_dir), "--emptydir"])
        assert "--emptydir has no effect without --delete" in capsys.readouterr().err

    def test_bad_size_format(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLIApplication().run(["--root", str(temp_dir), "--min-size", "lots"])
        assert exc_info.value.code == 1
        assert "Invalid size format" in capsys.readouterr().err


class TestReport:

    def test_dry_run_report(self, hello_tree, temp_dir, capsys):
        CLIApplication().run(["--root", str(temp_dir)])

        out = capsys.readouterr().out
        assert "Files with hash aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d" in out  # sha1("hello")
        assert f"Deleting dup {hello_tree['b']}" in out
        assert f"[KEEP] {hello_tree['a']}" in out
        assert "Dry run: nothing was removed" in out
        assert hello_tree["b"].exists()

    def test_no_duplicates(self, temp_dir, capsys):
        (temp_dir / "only.txt").write_bytes(b"x")
        CLIApplication().run(["--root", str(temp_dir)])
        assert "No duplicate groups found." in capsys.readouterr().out

    def test_quiet_suppresses_report(self, hello_tree, temp_dir, capsys):
        CLIApplication().run(["--root", str(temp_dir), "--quiet"])
        assert capsys.readouterr().out == ""

    def test_verbose_prints_statistics(self, hello_tree, temp_dir, capsys):
        CLIApplication().run(["--root", str(temp_dir), "--verbose"])
        assert "Deduplication Statistics" in capsys.readouterr().out

    def test_open_errors_go_to_stderr(self, hello_tree, temp_dir, capsys):
        from dupsweep.core import hasher as hasher_module
        locked = str(hello_tree["c"])
        real_open = open

        def guarded_open(path, *args, **kwargs):
            if str(path) == locked:
                raise PermissionError(13, "Permission denied")
            return real_open(path, *args, **kwargs)

        with mock.patch.object(hasher_module, "open", guarded_open, create=True):
            CLIApplication().run(["--root", str(temp_dir)])

        err = capsys.readouterr().err
        assert f"⚠️  {locked}: " in err
        assert "Permission denied" in err

    def test_quiet_still_prints_per_file_errors(self, hello_tree, temp_dir, capsys, monkeypatch):
        from dupsweep.core import hasher as hasher_module
        locked = temp_dir / "locked.txt"
        locked.write_bytes(b"hello")
        real_open = open

        def guarded_open(path, *args, **kwargs):
            if str(path) == str(locked):
                raise PermissionError(13, "Permission denied")
            return real_open(path, *args, **kwargs)

        monkeypatch.setattr(hasher_module, "open", guarded_open, raising=False)

        main(["--root", str(temp_dir), "-q"])

        captured = capsys.readouterr()
        assert captured.out == ""
        assert f"⚠️  {locked}: " in captured.err

    def test_read_error_help_lists_policy_descriptions(self, capsys):
        with pytest.raises(SystemExit):
            CLIApplication.parse_args(["--help"])
        out = capsys.readouterr().out
        assert ReadErrorPolicy.ABORT.description in out
        assert ReadErrorPolicy.SKIP.description in out


class TestDeletion:

    def test_delete_removes_longer_path(self, hello_tree, temp_dir):
        CLIApplication().run(["--root", str(temp_dir), "--delete", "--ncpu", "2"])
        assert hello_tree["a"].exists()
        assert not hello_tree["b"].exists()
        assert hello_tree["c"].exists()

    def test_delete_with_emptydir(self, hello_tree, temp_dir):
        CLIApplication().run(["--root", str(temp_dir), "--delete", "--emptydir"])
        assert not hello_tree["b"].parent.exists()

    def test_trash_flag_routes_to_send2trash(self, hello_tree, temp_dir):
        with mock.patch.object(file_service_module, "send2trash") as mock_trash:
            CLIApplication().run(["--root", str(temp_dir), "--delete", "--trash"])
        mock_trash.assert_called_once_with(str(hello_tree["b"]))


class TestExitCodes:

    def test_missing_root_exits_1(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--root", str(temp_dir / "missing")])
        assert exc_info.value.code == 1
        assert "❌ Error" in capsys.readouterr().err

    def test_fatal_delete_error_exits_1(self, hello_tree, temp_dir, capsys):
        with mock.patch.object(os, "remove", side_effect=PermissionError(1, "Operation not permitted")):
            with pytest.raises(SystemExit) as exc_info:
                main(["--root", str(temp_dir), "--delete"])
        assert exc_info.value.code == 1
        assert "Failed to remove" in capsys.readouterr().err

    def test_ctrl_c_exits_130(self, temp_dir, capsys):
        with mock.patch.object(CLIApplication, "run", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc_info:
                main([])
        assert exc_info.value.code == 130

    def test_success_returns_normally(self, hello_tree, temp_dir):
        with mock.patch.object(sys, "argv", ["dupsweep", "--root", str(temp_dir)]):
            main()
