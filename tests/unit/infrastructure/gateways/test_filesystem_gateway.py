"""Unit tests for FileSystemGateway."""

from pathlib import Path

from callsite_rewriter.infrastructure.gateways.filesystem_gateway import FileSystemGateway


class TestFileSystemGateway:

    def test_glob_python_files_recurses_and_sorts(self, tmp_path: Path) -> None:
        (tmp_path / "pkg").mkdir()
        (tmp_path / "pkg" / "b.py").write_text("")
        (tmp_path / "a.py").write_text("")
        (tmp_path / "notes.txt").write_text("")
        files = FileSystemGateway().glob_python_files(str(tmp_path))
        assert [Path(f).name for f in files] == ["a.py", "b.py"]

    def test_single_file(self, tmp_path: Path) -> None:
        target = tmp_path / "one.py"
        target.write_text("")
        assert FileSystemGateway().glob_python_files(str(target)) == [str(target.resolve())]
        assert FileSystemGateway().glob_python_files(str(tmp_path / "notes.txt")) == []

    def test_exists(self, tmp_path: Path) -> None:
        assert FileSystemGateway().exists(str(tmp_path))
        assert not FileSystemGateway().exists(str(tmp_path / "nope"))
