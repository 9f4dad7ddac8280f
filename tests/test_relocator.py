import logging
from pathlib import Path

import pytest

from scaffold.relocator import cleanup, relocate

from conftest import tree, write_file


class TestCleanup:
    def test_output_root_removed(self, tmp_path: Path) -> None:
        out = tmp_path / "out"
        write_file(out / "A.class")
        write_file(out / "pkg" / "deep" / "B.class")
        (out / "empty").mkdir()

        assert cleanup(out) == []
        assert not out.exists()

    def test_missing_output_root_is_noop(self, tmp_path: Path) -> None:
        assert cleanup(tmp_path / "absent") == []

    def test_siblings_untouched(self, tmp_path: Path) -> None:
        write_file(tmp_path / "out" / "A.class")
        keep = write_file(tmp_path / "src" / "A.java")

        cleanup(tmp_path / "out")

        assert keep.exists()

    def test_undeletable_file_reported_and_rest_removed(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        out = tmp_path / "out"
        write_file(out / "A.class")
        write_file(out / "pkg" / "Stuck.class")
        write_file(out / "pkg" / "Z.class")
        real_unlink = Path.unlink

        def unlink(self, *args, **kwargs):
            if self.name == "Stuck.class":
                raise PermissionError("denied")
            return real_unlink(self, *args, **kwargs)

        monkeypatch.setattr(Path, "unlink", unlink)
        with caplog.at_level(logging.WARNING, logger="scaffold.relocator"):
            failures = cleanup(out)

        assert any("Stuck.class" in f for f in failures)
        assert "Failed to cleanup" in caplog.text
        assert tree(out) == ["pkg/Stuck.class"]

    def test_unlistable_directory_reported_and_rest_removed(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        out = tmp_path / "out"
        write_file(out / "A.class")
        write_file(out / "locked" / "B.class")
        real_iterdir = Path.iterdir

        def iterdir(self):
            if self.name == "locked":
                raise PermissionError("denied")
            return real_iterdir(self)

        monkeypatch.setattr(Path, "iterdir", iterdir)
        with caplog.at_level(logging.WARNING, logger="scaffold.relocator"):
            failures = cleanup(out)

        assert any("locked" in f for f in failures)
        assert "Failed to cleanup" in caplog.text
        assert not (out / "A.class").exists()
        assert (out / "locked" / "B.class").exists()


class TestRelocate:
    def test_artifacts_moved_with_content(self, tmp_path: Path) -> None:
        src, out = tmp_path / "src", tmp_path / "out"
        write_file(src / "A.class", "alpha")
        write_file(src / "pkg" / "B.class", "beta")
        write_file(src / "A.java", "source")

        report = relocate(src, out)

        assert sorted(report.moved) == ["A.class", "pkg/B.class"]
        assert report.failures == {}
        assert tree(out) == ["A.class", "pkg/B.class"]
        assert (out / "pkg" / "B.class").read_text(encoding="utf-8") == "beta"
        assert tree(src) == ["A.java"]

    def test_second_run_leaves_output_unchanged(self, tmp_path: Path) -> None:
        src, out = tmp_path / "src", tmp_path / "out"
        write_file(src / "A.class", "alpha")
        write_file(src / "pkg" / "B.class", "beta")
        relocate(src, out)
        before = {p: (out / p).read_text(encoding="utf-8") for p in tree(out)}

        report = relocate(src, out)

        assert report.moved == []
        assert {p: (out / p).read_text(encoding="utf-8") for p in tree(out)} == before

    def test_existing_destination_overwritten(self, tmp_path: Path) -> None:
        src, out = tmp_path / "src", tmp_path / "out"
        write_file(out / "A.class", "old")
        write_file(src / "A.class", "new")

        relocate(src, out)

        assert (out / "A.class").read_text(encoding="utf-8") == "new"

    def test_one_failure_does_not_block_others(self, tmp_path: Path) -> None:
        src, out = tmp_path / "src", tmp_path / "out"
        write_file(src / "A.class", "alpha")
        write_file(src / "B.class", "beta")
        # a non-empty directory where A.class should go cannot be replaced
        write_file(out / "A.class" / "occupied.txt")

        report = relocate(src, out)

        assert list(report.failures) == ["A.class"]
        assert report.moved == ["B.class"]
        assert (src / "A.class").exists()
        assert (out / "B.class").read_text(encoding="utf-8") == "beta"

    def test_custom_artifact_extension(self, tmp_path: Path) -> None:
        src, out = tmp_path / "src", tmp_path / "out"
        write_file(src / "A.out")
        write_file(src / "A.class")

        assert relocate(src, out, ".out").moved == ["A.out"]
