import os
from pathlib import Path

from scaffold.classpath import find_archives, resolve

from conftest import write_file


def unquote(cp: str) -> list[str]:
    assert cp.startswith('"') and cp.endswith('"')
    inner = cp[1:-1]
    return inner.split(os.pathsep) if inner else []


class TestResolve:
    def test_empty_entries_give_empty_quotes(self, tmp_path: Path) -> None:
        assert resolve([], tmp_path) == '""'

    def test_single_quoted_token(self, tmp_path: Path) -> None:
        write_file(tmp_path / "gson" / "gson.jar")
        write_file(tmp_path / "gson" / "lib" / "extra.jar")

        cp = resolve(["gson"], tmp_path)

        assert cp.count('"') == 2
        assert unquote(cp) == [
            str((tmp_path / "gson" / "gson.jar").absolute()),
            str((tmp_path / "gson" / "lib" / "extra.jar").absolute()),
        ]

    def test_manifest_order_preserved(self, tmp_path: Path) -> None:
        write_file(tmp_path / "b" / "b.jar")
        write_file(tmp_path / "a" / "a.jar")

        names = [Path(p).name for p in unquote(resolve(["b", "a"], tmp_path))]

        assert names == ["b.jar", "a.jar"]

    def test_only_archives_collected(self, tmp_path: Path) -> None:
        write_file(tmp_path / "dep" / "dep.jar")
        write_file(tmp_path / "dep" / "dep.pom")
        write_file(tmp_path / "dep" / "sources.jar.sha1")

        assert [Path(p).name for p in unquote(resolve(["dep"], tmp_path))] == ["dep.jar"]

    def test_missing_module_directory_contributes_nothing(self, tmp_path: Path) -> None:
        write_file(tmp_path / "present" / "p.jar")
        assert [Path(p).name for p in unquote(resolve(["absent", "present"], tmp_path))] == ["p.jar"]

    def test_paths_are_absolute_for_relative_modules_root(
        self, tmp_path: Path, monkeypatch
    ) -> None:
        write_file(tmp_path / "modules" / "dep" / "dep.jar")
        monkeypatch.chdir(tmp_path)

        paths = unquote(resolve(["dep"], Path("modules")))

        assert all(Path(p).is_absolute() for p in paths)

    def test_repeated_resolution_is_identical(self, tmp_path: Path) -> None:
        for name in ("x", "y"):
            for jar in ("one.jar", "two.jar", "sub/three.jar"):
                write_file(tmp_path / name / jar)

        assert resolve(["x", "y"], tmp_path) == resolve(["x", "y"], tmp_path)

    def test_custom_extension(self, tmp_path: Path) -> None:
        write_file(tmp_path / "dep" / "lib.zip")
        write_file(tmp_path / "dep" / "lib.jar")
        assert [p.name for p in find_archives(["dep"], tmp_path, ".zip")] == ["lib.zip"]
