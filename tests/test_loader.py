"""Tests for loading manifests from files and directories."""

import logging

import pytest

from k8s_danger_scan.exceptions import ManifestLoadError, ManifestParseError
from k8s_danger_scan.loader import ManifestLoader

POD = """\
apiVersion: v1
kind: Pod
metadata:
  name: {name}
spec:
  containers:
    - name: app
      image: nginx:1.25
"""


@pytest.fixture
def loader():
    return ManifestLoader()


@pytest.fixture
def manifest_tree(tmp_path):
    """Create a directory tree with manifests and unrelated files."""
    (tmp_path / "b.yaml").write_text(POD.format(name="b"))
    (tmp_path / "a.yml").write_text(POD.format(name="a"))
    (tmp_path / "notes.txt").write_text("kind: Pod\n")
    (tmp_path / "upper.YAML").write_text(POD.format(name="upper"))
    nested = tmp_path / "nested" / "deeper"
    nested.mkdir(parents=True)
    (nested / "c.yaml").write_text(POD.format(name="c"))
    return tmp_path


class TestLoadFile:
    """Tests for explicitly named files."""

    def test_load_single_file(self, loader, tmp_path):
        path = tmp_path / "pod.yaml"
        path.write_text(POD.format(name="single"))

        resources = loader.load_path(path)

        assert [r.name for r in resources] == ["single"]
        assert resources[0].file_path == str(path)

    def test_explicit_file_any_extension(self, loader, tmp_path):
        path = tmp_path / "manifest.txt"
        path.write_text(POD.format(name="txt"))
        assert [r.name for r in loader.load_path(path)] == ["txt"]

    def test_missing_path(self, loader, tmp_path):
        with pytest.raises(ManifestLoadError, match="failed to stat"):
            loader.load_path(tmp_path / "missing.yaml")

    def test_malformed_explicit_file_is_fatal(self, loader, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("kind: [oops\n")
        with pytest.raises(ManifestParseError) as exc_info:
            loader.load_path(path)
        assert str(path) in str(exc_info.value)

    def test_undecodable_file(self, loader, tmp_path):
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"\xff\xfe\x00kind")
        with pytest.raises(ManifestLoadError, match="failed to read"):
            loader.load_path(path)


class TestLoadDirectory:
    """Tests for recursive directory traversal."""

    def test_only_yaml_extensions_in_lexical_order(self, loader, manifest_tree):
        resources = loader.load_path(manifest_tree)
        assert [r.name for r in resources] == ["a", "b", "c"]

    def test_bad_file_skipped_with_warning(self, loader, manifest_tree, caplog):
        bad = manifest_tree / "broken.yaml"
        bad.write_text("kind: [oops\n")

        with caplog.at_level(logging.WARNING, logger="k8s_danger_scan"):
            resources = loader.load_path(manifest_tree)

        assert [r.name for r in resources] == ["a", "b", "c"]
        assert any(str(bad) in record.getMessage() for record in caplog.records)

    def test_recursive_file_skipped_with_warning(self, loader, manifest_tree, caplog):
        loop = manifest_tree / "loop.yaml"
        loop.write_text("kind: Pod\nmetadata:\n  name: loop\nspec:\n  containers: &a [ *a ]\n")

        with caplog.at_level(logging.WARNING, logger="k8s_danger_scan"):
            resources = loader.load_path(manifest_tree)

        assert [r.name for r in resources] == ["a", "b", "c"]
        assert any(str(loop) in record.getMessage() for record in caplog.records)

    def test_recursive_explicit_file_is_fatal(self, loader, tmp_path):
        path = tmp_path / "loop.yaml"
        path.write_text("kind: Pod\nspec:\n  containers: &a [ *a ]\n")
        with pytest.raises(ManifestParseError):
            loader.load_path(path)

    def test_empty_directory(self, loader, tmp_path):
        assert loader.load_path(tmp_path) == []


class TestLoadPaths:
    """Tests for loading several paths."""

    def test_argument_order_preserved(self, loader, tmp_path):
        first = tmp_path / "z.yaml"
        second = tmp_path / "a.yaml"
        first.write_text(POD.format(name="z"))
        second.write_text(POD.format(name="a"))

        resources = loader.load_paths([str(first), second])

        assert [r.name for r in resources] == ["z", "a"]

    def test_missing_path_among_many(self, loader, tmp_path):
        good = tmp_path / "pod.yaml"
        good.write_text(POD.format(name="ok"))
        with pytest.raises(ManifestLoadError):
            loader.load_paths([good, tmp_path / "nope"])
