"""Loading of Kubernetes manifests from files and directories."""

import logging
from collections.abc import Iterable
from os import PathLike
from pathlib import Path

from k8s_danger_scan.exceptions import ManifestLoadError
from k8s_danger_scan.k8s.base import K8sResource
from k8s_danger_scan.k8s.manifest import ManifestParser

logger = logging.getLogger(__name__)


class ManifestLoader:
    """Load resources from manifest files and directory trees.

    An explicitly named file that cannot be read or parsed aborts the load.
    Inside a directory, a file that fails is logged and skipped.
    """

    def __init__(self, parser: ManifestParser | None = None) -> None:
        self._parser = parser or ManifestParser()

    def load_paths(self, paths: Iterable[str | PathLike[str]]) -> list[K8sResource]:
        """Load resources from every path, in argument order.

        Args:
            paths: Files or directories to load.

        Returns:
            All decoded resources, including kinds no rule evaluates.

        Raises:
            ManifestLoadError: If a path does not exist or an explicit file
                cannot be read.
            ManifestParseError: If an explicit file is malformed.
        """
        resources: list[K8sResource] = []
        for path in paths:
            resources.extend(self.load_path(Path(path)))
        return resources

    def load_path(self, path: Path) -> list[K8sResource]:
        """Load resources from a single file or directory."""
        if not path.exists():
            raise ManifestLoadError(f"failed to stat {path}: no such file or directory")

        if path.is_dir():
            return self._load_directory(path)

        return self._load_file(path)

    def _load_file(self, path: Path) -> list[K8sResource]:
        logger.debug("Reading %s", path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestLoadError(f"failed to read {path}: {e}") from e

        return self._parser.parse(content, str(path))

    def _load_directory(self, directory: Path) -> list[K8sResource]:
        resources: list[K8sResource] = []

        for file_path in self._find_manifest_files(directory):
            try:
                resources.extend(self._load_file(file_path))
            except ManifestLoadError as e:
                logger.warning("Skipping manifest: %s", e)

        return resources

    def _find_manifest_files(self, directory: Path) -> list[Path]:
        """Find manifest files below a directory, in lexical path order."""
        extensions = set(self._parser.supported_extensions())
        return sorted(
            p for p in directory.rglob("*") if p.suffix in extensions and p.is_file()
        )
