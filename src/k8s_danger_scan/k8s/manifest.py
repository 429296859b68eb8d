"""Kubernetes manifest parser."""

import logging

import yaml

from k8s_danger_scan.exceptions import ManifestParseError
from k8s_danger_scan.k8s.base import K8sResource
from k8s_danger_scan.k8s.normalizer import ResourceNormalizer

logger = logging.getLogger(__name__)


class ManifestParser:
    """Parser for multi-document Kubernetes YAML manifests."""

    def __init__(self, normalizer: ResourceNormalizer | None = None) -> None:
        self._normalizer = normalizer or ResourceNormalizer()

    def parse(self, content: str | bytes, file_path: str = "<string>") -> list[K8sResource]:
        """Parse manifest content into resources.

        Documents are separated by ``---``. Empty documents are skipped.

        Args:
            content: Manifest text.
            file_path: Path to the file (for error reporting).

        Returns:
            Resources in document order, including kinds that no rule
            evaluates.

        Raises:
            ManifestParseError: If any document is malformed or recursive.
                A single bad document fails the whole file.
        """
        resources: list[K8sResource] = []

        try:
            for document in yaml.safe_load_all(content):
                if document is None or document == {}:
                    continue
                resources.append(self._normalizer.normalize(document, file_path))
        except yaml.YAMLError as e:
            raise ManifestParseError(f"failed to decode YAML: {e}", file_path) from e
        except RecursionError as e:
            # Self-referencing aliases decode into cyclic trees.
            raise ManifestParseError("document nesting is too deep or recursive", file_path) from e

        logger.debug("Parsed %d document(s) from %s", len(resources), file_path)
        return resources

    @classmethod
    def supported_extensions(cls) -> list[str]:
        """Return file extensions picked up during directory traversal."""
        return [".yaml", ".yml"]
