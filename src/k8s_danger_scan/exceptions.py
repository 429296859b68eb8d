"""Exceptions raised while loading manifests and producing reports."""


class DangerScanError(Exception):
    """Base class for all k8s-danger-scan errors."""


class ManifestLoadError(DangerScanError):
    """Raised when an explicitly requested path cannot be read."""


class ManifestParseError(ManifestLoadError):
    """Raised when a manifest is not valid YAML or not a valid resource."""

    def __init__(self, message: str, file_path: str | None = None) -> None:
        self.file_path = file_path
        if file_path:
            message = f"{file_path}: {message}"
        super().__init__(message)


class NoResourcesError(DangerScanError):
    """Raised when no supported Kubernetes resources were found in the inputs."""


class ReportError(DangerScanError):
    """Raised when a report cannot be rendered or written."""
