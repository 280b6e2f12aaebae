"""Exceptions raised by the Go installer stages."""

from pathlib import Path


class InstallerError(Exception):
    """Base class for every fatal installer error."""


class ElevationRequiredError(InstallerError, PermissionError):
    """Raised when the installer was not launched through sudo."""

    def __init__(self, variable: str, install_root: str | Path):
        self.variable = variable
        self.install_root = str(install_root)
        super().__init__(
            f"This must be run with sudo to install Go in '{self.install_root}'."
        )


class UnsupportedPlatformError(InstallerError):
    """Raised for a host architecture Go binaries are not fetched for."""

    def __init__(self, arch: str, supported: tuple[str, ...] = ()):
        self.arch = arch
        self.supported = supported
        message = f"Unsupported architecture: {arch}"
        if supported:
            message += f" (supported: {', '.join(supported)})"
        super().__init__(message)


class NetworkError(InstallerError):
    """Raised when an HTTP request fails or returns an error status."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"{message} ({url})")


class ParseError(InstallerError):
    """Raised when the release catalog cannot be decoded or validated."""


class NotFoundError(InstallerError):
    """Raised when no release file matches the requested platform."""

    def __init__(self, os_name: str, arch: str, kind: str = "archive"):
        self.os = os_name
        self.arch = arch
        self.kind = kind
        super().__init__(
            f"Could not find a stable Go release for {os_name}-{arch} ({kind})"
        )


class FilesystemError(InstallerError, OSError):
    """Raised when reading, writing or removing a local path fails."""

    def __init__(self, path: str | Path, message: str):
        self.path = str(path)
        # OSError.__init__ with one argument keeps str() equal to the message
        super().__init__(f"{message}: {self.path}")


class IntegrityError(InstallerError):
    """Raised when a downloaded file does not hash to the expected digest."""

    def __init__(self, expected: str, actual: str, path: str | Path | None = None):
        self.expected = expected
        self.actual = actual
        self.path = str(path) if path is not None else None
        super().__init__(
            f"Checksum mismatch!\n  Expected:   {expected}\n  Calculated: {actual}"
        )


class ExtractionError(InstallerError):
    """Raised when the archive is corrupt or contains unsafe entries."""

    def __init__(self, path: str | Path, message: str):
        self.path = str(path)
        super().__init__(f"{message} ({self.path})")
