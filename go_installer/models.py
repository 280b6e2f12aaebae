"""Data models for the Go release catalog."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

REQUIRED_FILE_FIELDS = ("filename", "os", "arch", "version", "sha256", "size", "kind")


@dataclass(frozen=True)
class GoFile:
    """One downloadable artifact of a Go release."""

    filename: str
    os: str
    arch: str
    version: str
    sha256: str
    size: int
    kind: str

    @classmethod
    def from_metadata(cls, metadata: dict[str, Any]) -> "GoFile":
        """Create GoFile from a catalog file entry.

        Unknown keys are ignored.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a field has the wrong type or size is negative
        """
        if not isinstance(metadata, dict):
            raise ValueError(f"File entry must be an object, got {type(metadata).__name__}")

        missing_fields = [f for f in REQUIRED_FILE_FIELDS if f not in metadata]
        if missing_fields:
            raise KeyError(f"Missing required fields in file entry: {missing_fields}")

        for name in REQUIRED_FILE_FIELDS:
            if name == "size":
                continue
            if not isinstance(metadata[name], str):
                raise ValueError(f"Field '{name}' must be a string")

        size = metadata["size"]
        # bool is an int subclass but never a valid size
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise ValueError(f"Field 'size' must be a non-negative integer, got {size!r}")

        return cls(
            filename=metadata["filename"],
            os=metadata["os"],
            arch=metadata["arch"],
            version=metadata["version"],
            sha256=metadata["sha256"],
            size=size,
            kind=metadata["kind"],
        )

    def matches(self, os_name: str, arch: str, kind: str) -> bool:
        """Return True if this file targets the given platform and kind."""
        return self.os == os_name and self.arch == arch and self.kind == kind


@dataclass(frozen=True)
class GoRelease:
    """One published Go version and its per-platform files."""

    files: list[GoFile]
    version: str = ""
    stable: bool = True

    @classmethod
    def from_metadata(cls, metadata: dict[str, Any]) -> "GoRelease":
        """Create GoRelease from a catalog release entry."""
        if not isinstance(metadata, dict):
            raise ValueError(
                f"Release entry must be an object, got {type(metadata).__name__}"
            )
        if "files" not in metadata:
            raise KeyError("Missing required field 'files' in release entry")
        if not isinstance(metadata["files"], list):
            raise ValueError("Field 'files' must be a list")

        return cls(
            files=[GoFile.from_metadata(entry) for entry in metadata["files"]],
            version=str(metadata.get("version", "")),
            stable=bool(metadata.get("stable", True)),
        )


@dataclass(frozen=True)
class LocalArchiveFile:
    """Downloaded archive on disk and the artifact it was fetched for."""

    path: Path
    artifact: GoFile
    bytes_written: int = 0
