"""Utility functions for the Go installer."""

import platform

from go_installer.errors import UnsupportedPlatformError

# Host machine name -> Go architecture name
ARCH_MAP = {
    "x86_64": "amd64",
    "aarch64": "arm64",
}

SUPPORTED_ARCHITECTURES = tuple(ARCH_MAP.values())


def detect_go_arch(machine: str | None = None) -> str:
    """Map the host CPU architecture to the name used in Go release files.

    Args:
        machine: Raw machine name (e.g., "x86_64"). Defaults to
            platform.machine().

    Returns:
        Go architecture name (e.g., "amd64").

    Raises:
        UnsupportedPlatformError: If the architecture has no Go mapping.

    Examples:
        >>> detect_go_arch("x86_64")
        'amd64'
        >>> detect_go_arch("aarch64")
        'arm64'
    """
    raw = machine if machine is not None else platform.machine()
    try:
        return ARCH_MAP[raw]
    except KeyError:
        raise UnsupportedPlatformError(raw, SUPPORTED_ARCHITECTURES) from None


def format_size(num_bytes: int) -> str:
    """Render a byte count for status messages.

    Examples:
        >>> format_size(512)
        '512 B'
        >>> format_size(116000000)
        '110.6 MiB'
    """
    size = float(num_bytes)
    for unit in ("B", "KiB", "MiB", "GiB"):
        if size < 1024 or unit == "GiB":
            if unit == "B":
                return f"{int(size)} {unit}"
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GiB"
