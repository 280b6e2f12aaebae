"""Configuration and logging setup for the Go installer."""

import logging
import os
import sys
import tempfile
from dataclasses import dataclass, field
from pathlib import Path


def setup_logging(level: str | None = None) -> None:
    """Set up diagnostic logging on stderr.

    User-facing progress goes to stdout through the console, so log records
    are kept on stderr to avoid interleaving with it.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to the
            LOG_LEVEL environment variable, then WARNING.
    """
    log_level = level or get_env_var(ENV_LOG_LEVEL, "WARNING")

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    # HTTP libraries log every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)


def get_env_var(name: str, default: str | None = None, required: bool = False) -> str:
    """Get environment variable with optional default and validation.

    Args:
        name: Environment variable name
        default: Default value if not set
        required: Whether the variable is required

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set
    """
    value = os.getenv(name, default)

    if required and not value:
        raise ValueError(f"Required environment variable {name} is not set")

    return value or ""


# Environment variable names
ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_SUDO_USER = "SUDO_USER"

GO_API_URL = "https://go.dev/dl/?mode=json"
GO_DL_URL = "https://go.dev/dl/"
INSTALL_DIR = "/usr/local"
GO_SUBDIR = "go"

TARGET_OS = "linux"
ARCHIVE_KIND = "archive"


@dataclass(frozen=True)
class InstallerConfig:
    """Fixed endpoints, paths and limits used by every installer component.

    Attributes:
        metadata_url: Release catalog endpoint returning JSON
        download_base_url: Prefix joined with a catalog filename to download it
        install_root: Directory the archive is extracted into
        install_subdir: Top-level directory name inside the archive
        target_os: Go OS identifier files are filtered on
        archive_kind: Go file kind files are filtered on
        privilege_env_var: Variable left behind by sudo
        download_dir: Where the archive is stored while installing
        metadata_timeout: Request timeout in seconds for the catalog
        download_timeout: Request timeout in seconds for the archive
        chunk_size: Bytes read per iteration when streaming or hashing
    """

    metadata_url: str = GO_API_URL
    download_base_url: str = GO_DL_URL
    install_root: Path = Path(INSTALL_DIR)
    install_subdir: str = GO_SUBDIR
    target_os: str = TARGET_OS
    archive_kind: str = ARCHIVE_KIND
    privilege_env_var: str = ENV_SUDO_USER
    download_dir: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))
    metadata_timeout: int = 30
    download_timeout: int = 300
    chunk_size: int = 8192

    @property
    def target_dir(self) -> Path:
        """Directory that holds the installed toolchain."""
        return Path(self.install_root) / self.install_subdir
