"""Replaces the Go installation with the contents of a verified archive."""

import gzip
import logging
import os
import shutil
import tarfile
import zlib
from collections.abc import Callable
from pathlib import Path, PurePosixPath

from go_installer.config import GO_SUBDIR, InstallerConfig
from go_installer.errors import ExtractionError, FilesystemError

logger = logging.getLogger(__name__)

# Raised by tarfile/gzip for corrupt or truncated input
ARCHIVE_ERRORS = (tarfile.TarError, EOFError, zlib.error, gzip.BadGzipFile)


def _is_within(base: Path, candidate: Path) -> bool:
    base = Path(os.path.realpath(base))
    candidate = Path(os.path.realpath(candidate))
    return candidate == base or base in candidate.parents


def validate_members(tf: tarfile.TarFile, dest_dir: Path) -> list[tarfile.TarInfo]:
    """Reject entries that would be written outside dest_dir.

    Raises:
        ExtractionError: On absolute names, '..' segments, links escaping
            dest_dir, or device files
    """
    members = tf.getmembers()
    for member in members:
        name = PurePosixPath(member.name)
        if name.is_absolute() or ".." in name.parts:
            raise ExtractionError(
                tf.name or dest_dir, f"Refusing to extract '{member.name}': unsafe path"
            )
        if not _is_within(dest_dir, dest_dir / name):
            raise ExtractionError(
                tf.name or dest_dir,
                f"Refusing to extract '{member.name}': path traversal detected",
            )
        if member.issym() or member.islnk():
            link = PurePosixPath(member.linkname)
            if member.issym():
                resolved = dest_dir / name.parent / link
            else:
                resolved = dest_dir / link
            if link.is_absolute() or not _is_within(dest_dir, resolved):
                raise ExtractionError(
                    tf.name or dest_dir,
                    f"Refusing to extract '{member.name}': link target "
                    f"'{member.linkname}' escapes {dest_dir}",
                )
        if member.isdev():
            raise ExtractionError(
                tf.name or dest_dir, f"Refusing to extract device file '{member.name}'"
            )
    return members


def _safe_extractall(tf: tarfile.TarFile, dest_dir: Path) -> None:
    """Extract after validating members, adding the 'data' filter when available."""
    members = validate_members(tf, dest_dir)
    if hasattr(tarfile, "data_filter"):
        tf.extractall(dest_dir, members=members, filter="data")
    else:
        tf.extractall(dest_dir, members=members)


class GoInstaller:
    """Removes the previous installation and unpacks a new one."""

    def __init__(
        self,
        config: InstallerConfig | None = None,
        status: Callable[[str], None] | None = None,
    ):
        """Initialize the installer.

        Args:
            config: Installer configuration providing the install root
            status: Called with short human-readable step messages
        """
        self.config = config or InstallerConfig()
        self.status = status or (lambda message: None)

    def remove_existing(self, target_dir: Path) -> bool:
        """Delete a previous installation if there is one.

        Returns:
            True if something was removed

        Raises:
            FilesystemError: If removal fails; the old tree may be left
                partially deleted
        """
        if not target_dir.exists() and not target_dir.is_symlink():
            return False

        self.status("- Removing existing Go installation...")
        logger.info(f"Removing existing installation at {target_dir}")
        try:
            if target_dir.is_dir() and not target_dir.is_symlink():
                shutil.rmtree(target_dir)
            else:
                target_dir.unlink()
        except OSError as e:
            logger.error(f"Failed to remove {target_dir}: {e}")
            raise FilesystemError(target_dir, f"Failed to remove existing installation ({e})") from e
        return True

    def extract(self, archive_path: Path, install_root: Path) -> None:
        """Extract a gzip-compressed tarball into install_root.

        Raises:
            ExtractionError: If the archive is corrupt, truncated or unsafe
            FilesystemError: If writing to install_root fails
        """
        self.status("- Extracting Go archive...")
        logger.info(f"Extracting {archive_path} into {install_root}")
        try:
            install_root.mkdir(parents=True, exist_ok=True)
            with tarfile.open(archive_path, "r:gz") as tf:
                _safe_extractall(tf, install_root)
        except ARCHIVE_ERRORS as e:
            # BadGzipFile is an OSError, so this must come before OSError
            logger.error(f"Failed to extract {archive_path}: {e}")
            raise ExtractionError(archive_path, f"Failed to extract archive: {e}") from e
        except OSError as e:
            logger.error(f"Failed to write into {install_root}: {e}")
            raise FilesystemError(install_root, f"Failed to extract archive ({e})") from e

    def install(self, archive_path: str | Path) -> Path:
        """Replace the installation with the archive's contents.

        There is no rollback: a failure after removal leaves no working
        installation until the next successful run.

        Returns:
            The installed toolchain directory
        """
        archive_path = Path(archive_path)
        install_root = Path(self.config.install_root)
        target_dir = self.config.target_dir

        self.remove_existing(target_dir)
        self.extract(archive_path, install_root)

        if not target_dir.is_dir():
            logger.warning(
                f"Archive {archive_path.name} did not create {target_dir}; "
                "check its top-level directory"
            )
        logger.info(f"Installed {archive_path.name} to {target_dir}")
        return target_dir


def install_archive(
    archive_path: str | Path, install_root: str | Path, subdir: str = GO_SUBDIR
) -> Path:
    """Install an archive into install_root/subdir. See GoInstaller.install."""
    config = InstallerConfig(install_root=Path(install_root), install_subdir=subdir)
    return GoInstaller(config).install(archive_path)
