"""SHA-256 verification of downloaded archives."""

import hashlib
import logging
from pathlib import Path

from go_installer.errors import FilesystemError, IntegrityError

logger = logging.getLogger(__name__)


def calculate_sha256(file_path: str | Path, chunk_size: int = 65536) -> str:
    """Calculate SHA256 checksum of a file.

    Args:
        file_path: Path to the file
        chunk_size: Bytes read per iteration

    Returns:
        SHA256 checksum as lowercase hex string

    Raises:
        FilesystemError: If the file cannot be read
    """
    sha256_hash = hashlib.sha256()
    try:
        with open(file_path, "rb") as f:
            for chunk in iter(lambda: f.read(chunk_size), b""):
                sha256_hash.update(chunk)
    except OSError as e:
        raise FilesystemError(file_path, f"Failed to read file for hashing ({e})") from e
    return sha256_hash.hexdigest()


def verify_checksum(expected_sha256: str, file_path: str | Path) -> None:
    """Verify a file against the SHA256 checksum from the release catalog.

    Comparison is case-insensitive. The file is left untouched either way.

    Raises:
        IntegrityError: If the digests differ
        FilesystemError: If the file cannot be read
    """
    expected = expected_sha256.strip().lower()
    actual = calculate_sha256(file_path)

    if actual != expected:
        logger.error(
            f"Checksum mismatch for {file_path}. Expected: {expected}, Got: {actual}"
        )
        raise IntegrityError(expected_sha256, actual, file_path)

    logger.info(f"Checksum verification passed for {file_path}")
