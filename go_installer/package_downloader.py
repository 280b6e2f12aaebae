"""Archive downloader streaming Go releases to local disk."""

import logging
from pathlib import Path
from urllib.parse import urljoin

import requests

from go_installer.config import InstallerConfig
from go_installer.errors import FilesystemError, NetworkError
from go_installer.metadata_client import create_session
from go_installer.models import GoFile, LocalArchiveFile
from go_installer.progress import ProgressCallback

logger = logging.getLogger(__name__)


class PackageDownloader:
    """Downloads Go release archives without retries or resumption."""

    def __init__(
        self,
        config: InstallerConfig | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize the package downloader.

        Args:
            config: Installer configuration (base URL, download dir, timeout)
            session: HTTP session to use; a non-retrying one is created if None
        """
        self.config = config or InstallerConfig()
        self.session = session or create_session()

    def archive_url(self, filename: str) -> str:
        """Build the download URL for a catalog filename."""
        base_url = self.config.download_base_url
        if not base_url.endswith("/"):
            base_url += "/"
        return urljoin(base_url, filename)

    def archive_path(self, filename: str) -> Path:
        """Local path the archive for a catalog filename is written to."""
        # Catalog filenames are plain names; keep only the last component
        return Path(self.config.download_dir) / Path(filename).name

    def download_release(
        self, artifact: GoFile, progress: ProgressCallback | None = None
    ) -> LocalArchiveFile:
        """Download the archive for a selected release file.

        Returns:
            LocalArchiveFile describing the written archive
        """
        path = self.archive_path(artifact.filename)
        bytes_written = self.download_file(
            self.archive_url(artifact.filename), path, artifact.size, progress
        )
        return LocalArchiveFile(path=path, artifact=artifact, bytes_written=bytes_written)

    def download_file(
        self,
        url: str,
        destination: str | Path,
        expected_size: int,
        progress: ProgressCallback | None = None,
    ) -> int:
        """Stream a URL into a file, overwriting it if present.

        A partial file is left in place if the transfer fails; the next run
        overwrites it.

        Args:
            url: URL to download from
            destination: File to create or truncate
            expected_size: Size announced by the catalog, used as the
                progress total
            progress: Called with (bytes_written, expected_size) after each
                chunk

        Returns:
            Number of bytes written

        Raises:
            NetworkError: If the request fails, returns an error status, or
                the stream breaks
            FilesystemError: If the destination cannot be written
        """
        target_path = Path(destination)
        logger.info(f"Downloading {target_path.name} from {url}")

        try:
            response = self.session.get(
                url, timeout=self.config.download_timeout, stream=True
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to download {target_path.name} from {url}: {e}")
            raise NetworkError(url, f"Failed to download {target_path.name}: {e}") from e

        bytes_written = 0
        try:
            with open(target_path, "wb") as f:
                if progress is not None:
                    progress(bytes_written, expected_size)
                for chunk in response.iter_content(chunk_size=self.config.chunk_size):
                    if not chunk:  # keep-alive
                        continue
                    f.write(chunk)
                    bytes_written += len(chunk)
                    if progress is not None:
                        progress(bytes_written, expected_size)
        except requests.RequestException as e:
            logger.error(
                f"Download of {target_path.name} interrupted after {bytes_written} bytes: {e}"
            )
            raise NetworkError(url, f"Download interrupted after {bytes_written} bytes: {e}") from e
        except OSError as e:
            logger.error(f"Failed to write {target_path}: {e}")
            raise FilesystemError(target_path, f"Failed to write archive ({e})") from e
        finally:
            response.close()

        if expected_size and bytes_written != expected_size:
            logger.warning(
                f"Downloaded {bytes_written} bytes for {target_path.name}, "
                f"metadata announced {expected_size}"
            )
        logger.info(f"Successfully downloaded {target_path.name} ({bytes_written} bytes)")

        return bytes_written
