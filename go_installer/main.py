"""Main entry point for the Go installer."""

import logging
import sys
from collections.abc import Callable, Mapping
from contextlib import AbstractContextManager
from pathlib import Path

import requests
from rich.console import Console

from go_installer.checksum import verify_checksum
from go_installer.config import InstallerConfig, setup_logging
from go_installer.errors import FilesystemError, InstallerError
from go_installer.installer import GoInstaller
from go_installer.instructions_generator import InstructionsGenerator
from go_installer.metadata_client import MetadataClient, create_session
from go_installer.package_downloader import PackageDownloader
from go_installer.privileges import PrivilegeGuard
from go_installer.progress import ProgressCallback, RichProgressReporter
from go_installer.utils import detect_go_arch, format_size

logger = logging.getLogger(__name__)

ProgressFactory = Callable[[str, Console], AbstractContextManager[ProgressCallback]]


class InstallationFailed(Exception):
    """Wraps a stage error with the name of the stage that raised it."""

    def __init__(self, stage: str, error: BaseException):
        self.stage = stage
        self.error = error
        super().__init__(f"Error during {stage}: {error}")


class GoInstallRun:
    """Runs the install stages in order, stopping at the first failure."""

    def __init__(
        self,
        config: InstallerConfig | None = None,
        console: Console | None = None,
        session: requests.Session | None = None,
        environ: Mapping[str, str] | None = None,
        machine: str | None = None,
        progress_factory: ProgressFactory | None = None,
    ):
        self.config = config or InstallerConfig()
        self.console = console or Console(highlight=False)
        self.environ = environ
        self.machine = machine
        self.progress_factory = progress_factory or RichProgressReporter

        session = session or create_session()
        self.guard = PrivilegeGuard(self.config)
        self.metadata_client = MetadataClient(self.config, session=session)
        self.downloader = PackageDownloader(self.config, session=session)
        self.installer = GoInstaller(self.config, status=self._say)
        self.instructions = InstructionsGenerator()

        self.stage = "startup"

    def _say(self, message: str) -> None:
        self.console.print(message, markup=False, soft_wrap=True)

    def _start(self, stage: str) -> None:
        self.stage = stage
        logger.debug(f"Starting stage: {stage}")

    def run(self) -> Path:
        """Install the latest Go release.

        Returns:
            The installed toolchain directory

        Raises:
            InstallationFailed: Wrapping the first InstallerError raised
        """
        try:
            return self._run()
        except InstallerError as e:
            logger.error(f"Installation failed during {self.stage}: {e}")
            raise InstallationFailed(self.stage, e) from e

    def _run(self) -> Path:
        self._say("--- Go Installer ---")

        self._start("privilege check")
        self.guard.validate(self.environ)

        self._start("architecture detection")
        arch = detect_go_arch(self.machine)
        self._say(f"✔ Detected Architecture: {arch}")

        self._start("release lookup")
        artifact = self.metadata_client.get_latest_release(arch)
        self._say(f"✔ Found Latest Go Version: {artifact.version}")

        self._start("download")
        with self.progress_factory(
            f"Downloading {artifact.filename} ({format_size(artifact.size)})", self.console
        ) as progress:
            archive = self.downloader.download_release(artifact, progress)
        archive_path = archive.path

        self._start("checksum verification")
        verify_checksum(artifact.sha256, archive_path)
        self._say("✔ Checksum Verified")

        self._start("installation")
        target_dir = self.installer.install(archive_path)
        self._say(f"✔ Go Installed to {target_dir}")

        self._start("cleanup")
        try:
            archive_path.unlink()
        except OSError as e:
            raise FilesystemError(archive_path, f"Failed to remove downloaded archive ({e})") from e

        self._say(
            self.instructions.generate_path_instructions(
                self.config.install_root, self.config.install_subdir
            )
        )
        return target_dir


def main() -> int:
    """Console script entry point.

    Returns:
        Process exit status
    """
    setup_logging()
    console = Console(highlight=False)
    err_console = Console(stderr=True, highlight=False)

    try:
        GoInstallRun(console=console).run()
    except InstallationFailed as e:
        err_console.print(str(e), style="red", markup=False, soft_wrap=True)
        return 1
    except KeyboardInterrupt:
        err_console.print("Interrupted by user.", style="yellow", markup=False)
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
