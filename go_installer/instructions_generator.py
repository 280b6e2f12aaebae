"""Generator for the post-install PATH instructions."""

import logging
from pathlib import Path

from go_installer.config import GO_SUBDIR, INSTALL_DIR


class InstructionsGenerator:
    """Generates the instructions shown once Go is installed."""

    def __init__(self, logger: logging.Logger | None = None):
        """Initialize the instructions generator.

        Args:
            logger: Optional logger instance for operation logging
        """
        self.logger = logger or logging.getLogger(__name__)

    def bin_dir(self, install_root: str | Path = INSTALL_DIR, subdir: str = GO_SUBDIR) -> str:
        """Directory holding the go and gofmt binaries."""
        return f"{str(install_root).rstrip('/')}/{subdir}/bin"

    def export_command(self, install_root: str | Path = INSTALL_DIR, subdir: str = GO_SUBDIR) -> str:
        """Shell command appending the Go bin directory to PATH in ~/.profile."""
        bin_dir = self.bin_dir(install_root, subdir)
        return f"echo 'export PATH=$PATH:{bin_dir}' >> ~/.profile && source ~/.profile"

    def generate_path_instructions(
        self, install_root: str | Path = INSTALL_DIR, subdir: str = GO_SUBDIR
    ) -> str:
        """Generate the "ACTION REQUIRED" block telling the user to update PATH.

        Args:
            install_root: Directory Go was extracted into
            subdir: Toolchain directory name inside install_root

        Returns:
            Plain-text instructions, ending with a newline
        """
        self.logger.info(
            "Generating PATH instructions",
            extra={"install_root": str(install_root), "component": "instructions_generator"},
        )

        lines = [
            "",
            "--- ACTION REQUIRED ---",
            "Go is installed. To complete setup, add Go to your PATH.",
            "Run this command or add it to your shell profile (~/.profile, ~/.bashrc, etc.):",
            "",
            f"  {self.export_command(install_root, subdir)}",
            "",
        ]
        return "\n".join(lines)
