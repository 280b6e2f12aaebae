"""Privilege check run before anything touches the install root."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from go_installer.config import ENV_SUDO_USER, INSTALL_DIR, InstallerConfig
from go_installer.errors import ElevationRequiredError

logger = logging.getLogger(__name__)


class PrivilegeGuard:
    """Checks that the process was launched through sudo.

    The SUDO_USER variable is only a heuristic for "running with enough
    rights to write the install root"; it is not a security boundary.
    """

    def __init__(self, config: InstallerConfig | None = None):
        """Initialize the guard.

        Args:
            config: Installer configuration naming the signal variable and
                the install root shown in the error message
        """
        self.config = config or InstallerConfig()

    def validate(self, environ: Mapping[str, str] | None = None) -> str:
        """Validate the elevation signal.

        Args:
            environ: Environment to inspect. Defaults to os.environ.

        Returns:
            Name of the user who invoked sudo

        Raises:
            ElevationRequiredError: If the signal variable is missing or empty
        """
        env = os.environ if environ is None else environ
        variable = self.config.privilege_env_var
        invoking_user = env.get(variable, "")

        if not invoking_user:
            logger.error(f"{variable} is not set; refusing to install")
            raise ElevationRequiredError(variable, self.config.install_root)

        logger.info(f"Running with elevated privileges for user {invoking_user}")
        return invoking_user


def validate_elevated_privileges(
    environ: Mapping[str, str] | None = None,
    install_root: str | Path = INSTALL_DIR,
) -> str:
    """Validate that the installer was started with sudo.

    Convenience wrapper around PrivilegeGuard using the default signal
    variable.

    Raises:
        ElevationRequiredError: If SUDO_USER is missing or empty
    """
    config = InstallerConfig(
        install_root=Path(install_root), privilege_env_var=ENV_SUDO_USER
    )
    return PrivilegeGuard(config).validate(environ)
