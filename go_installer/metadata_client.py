"""Metadata client for resolving the latest Go release archive."""

import json
import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from go_installer.config import InstallerConfig
from go_installer.errors import (
    NetworkError,
    NotFoundError,
    ParseError,
    UnsupportedPlatformError,
)
from go_installer.models import GoFile, GoRelease
from go_installer.utils import SUPPORTED_ARCHITECTURES

logger = logging.getLogger(__name__)


def create_session(max_redirects: int = 10) -> requests.Session:
    """Create a requests session that never retries a failed request.

    Redirects are still followed; go.dev serves the downloads from another
    host.
    """
    session = requests.Session()

    retry_strategy = Retry(
        total=None,
        connect=0,
        read=0,
        status=0,
        other=0,
        redirect=max_redirects,
        allowed_methods=["GET"],
        raise_on_status=False,
    )

    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    return session


class MetadataClient:
    """Client for fetching the Go release catalog and picking an archive."""

    def __init__(
        self,
        config: InstallerConfig | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize the metadata client.

        Args:
            config: Installer configuration providing the catalog URL
            session: HTTP session to use; a non-retrying one is created if None
        """
        self.config = config or InstallerConfig()
        self.session = session or create_session()

    def fetch_catalog(self) -> list[dict[str, Any]]:
        """Fetch the raw release catalog.

        Returns:
            Decoded JSON body

        Raises:
            NetworkError: If the request fails or returns an error status
            ParseError: If the body is not valid JSON
        """
        url = self.config.metadata_url
        logger.info(f"Fetching release metadata from {url}")

        try:
            response = self.session.get(url, timeout=self.config.metadata_timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to fetch release metadata: {e}")
            raise NetworkError(url, f"Failed to fetch release metadata: {e}") from e

        logger.info(f"Successfully fetched metadata (status: {response.status_code})")

        try:
            payload = response.json()
        except ValueError as e:
            # requests raises its own JSONDecodeError, a ValueError subclass
            logger.error(f"Failed to parse metadata JSON: {e}")
            logger.debug(f"Response content: {response.text[:500]}...")
            raise ParseError(f"Release metadata from {url} is not valid JSON: {e}") from e

        return payload

    def parse_catalog(self, payload: Any) -> list[GoRelease]:
        """Parse the release catalog into GoRelease objects.

        Catalog order is preserved; upstream lists the newest release first.

        Raises:
            ParseError: If the catalog is not a list or an entry is malformed
        """
        if not isinstance(payload, list):
            raise ParseError(
                f"Release metadata must be a JSON array, got {type(payload).__name__}"
            )

        releases = []
        for index, entry in enumerate(payload):
            try:
                releases.append(GoRelease.from_metadata(entry))
            except (KeyError, ValueError) as e:
                logger.error(f"Failed to parse release entry {index}: {e}")
                logger.debug(f"Release entry: {json.dumps(entry, default=str)[:500]}")
                raise ParseError(f"Malformed release entry at index {index}: {e}") from e

        logger.info(f"Parsed {len(releases)} releases from metadata")
        return releases

    @staticmethod
    def select_file(
        releases: list[GoRelease], os_name: str, arch: str, kind: str
    ) -> GoFile:
        """Return the first file matching os/arch/kind in catalog order.

        No version comparison is done: the first match is taken to be the
        latest release.

        Raises:
            NotFoundError: If no release contains a matching file
        """
        for release in releases:
            for go_file in release.files:
                if go_file.matches(os_name, arch, kind):
                    return go_file

        raise NotFoundError(os_name, arch, kind)

    def resolve(self, required_os: str, required_arch: str, required_kind: str) -> GoFile:
        """Fetch the catalog and select the newest matching release file.

        Args:
            required_os: Go OS name (e.g., "linux")
            required_arch: Go architecture name, one of SUPPORTED_ARCHITECTURES
            required_kind: File kind (e.g., "archive")

        Returns:
            The selected GoFile

        Raises:
            UnsupportedPlatformError: If required_arch is not supported; no
                request is made in that case
            NetworkError: If fetching the catalog fails
            ParseError: If the catalog is malformed
            NotFoundError: If nothing matches
        """
        if required_arch not in SUPPORTED_ARCHITECTURES:
            raise UnsupportedPlatformError(required_arch, SUPPORTED_ARCHITECTURES)

        releases = self.parse_catalog(self.fetch_catalog())
        selected = self.select_file(releases, required_os, required_arch, required_kind)

        logger.info(f"Selected {selected.filename} ({selected.version})")
        logger.debug(f"Selected file: {selected}")
        return selected

    def get_latest_release(self, arch: str) -> GoFile:
        """Resolve the latest archive for the configured OS and the given arch."""
        return self.resolve(self.config.target_os, arch, self.config.archive_kind)
