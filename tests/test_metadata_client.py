"""Tests for the metadata client."""

import json
from unittest.mock import Mock, patch

import pytest
import requests

from go_installer.config import InstallerConfig
from go_installer.errors import (
    NetworkError,
    NotFoundError,
    ParseError,
    UnsupportedPlatformError,
)
from go_installer.metadata_client import MetadataClient

SHA = "a" * 64


def make_file(**overrides):
    entry = {
        "filename": "go1.22.3.linux-amd64.tar.gz",
        "os": "linux",
        "arch": "amd64",
        "version": "go1.22.3",
        "sha256": SHA,
        "size": 68958123,
        "kind": "archive",
    }
    entry.update(overrides)
    return entry


def make_response(payload):
    mock_response = Mock()
    mock_response.status_code = 200
    mock_response.raise_for_status = Mock()
    mock_response.json.return_value = payload
    return mock_response


class TestMetadataClient:
    """Unit tests for MetadataClient."""

    def test_fetch_catalog_success(self):
        """Test successful metadata fetching."""
        client = MetadataClient()
        catalog = [{"version": "go1.22.3", "stable": True, "files": [make_file()]}]

        with patch.object(client.session, "get", return_value=make_response(catalog)) as get:
            payload = client.fetch_catalog()

        assert payload == catalog
        get.assert_called_once()
        assert get.call_args.args[0] == "https://go.dev/dl/?mode=json"

    def test_uses_configured_metadata_url(self):
        config = InstallerConfig(metadata_url="http://mirror.test/dl/?mode=json")
        client = MetadataClient(config)

        with patch.object(client.session, "get", return_value=make_response([])) as get:
            client.fetch_catalog()

        assert get.call_args.args[0] == "http://mirror.test/dl/?mode=json"
        assert get.call_args.kwargs["timeout"] == config.metadata_timeout

    def test_resolve_selects_matching_file(self):
        client = MetadataClient()
        catalog = [
            {
                "version": "go1.22.3",
                "stable": True,
                "files": [
                    make_file(filename="go1.22.3.src.tar.gz", os="", arch="", kind="source"),
                    make_file(filename="go1.22.3.darwin-amd64.tar.gz", os="darwin"),
                    make_file(filename="go1.22.3.linux-amd64.msi", kind="installer"),
                    make_file(filename="go1.22.3.linux-arm64.tar.gz", arch="arm64"),
                    make_file(),
                ],
            }
        ]

        with patch.object(client.session, "get", return_value=make_response(catalog)) as get:
            selected = client.resolve("linux", "amd64", "archive")

        assert get.call_count == 1
        assert selected.filename == "go1.22.3.linux-amd64.tar.gz"
        assert (selected.os, selected.arch, selected.kind) == ("linux", "amd64", "archive")
        assert selected.size == 68958123

    def test_first_release_wins_over_later_versions(self):
        """Catalog order decides, not version strings."""
        client = MetadataClient()
        catalog = [
            {"files": [make_file(filename="go1.r1.tar.gz", version="go1.9", size=100)]},
            {"files": [make_file(filename="go1.r2.tar.gz", version="go1.99", size=100)]},
        ]

        with patch.object(client.session, "get", return_value=make_response(catalog)):
            selected = client.resolve("linux", "amd64", "archive")

        assert selected.filename == "go1.r1.tar.gz"

    def test_get_latest_release_filters_linux_archive(self):
        client = MetadataClient()
        catalog = [
            {
                "files": [
                    make_file(filename="go.darwin.tar.gz", os="darwin", arch="arm64"),
                    make_file(filename="go.linux.tar.gz", arch="arm64"),
                ]
            }
        ]

        with patch.object(client.session, "get", return_value=make_response(catalog)):
            selected = client.get_latest_release("arm64")

        assert selected.filename == "go.linux.tar.gz"

    @pytest.mark.parametrize("arch", ["386", "x86_64", "riscv64", "", "AMD64"])
    def test_unsupported_arch_makes_no_request(self, arch):
        client = MetadataClient()

        with patch.object(client.session, "get") as get:
            with pytest.raises(UnsupportedPlatformError):
                client.resolve("linux", arch, "archive")

        get.assert_not_called()

    def test_no_matching_file_raises_not_found(self):
        client = MetadataClient()
        catalog = [{"files": [make_file(os="windows", filename="go.zip")]}, {"files": []}]

        with patch.object(client.session, "get", return_value=make_response(catalog)):
            with pytest.raises(NotFoundError, match="linux-arm64") as exc_info:
                client.resolve("linux", "arm64", "archive")

        assert exc_info.value.os == "linux"
        assert exc_info.value.arch == "arm64"

    def test_empty_catalog_raises_not_found(self):
        client = MetadataClient()

        with patch.object(client.session, "get", return_value=make_response([])):
            with pytest.raises(NotFoundError):
                client.resolve("linux", "amd64", "archive")

    def test_fetch_metadata_network_error(self):
        """Test handling of network errors."""
        client = MetadataClient()

        with patch.object(
            client.session,
            "get",
            side_effect=requests.ConnectionError("Network error"),
        ):
            with pytest.raises(NetworkError, match="Network error") as exc_info:
                client.fetch_catalog()

        assert exc_info.value.url == client.config.metadata_url
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)

    def test_fetch_metadata_http_error_status(self):
        client = MetadataClient()
        mock_response = Mock()
        mock_response.status_code = 503
        mock_response.raise_for_status = Mock(
            side_effect=requests.HTTPError("503 Server Error")
        )

        with patch.object(client.session, "get", return_value=mock_response) as get:
            with pytest.raises(NetworkError, match="503"):
                client.fetch_catalog()

        assert get.call_count == 1

    def test_fetch_metadata_invalid_json(self):
        """Test handling of invalid JSON response."""
        client = MetadataClient()
        mock_response = make_response(None)
        mock_response.json.side_effect = json.JSONDecodeError("Invalid JSON", "", 0)
        mock_response.text = "<html>Invalid JSON content</html>"

        with patch.object(client.session, "get", return_value=mock_response):
            with pytest.raises(ParseError, match="not valid JSON"):
                client.fetch_catalog()


class TestParseCatalog:
    """Unit tests for catalog validation."""

    def test_unknown_fields_are_ignored(self):
        client = MetadataClient()
        payload = [
            {
                "version": "go1.22.3",
                "stable": True,
                "extra": {"nested": 1},
                "files": [make_file(checksum_url="ignored")],
            }
        ]

        releases = client.parse_catalog(payload)

        assert len(releases) == 1
        assert releases[0].version == "go1.22.3"
        assert releases[0].files[0].sha256 == SHA

    def test_top_level_must_be_array(self):
        client = MetadataClient()

        with pytest.raises(ParseError, match="JSON array"):
            client.parse_catalog({"files": []})

    def test_release_without_files_is_rejected(self):
        client = MetadataClient()

        with pytest.raises(ParseError, match="index 1"):
            client.parse_catalog([{"files": []}, {"version": "go1.0"}])

    @pytest.mark.parametrize(
        "field", ["filename", "os", "arch", "version", "sha256", "size", "kind"]
    )
    def test_missing_required_file_field(self, field):
        client = MetadataClient()
        entry = make_file()
        del entry[field]

        with pytest.raises(ParseError, match=field):
            client.parse_catalog([{"files": [entry]}])

    @pytest.mark.parametrize("size", [-1, "100", 1.5, None, True])
    def test_invalid_size(self, size):
        client = MetadataClient()

        with pytest.raises(ParseError, match="size"):
            client.parse_catalog([{"files": [make_file(size=size)]}])

    def test_non_string_field(self):
        client = MetadataClient()

        with pytest.raises(ParseError, match="sha256"):
            client.parse_catalog([{"files": [make_file(sha256=123)]}])
