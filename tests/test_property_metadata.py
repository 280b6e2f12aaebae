"""Property-based tests for release metadata parsing."""

import json

from hypothesis import given
from hypothesis import strategies as st

from go_installer.metadata_client import MetadataClient
from go_installer.models import GoFile


# **Property 1: Metadata Processing Round Trip**
@given(
    major=st.integers(min_value=1, max_value=2),
    minor=st.integers(min_value=0, max_value=99),
    patch=st.integers(min_value=0, max_value=99),
    os_name=st.sampled_from(["linux", "darwin", "windows"]),
    arch=st.sampled_from(["amd64", "arm64", "386"]),
    kind=st.sampled_from(["archive", "installer", "source"]),
    sha256=st.text(alphabet="0123456789abcdef", min_size=64, max_size=64),
    size=st.integers(min_value=0, max_value=2**40),
    stable=st.booleans(),
    extra=st.dictionaries(
        st.text(alphabet="abcdefghijklmnopqrstuvwxyz_", min_size=1, max_size=10).filter(
            lambda k: k not in {"filename", "os", "arch", "version", "sha256", "size", "kind"}
        ),
        st.integers() | st.text(max_size=20),
        max_size=3,
    ),
)
def test_metadata_processing_round_trip_property(
    major, minor, patch, os_name, arch, kind, sha256, size, stable, extra
):
    """Property test: For any valid catalog JSON, parsing should keep every file field unchanged and ignore unknown keys."""
    version = f"go{major}.{minor}.{patch}"
    filename = f"{version}.{os_name}-{arch}.tar.gz"

    file_entry = {
        "filename": filename,
        "os": os_name,
        "arch": arch,
        "version": version,
        "sha256": sha256,
        "size": size,
        "kind": kind,
        **extra,
    }
    catalog = [{"version": version, "stable": stable, "files": [file_entry]}]

    client = MetadataClient()

    # Catalogs arrive as JSON text
    releases = client.parse_catalog(json.loads(json.dumps(catalog)))

    assert len(releases) == 1
    release = releases[0]
    assert release.version == version
    assert release.stable == stable
    assert release.files == [
        GoFile(
            filename=filename,
            os=os_name,
            arch=arch,
            version=version,
            sha256=sha256,
            size=size,
            kind=kind,
        )
    ]
