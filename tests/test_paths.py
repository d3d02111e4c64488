"""Tests for ingestion path classification."""

import pytest

from sentrydsn.receiver.errors import DSNErrorKind, MissingProjectIDError
from sentrydsn.receiver.models import EndpointKind
from sentrydsn.receiver.paths import classify_path, split_path


class TestClassifyPath:
    """Test cases for classify_path."""

    def test_store_endpoint(self):
        """Test the current store endpoint."""
        result = classify_path("/api/1234/store/")
        assert result.endpoint is EndpointKind.STORE
        assert result.project_id == "1234"

    def test_envelope_endpoint(self):
        """Test the envelope endpoint."""
        result = classify_path("/api/42/envelope/")
        assert result.endpoint is EndpointKind.ENVELOPE
        assert result.project_id == "42"

    def test_legacy_store_endpoint(self):
        """Test the legacy store endpoint has no project id."""
        result = classify_path("/api/store/")
        assert result.endpoint is EndpointKind.LEGACY_STORE
        assert result.project_id == ""

    def test_repeated_separators(self):
        """Test that doubled slashes collapse."""
        assert classify_path("//api//1234///store//").project_id == "1234"
        assert classify_path("//api///store//").endpoint is EndpointKind.LEGACY_STORE

    def test_missing_trailing_slash(self):
        """Test that the trailing slash is optional."""
        assert classify_path("/api/7/envelope").project_id == "7"

    def test_mount_prefix(self):
        """Test an endpoint mounted below a proxy prefix."""
        result = classify_path("/sentry/api/99/store/")
        assert result.endpoint is EndpointKind.STORE
        assert result.project_id == "99"

    @pytest.mark.parametrize(
        "path",
        [
            "/apistore/",
            "/api/",
            "/",
            "",
            "/api/abc/store/",
            "/api/1234/minidump/",
            "/api/1234/store/extra/",
            "/prefix/api/store/",
            "/api/store/extra/",
            "/api/١٢٣/store/",
        ],
    )
    def test_unrecognized_paths(self, path):
        """Test paths that match no endpoint."""
        with pytest.raises(MissingProjectIDError) as exc_info:
            classify_path(path)

        assert exc_info.value.kind is DSNErrorKind.MISSING_PROJECT_ID


class TestSplitPath:
    """Test cases for split_path."""

    def test_split_collapses_separators(self):
        """Test empty segments are dropped."""
        assert split_path("//api//1234///store//") == ["api", "1234", "store"]

    def test_split_root(self):
        """Test splitting the root path."""
        assert split_path("/") == []
