"""
Tests for go-import meta tag discovery.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from lockfetch.errors import DiscoveryError, NetworkError
from lockfetch.fetch.discovery import (
    MetaImport,
    MetaImportDiscoverer,
    parse_meta_imports,
    select_meta_import,
)


def page(head: str, body: str = "") -> str:
    return f"<!DOCTYPE html>\n<html><head>{head}</head><body>{body}</body></html>"


GO_IMPORT = '<meta name="go-import" content="host/owner/repo git https://host/owner/repo">'


class TestParseMetaImports:
    """Test cases for parsing go-import tags."""

    def test_single_tag(self):
        """Test that one well-formed tag is returned."""
        imports = parse_meta_imports(page(GO_IMPORT))

        assert imports == [MetaImport("host/owner/repo", "git", "https://host/owner/repo")]

    def test_malformed_content_is_ignored(self):
        """Test that tags without exactly three fields are skipped."""
        head = (
            '<meta name="go-import" content="host/owner/repo git">'
            '<meta name="go-import" content="a b c d">'
            + GO_IMPORT
        )

        imports = parse_meta_imports(page(head))

        assert len(imports) == 1
        assert imports[0].vcs == "git"

    def test_uppercase_markup(self):
        """Test that tag and attribute names are matched case-insensitively."""
        head = '<META NAME="go-import" CONTENT="host/owner/repo git https://host/owner/repo">'

        assert len(parse_meta_imports(page(head))) == 1

    def test_other_meta_tags_are_ignored(self):
        """Test that unrelated meta tags do not count."""
        head = '<meta charset="utf-8"><meta name="viewport" content="a b c">' + GO_IMPORT

        assert len(parse_meta_imports(page(head))) == 1

    def test_tags_in_body_are_ignored(self):
        """Test that parsing stops at the end of the head."""
        assert parse_meta_imports(page("<title>x</title>", body=GO_IMPORT)) == []

    def test_tags_after_body_start_are_ignored(self):
        """Test that parsing stops at body even without a closing head."""
        document = "<html><head><title>x</title><body>" + GO_IMPORT + "</body></html>"

        assert parse_meta_imports(document) == []

    def test_go_source_github_override(self):
        """Test that a github go-source tag replaces the repo root."""
        head = (
            '<meta name="go-import" content="go.uber.org/zap git https://go.uber.org/zap">'
            '<meta name="go-source" content="go.uber.org/zap '
            'https://github.com/uber-go/zap https://github.com/uber-go/zap/tree/master{/dir}">'
        )

        imports = parse_meta_imports(page(head))

        assert imports == [
            MetaImport("go.uber.org/zap", "git", "github.com/uber-go/zap")
        ]

    def test_go_source_without_github_is_ignored(self):
        """Test that a non-github go-source leaves the import untouched."""
        head = GO_IMPORT + (
            '<meta name="go-source" content="host/owner/repo '
            'https://host/src https://host/src/{dir}">'
        )

        imports = parse_meta_imports(page(head))

        assert imports == [MetaImport("host/owner/repo", "git", "https://host/owner/repo")]

    def test_go_source_before_go_import_is_ignored(self):
        """Test that go-source only applies after a go-import tag."""
        head = (
            '<meta name="go-source" content="x https://github.com/a/b y">' + GO_IMPORT
        )

        imports = parse_meta_imports(page(head))

        assert imports[0].repo_root == "https://host/owner/repo"


class TestSelectMetaImport:
    """Test cases for selecting a single import."""

    def test_no_imports(self):
        """Test that an empty list raises DiscoveryError."""
        with pytest.raises(DiscoveryError, match="No go-import meta tags"):
            select_meta_import("host/owner/repo", [])

    def test_too_many_imports(self):
        """Test that ambiguous pages list every candidate."""
        candidates = [
            MetaImport("host/a", "git", "https://host/a"),
            MetaImport("host/a", "hg", "https://host/a-hg"),
        ]

        with pytest.raises(DiscoveryError, match="Too many imports") as excinfo:
            select_meta_import("host/a", candidates)

        assert excinfo.value.candidates == candidates
        assert "host/a hg https://host/a-hg" in str(excinfo.value)


class TestMetaImportDiscoverer:
    """Test cases for discovery over HTTP."""

    @patch("lockfetch.fetch.http.requests.get")
    def test_discover(self, mock_get, test_settings):
        """Test that discovery queries the import path with go-get=1."""
        mock_get.return_value = Mock(status_code=200, content=page(GO_IMPORT).encode())

        result = MetaImportDiscoverer(test_settings).discover("host/owner/repo")

        assert result.repo_root == "https://host/owner/repo"
        mock_get.assert_called_once_with(
            "https://host/owner/repo", params={"go-get": "1"}, timeout=None
        )

    @patch("lockfetch.fetch.http.requests.get")
    def test_discover_strips_scheme(self, mock_get, test_settings):
        """Test that an import path with a scheme is requested over https."""
        mock_get.return_value = Mock(status_code=200, content=page(GO_IMPORT).encode())

        MetaImportDiscoverer(test_settings).discover("https://host/owner/repo")

        assert mock_get.call_args[0][0] == "https://host/owner/repo"

    @patch("lockfetch.fetch.http.requests.get")
    def test_discover_uses_timeout(self, mock_get, test_settings):
        """Test that the configured request timeout is passed through."""
        mock_get.return_value = Mock(status_code=200, content=page(GO_IMPORT).encode())
        settings = test_settings.with_overrides(request_timeout=5.0)

        MetaImportDiscoverer(settings).discover("host/owner/repo")

        assert mock_get.call_args[1]["timeout"] == 5.0

    @patch("lockfetch.fetch.http.requests.get")
    def test_discover_page_without_tags(self, mock_get, test_settings):
        """Test that a page without tags fails discovery."""
        mock_get.return_value = Mock(status_code=404, content=b"<html>nope</html>")

        with pytest.raises(DiscoveryError):
            MetaImportDiscoverer(test_settings).discover("host/owner/repo")

    @patch("lockfetch.fetch.http.requests.get")
    def test_discover_network_failure(self, mock_get, test_settings):
        """Test that transport errors surface as NetworkError."""
        mock_get.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(NetworkError) as excinfo:
            MetaImportDiscoverer(test_settings).discover("host/owner/repo")

        assert excinfo.value.url == "https://host/owner/repo"
