"""
Unit Tests for Source Resolution
================================
"""

import pytest
from pathlib import Path

from pagepdf.core.errors import MissingSourceError
from pagepdf.core.source import is_url, resolve_source
from pagepdf.models.schemas import LocalFileSource, UrlSource


class TestIsUrl:
    """Test URL classification."""

    @pytest.mark.parametrize(
        "location",
        ["https://example.com", "http://localhost:8080/report", "https://example.com/a?b=c#d"],
    )
    def test_absolute_urls(self, location):
        """Test that scheme plus authority is a URL."""
        assert is_url(location)

    @pytest.mark.parametrize(
        "location",
        ["./page.html", "page.html", "/var/www/index.html", "localhost:8080", "file:///tmp/x.html"],
    )
    def test_not_urls(self, location):
        """Test paths and file URLs are not remote URLs."""
        assert not is_url(location)


class TestResolveSource:
    """Test resolve_source."""

    def test_absolute_url(self):
        """Test https URLs resolve to UrlSource."""
        source = resolve_source("https://example.com")

        assert isinstance(source, UrlSource)
        assert source.navigation_url == "https://example.com"

    def test_relative_path(self, tmp_path: Path, monkeypatch):
        """Test bare paths become absolute file:// references."""
        monkeypatch.chdir(tmp_path)

        source = resolve_source("./page.html")

        expected = (tmp_path / "page.html").resolve()
        assert isinstance(source, LocalFileSource)
        assert source.path == str(expected)
        assert source.uri == expected.as_uri()
        assert source.navigation_url.startswith("file://")

    def test_path_with_spaces_is_quoted(self, tmp_path: Path):
        """Test file URIs are percent-encoded."""
        source = resolve_source(str(tmp_path / "my page.html"))

        assert "my%20page.html" in source.navigation_url

    def test_file_url(self, tmp_path: Path):
        """Test file:// arguments keep pointing at the same file."""
        target = tmp_path / "x.html"

        source = resolve_source(target.as_uri())

        assert isinstance(source, LocalFileSource)
        assert source.path == str(target.resolve())

    def test_home_directory_is_expanded(self, tmp_path: Path, monkeypatch):
        """Test ~ is expanded."""
        monkeypatch.setenv("HOME", str(tmp_path))

        source = resolve_source("~/page.html")

        assert source.path == str((tmp_path / "page.html").resolve())

    def test_path_whitespace_is_kept(self, tmp_path: Path, monkeypatch):
        """Test local paths keep leading and trailing spaces."""
        monkeypatch.chdir(tmp_path)

        source = resolve_source(" page.html ")

        assert source.path == str(tmp_path.resolve() / " page.html ")

    def test_url_whitespace_is_ignored(self):
        """Test URLs surrounded by whitespace still resolve as URLs."""
        source = resolve_source("  https://example.com/a ")

        assert isinstance(source, UrlSource)
        assert source.navigation_url == "https://example.com/a"

    @pytest.mark.parametrize("location", [None, "", "   "])
    def test_missing_source(self, location):
        """Test that a missing argument raises MissingSourceError."""
        with pytest.raises(MissingSourceError):
            resolve_source(location)
