"""Tests for content loading from URLs and files."""

import pytest
from pathlib import Path
from unittest.mock import Mock, patch

import requests

from keyword_density.content_sources import (
    ContentExtractionError,
    fetch_url_content,
    html_to_text,
    load_content,
    load_docx_text,
)


class TestHtmlToText:
    """Tests for HTML text extraction."""

    def test_extracts_main_blocks(self, sample_html_content: str):
        text = html_to_text(sample_html_content)
        paragraphs = text.split("\n\n")

        assert paragraphs[0] == "Fix USB Device Not Recognized Errors"
        assert "Quick Checks" in paragraphs

    def test_drops_chrome_and_scripts(self, sample_html_content: str):
        """Test navigation, footer, style and script text is removed."""
        text = html_to_text(sample_html_content)

        assert "Navigation content" not in text
        assert "Footer content" not in text
        assert "tracking" not in text
        assert "color" not in text

    def test_nested_blocks_not_duplicated(self):
        text = html_to_text("<ul><li><p>Try a different port.</p></li></ul>")
        assert text == "Try a different port."

    def test_plain_markup_without_blocks(self):
        assert html_to_text("<div>usb<br>port</div>") == "usb\n\nport"


class TestFetchUrlContent:
    """Tests for URL fetching."""

    def test_fetch_success(self, sample_html_content: str):
        response = Mock(text=sample_html_content)
        response.raise_for_status = Mock()

        with patch("keyword_density.content_sources.requests.get", return_value=response) as mock_get:
            text = fetch_url_content("https://example.com/usb")

        assert "usb device not recognized error" in text
        _, kwargs = mock_get.call_args
        assert "User-Agent" in kwargs["headers"]
        assert kwargs["timeout"] > 0

    def test_fetch_failure(self):
        """Test network errors become ContentExtractionError."""
        with patch(
            "keyword_density.content_sources.requests.get",
            side_effect=requests.ConnectionError("connection refused"),
        ):
            with pytest.raises(ContentExtractionError, match="Failed to fetch URL"):
                fetch_url_content("https://example.com/usb")

    def test_http_error(self):
        response = Mock(text="")
        response.raise_for_status = Mock(side_effect=requests.HTTPError("404 Client Error"))

        with patch("keyword_density.content_sources.requests.get", return_value=response):
            with pytest.raises(ContentExtractionError, match="404"):
                fetch_url_content("https://example.com/missing")


class TestLoadDocx:
    """Tests for Word document loading."""

    def test_paragraphs_joined(self, sample_docx: Path):
        text = load_docx_text(sample_docx)
        paragraphs = text.split("\n\n")

        assert paragraphs[0] == "USB Device Not Recognized"
        assert len(paragraphs) == 3

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ContentExtractionError, match="File not found"):
            load_docx_text(tmp_path / "missing.docx")

    def test_corrupt_file(self, tmp_path: Path):
        path = tmp_path / "broken.docx"
        path.write_bytes(b"not a zip archive")

        with pytest.raises(ContentExtractionError, match="Failed to open Word document"):
            load_docx_text(path)


class TestLoadContent:
    """Tests for source dispatch."""

    def test_url_dispatch(self):
        with patch(
            "keyword_density.content_sources.fetch_url_content", return_value="page text"
        ) as mock_fetch:
            assert load_content("https://example.com") == "page text"
        mock_fetch.assert_called_once_with("https://example.com")

    def test_text_file(self, text_file):
        path = text_file("usb device not recognized\n\nsecond paragraph")
        assert load_content(str(path)) == "usb device not recognized\n\nsecond paragraph"

    def test_markdown_file_kept_raw(self, text_file):
        path = text_file("# Heading\n\nusb", name="page.md")
        assert load_content(str(path)) == "# Heading\n\nusb"

    def test_html_file(self, text_file, sample_html_content: str):
        path = text_file(sample_html_content, name="page.html")
        assert "Navigation content" not in load_content(str(path))

    def test_docx_file(self, sample_docx: Path):
        assert load_content(str(sample_docx)).startswith("USB Device Not Recognized")

    def test_missing_text_file(self, tmp_path: Path):
        with pytest.raises(ContentExtractionError, match="File not found"):
            load_content(str(tmp_path / "missing.txt"))

    def test_invalid_source(self):
        """Test unsupported file types are rejected."""
        with pytest.raises(ContentExtractionError, match="Invalid source"):
            load_content("report.pdf")
