"""
Content loading from URLs and local files.

Turns a source (http/https URL, HTML, Word, text or Markdown file) into
plain text with paragraphs separated by blank lines, ready for analysis.
"""

import logging
from pathlib import Path
from typing import Union
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup
from docx import Document

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30
USER_AGENT = "Mozilla/5.0 (compatible; KeywordDensityBot/1.0)"

TEXT_SUFFIXES = (".txt", ".md", ".markdown")
HTML_SUFFIXES = (".html", ".htm")
BLOCK_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6", "p", "li", "blockquote", "td"]


class ContentExtractionError(Exception):
    """Raised when content cannot be loaded from a source."""
    pass


def html_to_text(html: str) -> str:
    """
    Extract readable text from HTML.

    Scripts, styles and navigation chrome are dropped. Block elements become
    blank-line separated paragraphs.

    Args:
        html: HTML markup.

    Returns:
        Plain text.
    """
    soup = BeautifulSoup(html, "html.parser")

    for element in soup(["script", "style", "noscript", "nav", "header", "footer"]):
        element.decompose()

    root = soup.find("main") or soup.find("article") or soup.body or soup
    # Innermost blocks only, so nested <li><p> text is not counted twice
    blocks = [
        el.get_text(" ", strip=True)
        for el in root.find_all(BLOCK_TAGS)
        if el.find(BLOCK_TAGS) is None
    ]
    blocks = [b for b in blocks if b]

    if not blocks:
        text = root.get_text("\n", strip=True)
        blocks = [line for line in text.split("\n") if line.strip()]

    return "\n\n".join(blocks)


def fetch_url_content(url: str) -> str:
    """
    Fetch a web page and extract its text.

    Args:
        url: http(s) URL.

    Returns:
        Plain text of the page.

    Raises:
        ContentExtractionError: If the request fails.
    """
    try:
        response = requests.get(
            url,
            headers={"User-Agent": USER_AGENT},
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        raise ContentExtractionError(f"Failed to fetch URL {url}: {e}")

    logger.info(f"Fetched {len(response.text)} characters from {url}")
    return html_to_text(response.text)


def load_docx_text(file_path: Union[str, Path]) -> str:
    """
    Load the text of a Word document.

    Args:
        file_path: Path to the .docx file.

    Returns:
        Non-empty paragraphs joined by blank lines.

    Raises:
        ContentExtractionError: If the file cannot be read or parsed.
    """
    path = Path(file_path)

    if not path.exists():
        raise ContentExtractionError(f"File not found: {file_path}")

    try:
        doc = Document(str(path))
    except Exception as e:
        raise ContentExtractionError(f"Failed to open Word document: {e}")

    paragraphs = [p.text.strip() for p in doc.paragraphs if p.text.strip()]
    return "\n\n".join(paragraphs)


def load_content(source: str) -> str:
    """
    Load text from a URL or a file path.

    Args:
        source: URL or file path to load content from.

    Returns:
        Plain text.

    Raises:
        ContentExtractionError: If the source is invalid or cannot be loaded.
    """
    parsed = urlparse(source)
    if parsed.scheme in ("http", "https"):
        return fetch_url_content(source)

    path = Path(source)
    suffix = path.suffix.lower()

    if suffix == ".docx":
        return load_docx_text(path)

    if suffix in HTML_SUFFIXES or suffix in TEXT_SUFFIXES:
        if not path.exists():
            raise ContentExtractionError(f"File not found: {source}")
        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ContentExtractionError(f"Failed to read file {source}: {e}")
        return html_to_text(raw) if suffix in HTML_SUFFIXES else raw

    raise ContentExtractionError(
        f"Invalid source: {source}. Must be a URL (http/https) or a "
        f".docx, .html, .htm, .txt or .md file path."
    )
