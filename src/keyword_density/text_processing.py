# -*- coding: utf-8 -*-
"""
Text cleaning, tokenization and keyword matching.

Handles:
- Markup and punctuation stripping with CJK characters preserved
- Mixed-script word counting (CJK per character, Latin per letter run)
- Whitespace-flexible, case-insensitive keyword patterns
"""

import re
from functools import lru_cache
from typing import Optional

CJK_RANGE = "\u4e00-\u9fff"

_TAG_RE = re.compile(r"<[^>]*>")
_STRIP_RE = re.compile(rf"[^A-Za-z0-9\s{CJK_RANGE}]")
_WHITESPACE_RE = re.compile(r"\s+")
_CJK_CHAR_RE = re.compile(rf"[{CJK_RANGE}]")
_LATIN_WORD_RE = re.compile(r"[a-zA-Z]+")
_ASCII_WORD_CHAR_RE = re.compile(r"[A-Za-z0-9]")

# ASCII-only word boundaries; Python's \b treats CJK characters as word
# characters, which would stop "usb" from matching inside "usb设备".
_LEFT_BOUNDARY = r"(?<![A-Za-z0-9_])"
_RIGHT_BOUNDARY = r"(?![A-Za-z0-9_])"


def clean_content(text: Optional[str]) -> str:
    """
    Strip markup and punctuation, lowercase and collapse whitespace.

    Letters, digits, whitespace and CJK ideographs survive; everything else
    becomes a space.

    Args:
        text: Raw text, possibly containing HTML.

    Returns:
        Cleaned text.
    """
    if not text:
        return ""
    cleaned = _TAG_RE.sub(" ", text)
    cleaned = _STRIP_RE.sub(" ", cleaned)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned.lower())
    return cleaned.strip()


def count_words(cleaned: str) -> int:
    """
    Count words in cleaned text.

    Each CJK character counts as one word, each run of Latin letters counts
    as one word. Digits do not count.

    Args:
        cleaned: Text produced by clean_content().

    Returns:
        Word count.
    """
    if not cleaned:
        return 0
    return len(_CJK_CHAR_RE.findall(cleaned)) + len(_LATIN_WORD_RE.findall(cleaned))


def normalize_keyword(phrase: str) -> str:
    """Lowercase a keyword phrase and collapse its internal whitespace."""
    return _WHITESPACE_RE.sub(" ", phrase.strip()).lower()


@lru_cache(maxsize=256)
def build_keyword_pattern(keyword: str) -> re.Pattern:
    """
    Build the matching pattern for a keyword phrase.

    Internal whitespace matches one or more whitespace characters. Boundary
    assertions are only added at edges where the keyword ends in an ASCII
    letter or digit, so CJK keywords match inside unbroken CJK text.

    Args:
        keyword: Keyword phrase.

    Returns:
        Compiled, case-insensitive pattern.
    """
    normalized = normalize_keyword(keyword)
    body = r"\s+".join(re.escape(part) for part in normalized.split(" "))
    left = _LEFT_BOUNDARY if _ASCII_WORD_CHAR_RE.match(normalized[:1]) else ""
    right = _RIGHT_BOUNDARY if _ASCII_WORD_CHAR_RE.match(normalized[-1:]) else ""
    return re.compile(f"{left}{body}{right}", re.IGNORECASE)


def count_keyword(cleaned: str, keyword: str) -> int:
    """
    Count non-overlapping occurrences of a keyword.

    Keywords are counted independently: a span matching both "usb" and
    "usb not recognized" contributes to both counts.

    Args:
        cleaned: Text produced by clean_content().
        keyword: Keyword phrase.

    Returns:
        Number of matches.
    """
    if not cleaned or not keyword or not keyword.strip():
        return 0
    return len(build_keyword_pattern(keyword).findall(cleaned))


def calculate_density(count: int, word_count: int) -> float:
    """
    Calculate keyword density as a percentage.

    Args:
        count: Keyword occurrences.
        word_count: Total words.

    Returns:
        Density in percent, 0.0 when there are no words.
    """
    if word_count <= 0:
        return 0.0
    return (count / word_count) * 100


def find_paragraph_starts(text: str) -> list[int]:
    """
    Find offsets of lines that hold non-whitespace content.

    Args:
        text: Raw text.

    Returns:
        Character offsets of each non-blank line start.
    """
    starts = []
    position = 0
    for line in text.split("\n"):
        if line.strip():
            starts.append(position)
        position += len(line) + 1
    return starts


def split_paragraphs(text: str) -> list[str]:
    """Split text on blank-line boundaries, dropping empty paragraphs."""
    return [p for p in text.split("\n\n") if p.strip()]


def find_tag_spans(text: str) -> list[tuple[int, int]]:
    """Find the (start, end) offsets of every markup tag in raw text."""
    return [match.span() for match in _TAG_RE.finditer(text)]
