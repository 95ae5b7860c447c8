"""Tests for text cleaning, word counting and keyword matching."""

from keyword_density.text_processing import (
    build_keyword_pattern,
    calculate_density,
    clean_content,
    count_keyword,
    count_words,
    find_paragraph_starts,
    find_tag_spans,
    normalize_keyword,
    split_paragraphs,
)


class TestCleanContent:
    """Tests for clean_content."""

    def test_strips_tags_and_punctuation(self):
        """Test markup and punctuation become spaces."""
        assert clean_content("<p>Hello, <b>World</b>!</p>") == "hello world"

    def test_keeps_cjk_characters(self):
        """Test CJK ideographs survive while full-width punctuation is dropped."""
        assert clean_content("USB设备，无法识别！") == "usb设备 无法识别"

    def test_collapses_whitespace(self):
        """Test runs of whitespace collapse to one space."""
        assert clean_content("  usb \n\n\t device  ") == "usb device"

    def test_keeps_digits(self):
        assert clean_content("USB 3.0") == "usb 3 0"

    def test_empty_input(self):
        """Test empty or missing input yields an empty string."""
        assert clean_content("") == ""
        assert clean_content(None) == ""


class TestCountWords:
    """Tests for count_words."""

    def test_latin_words(self):
        assert count_words("usb device not recognized") == 4

    def test_cjk_characters_count_individually(self):
        """Test each CJK character counts as one word."""
        assert count_words("usb设备 无法识别") == 7

    def test_mixed_script_without_spaces(self):
        """Test a Latin run glued to CJK characters."""
        assert count_words(clean_content("USB设备")) == 3

    def test_digits_do_not_count(self):
        """Test digit-only tokens are ignored."""
        assert count_words("usb 3 0 port") == 2

    def test_empty(self):
        assert count_words("") == 0


class TestKeywordMatching:
    """Tests for keyword patterns and counting."""

    def test_case_insensitive(self):
        assert count_keyword("USB Usb usb", "usb") == 3

    def test_whole_word_only(self):
        """Test keywords do not match inside longer ASCII words."""
        assert count_keyword("usbc usb xusb usb_port", "usb") == 1

    def test_flexible_internal_whitespace(self):
        """Test internal spaces match any whitespace run."""
        assert count_keyword("usb \t device", "usb device") == 1
        assert count_keyword("usb device", "usb   device") == 1

    def test_ascii_keyword_next_to_cjk(self):
        """Test an ASCII keyword directly followed by CJK still matches."""
        assert count_keyword("usb设备", "usb") == 1

    def test_cjk_keyword_inside_cjk_text(self):
        """Test CJK keywords match without word separators."""
        assert count_keyword("这个设备无法识别设备", "设备") == 2

    def test_keywords_counted_independently(self):
        """Test overlapping keywords each count the shared span."""
        cleaned = "usb not recognized"
        assert count_keyword(cleaned, "usb") == 1
        assert count_keyword(cleaned, "usb not recognized") == 1
        assert count_keyword(cleaned, "recognized") == 1

    def test_regex_characters_are_escaped(self):
        assert count_keyword("learn c++ today", "c++") == 1
        assert count_keyword("learn c today", "c++") == 0

    def test_blank_keyword(self):
        """Test blank keywords never match."""
        assert count_keyword("usb", "") == 0
        assert count_keyword("usb", "   ") == 0

    def test_pattern_is_cached(self):
        assert build_keyword_pattern("usb device") is build_keyword_pattern("usb device")

    def test_normalize_keyword(self):
        assert normalize_keyword("  USB   Device ") == "usb device"


class TestCalculateDensity:
    """Tests for calculate_density."""

    def test_percentage(self):
        assert calculate_density(3, 100) == 3.0
        assert calculate_density(1, 8) == 12.5

    def test_zero_words(self):
        """Test zero words yields zero density instead of dividing by zero."""
        assert calculate_density(1, 0) == 0.0


class TestParagraphs:
    """Tests for paragraph helpers."""

    def test_find_paragraph_starts(self):
        """Test offsets of non-blank lines."""
        assert find_paragraph_starts("a\n\n  \nb") == [0, 6]

    def test_find_paragraph_starts_blank_text(self):
        assert find_paragraph_starts("\n  \n") == []

    def test_split_paragraphs(self):
        assert split_paragraphs("one\n\ntwo\n\n\n\nthree") == ["one", "two", "three"]


class TestTagSpans:
    """Tests for find_tag_spans."""

    def test_spans_cover_whole_tags(self):
        text = 'usb <img alt="usb"> cable</p>'
        spans = find_tag_spans(text)

        assert spans == [(4, 19), (25, 29)]
        assert [text[start:end] for start, end in spans] == ['<img alt="usb">', "</p>"]

    def test_plain_text_has_no_spans(self):
        assert find_tag_spans("usb cable") == []
