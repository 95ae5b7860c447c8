"""Tests for keyword density analysis."""

import pytest

from keyword_density.analyzer import DensityAnalyzer
from keyword_density.config import DEFAULT_KEYWORDS, DensityConfig
from keyword_density.models import DensityRange, Keyword, RecommendationType


WIDE = DensityRange(min=25, max=50)


class TestAnalyzerSetup:
    """Tests for keyword tracking configuration."""

    def test_defaults_when_no_keywords(self):
        """Test the default keyword list is tracked when none are given."""
        analyzer = DensityAnalyzer()
        assert analyzer.target_keywords == list(DEFAULT_KEYWORDS)
        assert analyzer.target_density == DensityRange(min=3, max=5)

    def test_empty_list_falls_back_to_defaults(self):
        assert DensityAnalyzer([]).target_keywords == list(DEFAULT_KEYWORDS)

    def test_single_string_keyword(self):
        assert DensityAnalyzer("USB").target_keywords == ["usb"]

    def test_keywords_normalized_and_deduplicated(self):
        """Test case and whitespace variants collapse to one keyword."""
        analyzer = DensityAnalyzer(["  USB   Device ", "usb device", "port"])
        assert analyzer.target_keywords == ["usb device", "port"]

    def test_no_keywords_at_all_raises(self):
        with pytest.raises(ValueError, match="At least one keyword"):
            DensityAnalyzer([], default_keywords=())

    def test_per_keyword_range(self):
        """Test a keyword's own range overrides the default one."""
        analyzer = DensityAnalyzer(
            [Keyword("usb", target_density=WIDE), "port"],
        )
        assert analyzer.range_for("usb") == WIDE
        assert analyzer.range_for("port") == DensityRange(min=3, max=5)

    def test_from_config(self):
        """Test construction from a DensityConfig."""
        config = DensityConfig(target_density=WIDE, default_keywords=("alpha",))
        analyzer = DensityAnalyzer.from_config(config)
        assert analyzer.target_keywords == ["alpha"]
        assert analyzer.target_density == WIDE


class TestAnalyze:
    """Tests for DensityAnalyzer.analyze."""

    @pytest.mark.parametrize("content", [None, "", 42])
    def test_empty_or_invalid_input(self, content):
        """Test missing content yields the empty report."""
        analyzer = DensityAnalyzer(["usb", "port"])
        report = analyzer.analyze(content)

        assert report.word_count == 0
        assert report.keyword_counts == {"usb": 0, "port": 0}
        assert report.densities == {"usb": 0.0, "port": 0.0}
        assert report.recommendations == []
        assert report.is_optimal is False
        assert report.overall_score == 0

    def test_counts_and_densities(self, filler):
        """Test a simple text with one keyword in range."""
        analyzer = DensityAnalyzer("usb")
        report = analyzer.analyze("usb usb usb usb " + filler(96))

        assert report.word_count == 100
        assert report.keyword_counts["usb"] == 4
        assert report.densities["usb"] == 4.0
        assert report.is_optimal is True
        assert report.overall_score == 100

    def test_html_is_ignored(self):
        """Test tags are stripped before counting."""
        report = DensityAnalyzer("recognized").analyze("<p>USB is <b>recognized</b></p>")
        assert report.word_count == 3
        assert report.keyword_counts["recognized"] == 1

    def test_mixed_script(self):
        """Test a Latin keyword glued to CJK text."""
        report = DensityAnalyzer("usb").analyze("USB设备")
        assert report.word_count == 3
        assert report.keyword_counts["usb"] == 1
        assert report.densities["usb"] == pytest.approx(100 / 3)

    def test_one_recommendation_per_keyword(self, filler):
        analyzer = DensityAnalyzer(["usb", "port", "driver"])
        report = analyzer.analyze("usb " + filler(9))
        assert [r.keyword for r in report.recommendations] == ["usb", "port", "driver"]

    def test_overlapping_keywords_both_count(self):
        report = DensityAnalyzer(["usb", "usb not recognized"]).analyze("usb not recognized")
        assert report.keyword_counts == {"usb": 1, "usb not recognized": 1}


class TestRecommendations:
    """Tests for recommendation generation."""

    def test_increase(self, filler):
        """Test an under-used keyword asks for more occurrences."""
        analyzer = DensityAnalyzer("usb", WIDE)
        report = analyzer.analyze("usb " + filler(7))
        rec = report.recommendation_for("usb")

        assert rec.type == RecommendationType.INCREASE
        assert rec.current_density == 12.5
        assert rec.target_density == 25
        assert rec.current_count == 1
        assert rec.recommended_count == 2
        assert "1 more time(s)" in rec.action
        assert rec.priority == "high"

    def test_decrease(self, filler):
        """Test an over-used keyword asks for fewer occurrences."""
        analyzer = DensityAnalyzer("usb", WIDE)
        report = analyzer.analyze("usb usb usb usb usb " + filler(3))
        rec = report.recommendation_for("usb")

        assert rec.type == RecommendationType.DECREASE
        assert rec.current_density == 62.5
        assert rec.target_density == 50
        assert rec.recommended_count == 4
        assert "1 time(s)" in rec.action

    def test_optimal(self, filler):
        analyzer = DensityAnalyzer("usb", WIDE)
        rec = analyzer.analyze("usb usb " + filler(6)).recommendation_for("usb")
        assert rec.type == RecommendationType.OPTIMAL
        assert rec.priority == "low"

    def test_needed_and_excess_occurrences(self):
        analyzer = DensityAnalyzer("usb", WIDE)
        assert analyzer.needed_occurrences("usb", 1, 8) == 1
        assert analyzer.needed_occurrences("usb", 3, 8) == 0
        assert analyzer.excess_occurrences("usb", 5, 8) == 1
        assert analyzer.excess_occurrences("usb", 2, 8) == 0


class TestScoring:
    """Tests for keyword and overall scores."""

    @pytest.mark.parametrize("density,expected", [
        (4.0, 100.0),
        (3.0, 100.0),
        (5.0, 100.0),
        (1.5, 50.0),
        (0.0, 0.0),
        (7.0, 80.0),
        (20.0, 0.0),
    ])
    def test_keyword_score(self, density, expected):
        target = DensityRange(min=3, max=5)
        assert DensityAnalyzer.keyword_score(density, target) == pytest.approx(expected)

    def test_overall_score_rounds_half_up(self):
        """Test an average of x.5 rounds up."""
        analyzer = DensityAnalyzer(["alpha", "beta"], DensityRange(min=4, max=5))
        assert analyzer.calculate_overall_score({"alpha": 4.5, "beta": 1.0}) == 63

    def test_overall_score_uses_per_keyword_ranges(self):
        analyzer = DensityAnalyzer([Keyword("alpha", target_density=WIDE), "beta"])
        assert analyzer.calculate_overall_score({"alpha": 30.0, "beta": 4.0}) == 100

    def test_is_optimal_requires_every_keyword(self):
        analyzer = DensityAnalyzer(["alpha", "beta"])
        assert analyzer.is_optimal({"alpha": 4.0, "beta": 4.0}) is True
        assert analyzer.is_optimal({"alpha": 4.0, "beta": 5.5}) is False

    def test_score_rises_toward_range_from_below(self):
        """Test a lower density never scores higher below the range."""
        target = DensityRange(min=3, max=5)
        densities = [0.0, 0.5, 1.0, 2.0, 2.9, 3.0]
        scores = [DensityAnalyzer.keyword_score(d, target) for d in densities]

        assert scores == sorted(scores)
        assert scores[0] < scores[-1]

    def test_score_rises_toward_range_from_above(self):
        """Test a higher density never scores higher above the range."""
        target = DensityRange(min=3, max=5)
        densities = [25.0, 15.0, 9.0, 7.0, 5.5, 5.0]
        scores = [DensityAnalyzer.keyword_score(d, target) for d in densities]

        assert scores == sorted(scores)
        assert scores[-2] < scores[-1]


class TestAnalyzeIdempotence:
    """Tests for repeated analysis of the same text."""

    @pytest.mark.parametrize("content", [
        "usb device not recognized usb cable cable",
        "<p>USB recognized</p> usb设备不被识别 cable",
        "",
    ])
    def test_same_report_every_time(self, content):
        analyzer = DensityAnalyzer()
        assert analyzer.analyze(content) == analyzer.analyze(content)
        assert DensityAnalyzer().analyze(content) == analyzer.analyze(content)
