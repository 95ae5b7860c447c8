# -*- coding: utf-8 -*-
"""
Keyword density analysis.

This module measures how often tracked keywords occur in a text:
- Cleans markup and punctuation, keeping CJK characters
- Counts words across mixed scripts
- Computes per-keyword density, a 0-100 quality score and recommendations
"""

import logging
import math
from typing import Iterable, Optional, Sequence, Union

from .config import DEFAULT_KEYWORDS, DEFAULT_LANGUAGE, DEFAULT_TARGET_DENSITY, DensityConfig
from .models import (
    AnalysisReport,
    DensityRange,
    Keyword,
    Recommendation,
    RecommendationType,
)
from .page_config import generate_keyword_list
from .text_processing import (
    calculate_density,
    clean_content,
    count_keyword,
    count_words,
)

logger = logging.getLogger(__name__)

KeywordInput = Union[str, Keyword, Iterable[Union[str, Keyword]], None]


def _coerce_keywords(keywords: KeywordInput) -> list[Keyword]:
    """Turn a string, Keyword, or iterable of either into Keyword objects."""
    if keywords is None:
        return []
    if isinstance(keywords, (str, Keyword)):
        keywords = [keywords]

    result: list[Keyword] = []
    seen: set[str] = set()
    for item in keywords:
        kw = item if isinstance(item, Keyword) else Keyword(phrase=str(item))
        if not kw.phrase or kw.phrase in seen:
            continue
        seen.add(kw.phrase)
        result.append(kw)
    return result


class DensityAnalyzer:
    """
    Computes density statistics for a fixed set of tracked keywords.

    Configuration is set once at construction and not mutated afterwards,
    so one analyzer can serve concurrent callers.

    Args:
        keywords: Keyword string, Keyword, or a list of either. An empty
            value falls back to ``default_keywords``.
        target_density: Range applied to keywords without their own target.
        default_keywords: Keywords tracked when none are supplied.
    """

    def __init__(
        self,
        keywords: KeywordInput = None,
        target_density: Optional[DensityRange] = None,
        default_keywords: Sequence[str] = DEFAULT_KEYWORDS,
    ):
        self.target_density = target_density or DEFAULT_TARGET_DENSITY
        tracked = _coerce_keywords(keywords)
        if not tracked:
            tracked = _coerce_keywords(list(default_keywords))
        if not tracked:
            raise ValueError("At least one keyword must be tracked")
        self._keywords: tuple[Keyword, ...] = tuple(tracked)

    @classmethod
    def for_page(
        cls, page_type: str, language: str = DEFAULT_LANGUAGE, **kwargs
    ) -> "DensityAnalyzer":
        """
        Create an analyzer tracking a page's configured keyword plan.

        Each keyword carries the density range configured for it.

        Args:
            page_type: Page type identifier (see page_config).
            language: "zh" or "en" phrase variant.
            **kwargs: Extra constructor arguments.

        Returns:
            Analyzer (or subclass) instance.
        """
        return cls(generate_keyword_list(page_type, language), **kwargs)

    @classmethod
    def from_config(
        cls, config: DensityConfig, keywords: KeywordInput = None, **kwargs
    ) -> "DensityAnalyzer":
        """Create an instance from a DensityConfig."""
        kwargs.setdefault("target_density", config.target_density)
        kwargs.setdefault("default_keywords", config.default_keywords)
        return cls(keywords, **kwargs)

    @property
    def keywords(self) -> list[Keyword]:
        return list(self._keywords)

    @property
    def target_keywords(self) -> list[str]:
        """Normalized phrases of the tracked keywords, in order."""
        return [kw.phrase for kw in self._keywords]

    def range_for(self, keyword: str) -> DensityRange:
        """Get the density range that applies to a tracked keyword."""
        for kw in self._keywords:
            if kw.phrase == keyword and kw.target_density is not None:
                return kw.target_density
        return self.target_density

    def analyze(self, content: Optional[str]) -> AnalysisReport:
        """
        Analyze keyword density of a text.

        Never raises: empty or non-string input yields the empty report.

        Args:
            content: Text to analyze, may contain HTML.

        Returns:
            AnalysisReport for the tracked keywords.
        """
        if not content or not isinstance(content, str):
            return self.empty_report()

        cleaned = clean_content(content)
        word_count = count_words(cleaned)

        keyword_counts = {
            kw: count_keyword(cleaned, kw) for kw in self.target_keywords
        }
        densities = {
            kw: calculate_density(count, word_count)
            for kw, count in keyword_counts.items()
        }
        recommendations = self._generate_recommendations(
            densities, keyword_counts, word_count
        )

        return AnalysisReport(
            word_count=word_count,
            keyword_counts=keyword_counts,
            densities=densities,
            recommendations=recommendations,
            is_optimal=self.is_optimal(densities),
            overall_score=self.calculate_overall_score(densities),
        )

    def empty_report(self) -> AnalysisReport:
        """Report returned for missing or empty content."""
        return AnalysisReport(
            word_count=0,
            keyword_counts={kw: 0 for kw in self.target_keywords},
            densities={kw: 0.0 for kw in self.target_keywords},
            recommendations=[],
            is_optimal=False,
            overall_score=0,
        )

    def is_optimal(self, densities: dict[str, float]) -> bool:
        """Check if every tracked keyword sits inside its range."""
        return all(
            self.range_for(kw).contains(densities.get(kw, 0.0))
            for kw in self.target_keywords
        )

    @staticmethod
    def keyword_score(density: float, target: DensityRange) -> float:
        """
        Score one keyword's density against its range.

        100 inside the range; proportional below it; minus 10 points per
        percentage point of excess above it. Never negative.
        """
        if target.contains(density):
            return 100.0
        if density < target.min:
            return max(0.0, (density / target.min) * 100)
        excess = density - target.max
        return max(0.0, 100 - excess * 10)

    def calculate_overall_score(self, densities: dict[str, float]) -> int:
        """Average keyword score across tracked keywords, rounded to an int."""
        keywords = self.target_keywords
        if not keywords:
            return 0
        total = sum(
            self.keyword_score(densities.get(kw, 0.0), self.range_for(kw))
            for kw in keywords
        )
        # halves round up
        return int(math.floor(total / len(keywords) + 0.5))

    def needed_occurrences(self, keyword: str, count: int, word_count: int) -> int:
        """Occurrences to add for a keyword to reach the bottom of its range."""
        target_count = math.ceil(self.range_for(keyword).min / 100 * word_count)
        return max(0, target_count - count)

    def excess_occurrences(self, keyword: str, count: int, word_count: int) -> int:
        """Occurrences to remove for a keyword to drop to the top of its range."""
        target_count = math.floor(self.range_for(keyword).max / 100 * word_count)
        return max(0, count - target_count)

    def _generate_recommendations(
        self,
        densities: dict[str, float],
        keyword_counts: dict[str, int],
        word_count: int,
    ) -> list[Recommendation]:
        """Produce exactly one recommendation per tracked keyword."""
        recommendations = []

        for kw in self.target_keywords:
            density = densities.get(kw, 0.0)
            count = keyword_counts.get(kw, 0)
            target = self.range_for(kw)

            if density < target.min:
                target_count = math.ceil(target.min / 100 * word_count)
                needed = target_count - count
                recommendations.append(Recommendation(
                    type=RecommendationType.INCREASE,
                    keyword=kw,
                    current_density=density,
                    target_density=target.min,
                    current_count=count,
                    recommended_count=target_count,
                    action=f'Add "{kw}" {needed} more time(s) to reach the minimum density',
                    priority="high",
                ))
            elif density > target.max:
                target_count = math.floor(target.max / 100 * word_count)
                excess = count - target_count
                recommendations.append(Recommendation(
                    type=RecommendationType.DECREASE,
                    keyword=kw,
                    current_density=density,
                    target_density=target.max,
                    current_count=count,
                    recommended_count=target_count,
                    action=f'Remove "{kw}" {excess} time(s) to avoid keyword stuffing',
                    priority="high",
                ))
            else:
                recommendations.append(Recommendation(
                    type=RecommendationType.OPTIMAL,
                    keyword=kw,
                    current_density=density,
                    current_count=count,
                    action=f'"{kw}" density is within the target range',
                    priority="low",
                ))

        return recommendations
