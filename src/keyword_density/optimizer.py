# -*- coding: utf-8 -*-
"""
Keyword density optimization.

Moves tracked keywords toward their density range by:
1. Splicing natural lead-in phrases into paragraph starts for under-used keywords
2. Replacing the last occurrences of over-used keywords with paraphrases
3. Re-analyzing the result and summarizing the improvement
"""

import logging
import random
from typing import Callable, Optional, Sequence

from .analyzer import DensityAnalyzer, KeywordInput
from .config import DEFAULT_KEYWORDS, DensityConfig
from .models import (
    AnalysisReport,
    Change,
    ChangeType,
    DensityRange,
    Improvement,
    OptimizationResult,
)
from .templates import TemplateBook
from .text_processing import (
    build_keyword_pattern,
    clean_content,
    count_keyword,
    count_words,
    find_paragraph_starts,
    find_tag_spans,
)

logger = logging.getLogger(__name__)

# Picks one of N candidate offsets.
Picker = Callable[[Sequence[int]], int]

REDUCTION_REASON = "Reduce keyword density to avoid stuffing"


class DensityOptimizer(DensityAnalyzer):
    """
    Rewrites text so tracked keyword densities move into their ranges.

    Args:
        keywords: Keywords to track (see DensityAnalyzer).
        target_density: Default density range.
        default_keywords: Keywords tracked when none are supplied.
        picker: Chooses an insertion offset among paragraph starts.
            Defaults to random.choice; pass a deterministic picker in tests.
        templates: Insertion and replacement phrase tables.
        max_insertions_per_keyword: Optional cap on additions per keyword.
    """

    def __init__(
        self,
        keywords: KeywordInput = None,
        target_density: Optional[DensityRange] = None,
        default_keywords: Sequence[str] = DEFAULT_KEYWORDS,
        picker: Optional[Picker] = None,
        templates: Optional[TemplateBook] = None,
        max_insertions_per_keyword: Optional[int] = None,
    ):
        super().__init__(keywords, target_density, default_keywords)
        self._picker: Picker = picker or random.choice
        self.templates = templates or TemplateBook()
        self.max_insertions_per_keyword = max_insertions_per_keyword

    @classmethod
    def from_config(
        cls, config: DensityConfig, keywords: KeywordInput = None, **kwargs
    ) -> "DensityOptimizer":
        kwargs.setdefault("max_insertions_per_keyword", config.max_insertions_per_keyword)
        return super().from_config(config, keywords, **kwargs)

    def optimize(self, content: Optional[str]) -> OptimizationResult:
        """
        Optimize keyword density of a text.

        Never raises: empty or non-string input yields an empty result.

        Args:
            content: Text to optimize.

        Returns:
            OptimizationResult with rewritten text, fresh analysis, the
            list of changes and the improvement summary.
        """
        if not content or not isinstance(content, str):
            return OptimizationResult(content="", analysis=self.empty_report(), changes=[])

        before = self.analyze(content)
        optimized = content
        changes: list[Change] = []

        for kw in self.target_keywords:
            if before.densities.get(kw, 0.0) < self.range_for(kw).min:
                optimized, added = self._add_keyword(optimized, kw)
                changes.extend(added)

        for kw in self.target_keywords:
            current = self.analyze(optimized)
            if current.densities.get(kw, 0.0) > self.range_for(kw).max:
                optimized, replaced = self._reduce_keyword(optimized, kw, current)
                changes.extend(replaced)

        after = self.analyze(optimized)
        improvement = self.calculate_improvement(before, after)

        logger.debug(
            f"Optimized {len(self.target_keywords)} keywords: "
            f"{len(changes)} changes, score {before.overall_score} -> {after.overall_score}"
        )

        return OptimizationResult(
            content=optimized,
            analysis=after,
            changes=changes,
            improvement=improvement,
        )

    def _add_keyword(self, content: str, keyword: str) -> tuple[str, list[Change]]:
        """
        Splice lead-in phrases containing the keyword into paragraph starts.

        At most one phrase per available template is used. When the text has
        no paragraph start, the insertion is skipped.
        """
        cleaned = clean_content(content)
        needed = self.needed_occurrences(
            keyword, count_keyword(cleaned, keyword), count_words(cleaned)
        )
        if needed == 0:
            return content, []

        templates = self.templates.insertion_templates(keyword)
        limit = min(needed, len(templates))
        if self.max_insertions_per_keyword is not None:
            limit = min(limit, self.max_insertions_per_keyword)

        changes: list[Change] = []
        for template in templates[:limit]:
            starts = find_paragraph_starts(content)
            if not starts:
                logger.debug(f"No insertion point for '{keyword}', skipping")
                continue
            position = self._picker(starts)
            content = content[:position] + template.text + content[position:]
            changes.append(Change(
                type=ChangeType.ADDITION,
                keyword=keyword,
                position=position,
                text=template.text,
                reason=template.reason,
            ))

        return content, changes

    def _reduce_keyword(
        self, content: str, keyword: str, report: AnalysisReport
    ) -> tuple[str, list[Change]]:
        """
        Replace the last excess occurrences of a keyword with a paraphrase.

        Occurrences inside markup tags, and occurrences overlapping another
        tracked keyword that is not above its range, are left alone. The
        excess is taken from the remaining occurrences, so fewer may be
        replaced than the excess asks for. Replacements run back to front
        so earlier match offsets stay valid.
        """
        cleaned = clean_content(content)
        excess = self.excess_occurrences(
            keyword, count_keyword(cleaned, keyword), count_words(cleaned)
        )
        if excess == 0:
            return content, []

        blocked = find_tag_spans(content) + self._protected_spans(content, keyword, report)
        matches = [
            match for match in build_keyword_pattern(keyword).finditer(content)
            if not _overlaps(match.span(), blocked)
        ]
        to_replace = matches[-excess:] if excess < len(matches) else matches
        if len(to_replace) < excess:
            logger.debug(
                f"Only {len(to_replace)} of {excess} excess '{keyword}' occurrences can be replaced"
            )
        replacement = self.templates.replacement_for(keyword)

        changes: list[Change] = []
        for match in reversed(to_replace):
            content = content[:match.start()] + replacement + content[match.end():]
            changes.append(Change(
                type=ChangeType.REPLACEMENT,
                keyword=keyword,
                position=match.start(),
                original=match.group(0),
                replacement=replacement,
                reason=REDUCTION_REASON,
            ))

        return content, changes

    def _protected_spans(
        self, content: str, keyword: str, report: AnalysisReport
    ) -> list[tuple[int, int]]:
        """Spans of the other tracked keywords that are not above their range."""
        spans: list[tuple[int, int]] = []
        for other in self.target_keywords:
            if other == keyword:
                continue
            if report.densities.get(other, 0.0) > self.range_for(other).max:
                continue
            spans.extend(m.span() for m in build_keyword_pattern(other).finditer(content))
        return spans

    def calculate_improvement(
        self, before: AnalysisReport, after: AnalysisReport
    ) -> Improvement:
        """
        Compare two reports over the tracked keywords.

        Args:
            before: Report before optimization.
            after: Report after optimization.

        Returns:
            Improvement with the score delta and keywords that entered or
            left their range.
        """
        score_diff = after.overall_score - before.overall_score
        improved: list[str] = []
        worsened: list[str] = []

        for kw in self.target_keywords:
            target = self.range_for(kw)
            was_optimal = target.contains(before.densities.get(kw, 0.0))
            is_optimal = target.contains(after.densities.get(kw, 0.0))
            if not was_optimal and is_optimal:
                improved.append(kw)
            elif was_optimal and not is_optimal:
                worsened.append(kw)

        if score_diff > 0:
            overall = "improved"
        elif score_diff < 0:
            overall = "worsened"
        else:
            overall = "unchanged"

        return Improvement(
            score_improvement=score_diff,
            improved_keywords=improved,
            worsened_keywords=worsened,
            overall_improvement=overall,
        )


def _overlaps(span: tuple[int, int], others: list[tuple[int, int]]) -> bool:
    start, end = span
    return any(start < other_end and other_start < end for other_start, other_end in others)
