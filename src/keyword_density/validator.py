# -*- coding: utf-8 -*-
"""
Single-keyword density gate.

Confirms that the primary keyword configured for a content category sits
inside the fixed 3-5% band, and reports the verdict in a readable form.
"""

import logging
from typing import Callable, Iterable, Mapping, Optional

from .config import PRIMARY_KEYWORDS, VALIDATOR_RANGE, DensityConfig
from .models import (
    DensityRange,
    DensityStatus,
    InsertionSuggestion,
    Recommendation,
    RecommendationType,
    ValidationResult,
)
from .text_processing import (
    calculate_density,
    clean_content,
    count_keyword,
    count_words,
    split_paragraphs,
)

logger = logging.getLogger(__name__)

STATUS_TEXT = {
    DensityStatus.TOO_LOW: "Density too low [FAIL]",
    DensityStatus.TOO_HIGH: "Density too high [WARN]",
    DensityStatus.OPTIMAL: "Density optimal [OK]",
}


class DensityValidator:
    """
    Validates one primary keyword per content category.

    Args:
        primary_keywords: Category -> primary keyword phrase.
        required_range: Density band the primary keyword must fall in.
    """

    def __init__(
        self,
        primary_keywords: Optional[Mapping[str, str]] = None,
        required_range: DensityRange = VALIDATOR_RANGE,
    ):
        source = PRIMARY_KEYWORDS if primary_keywords is None else primary_keywords
        self.primary_keywords: dict[str, str] = dict(source)
        self.required_range = required_range

    @classmethod
    def from_config(cls, config: DensityConfig) -> "DensityValidator":
        """Create a validator from a DensityConfig."""
        return cls(config.primary_keywords, config.validator_range)

    def validate(self, category: str, content: Optional[str]) -> ValidationResult:
        """
        Validate the primary keyword density of a category's content.

        Args:
            category: Content category identifier.
            content: Text to check.

        Returns:
            ValidationResult. An unconfigured category yields
            is_valid=False with an error message naming it.
        """
        primary_keyword = self.primary_keywords.get(category)
        if not primary_keyword:
            return ValidationResult(
                is_valid=False,
                category=category,
                error=f"{category} has no configured primary keyword",
            )

        density, count, word_count = self.measure(content, primary_keyword)
        status = self.density_status(density)

        return ValidationResult(
            is_valid=status == DensityStatus.OPTIMAL,
            category=category,
            primary_keyword=primary_keyword,
            density=density,
            count=count,
            word_count=word_count,
            required_range=self.required_range,
            status=status,
            recommendations=self.generate_recommendations(density, primary_keyword),
        )

    def measure(self, content: Optional[str], keyword: str) -> tuple[float, int, int]:
        """
        Measure a keyword in content.

        Returns:
            Tuple of (density rounded to 2 decimals, count, word count).
        """
        if not content or not isinstance(content, str) or not keyword:
            return 0.0, 0, 0

        cleaned = clean_content(content)
        word_count = count_words(cleaned)
        count = count_keyword(cleaned, keyword)
        return round(calculate_density(count, word_count), 2), count, word_count

    def density_status(self, density: float) -> DensityStatus:
        """Classify a density against the required range (bounds inclusive)."""
        if density < self.required_range.min:
            return DensityStatus.TOO_LOW
        if density > self.required_range.max:
            return DensityStatus.TOO_HIGH
        return DensityStatus.OPTIMAL

    def generate_recommendations(self, density: float, keyword: str) -> list[Recommendation]:
        """Build the single recommendation for the primary keyword."""
        status = self.density_status(density)

        if status == DensityStatus.TOO_LOW:
            deficit = self.required_range.min - density
            return [Recommendation(
                type=RecommendationType.INCREASE,
                keyword=keyword,
                current_density=density,
                target_density=self.required_range.min,
                message=f'Keyword "{keyword}" density is too low ({density:.2f}%), raise it by {deficit:.2f}%',
                action=f'Use "{keyword}" more often, worked naturally into the copy',
                priority="high",
            )]
        if status == DensityStatus.TOO_HIGH:
            excess = density - self.required_range.max
            return [Recommendation(
                type=RecommendationType.DECREASE,
                keyword=keyword,
                current_density=density,
                target_density=self.required_range.max,
                message=f'Keyword "{keyword}" density is too high ({density:.2f}%), lower it by {excess:.2f}%',
                action=f'Use "{keyword}" less often to avoid keyword stuffing',
                priority="high",
            )]
        return [Recommendation(
            type=RecommendationType.OPTIMAL,
            keyword=keyword,
            current_density=density,
            message=f'Keyword "{keyword}" density is in the optimal range ({density:.2f}%)',
            action="Keep the current keyword frequency",
            priority="low",
        )]

    def validate_many(self, pages: Iterable[Mapping[str, str]]) -> list[ValidationResult]:
        """Validate a batch of ``{"category": ..., "content": ...}`` mappings."""
        return [
            self.validate(page.get("category", ""), page.get("content"))
            for page in pages
        ]

    def generate_report(self, result: ValidationResult) -> str:
        """
        Format a validation result as a plain-text report.

        Args:
            result: Result from validate().

        Returns:
            Multi-line report.
        """
        lines = ["=== Keyword Density Validation Report ==="]
        lines.append(f"Category: {result.category}")

        if result.error:
            lines.append(f"Error: {result.error}")
            return "\n".join(lines) + "\n"

        required = result.required_range or self.required_range
        lines.append(f'Primary keyword: "{result.primary_keyword}"')
        lines.append(f"Current density: {result.density:.2f}%")
        lines.append(f"Occurrences: {result.count}")
        lines.append(f"Word count: {result.word_count}")
        lines.append(f"Required range: {required.min:g}% - {required.max:g}%")
        lines.append(f"Status: {STATUS_TEXT.get(result.status, 'Unknown status')}")

        if result.recommendations:
            lines.append("")
            lines.append("Recommendations:")
            for index, rec in enumerate(result.recommendations, start=1):
                lines.append(f"{index}. {rec.message or rec.action}")
                lines.append(f"   Action: {rec.action}")

        return "\n".join(lines) + "\n"

    def monitor(
        self,
        category: str,
        content: Optional[str],
        callback: Optional[Callable[[ValidationResult], None]] = None,
    ) -> ValidationResult:
        """
        Validate content, hand the result to a callback and log failures.

        Args:
            category: Content category identifier.
            content: Text to check.
            callback: Optional function receiving the result.

        Returns:
            The ValidationResult.
        """
        result = self.validate(category, content)

        if callback is not None:
            callback(result)

        if not result.is_valid:
            if result.error:
                logger.warning(f"Keyword density check skipped: {result.error}")
            else:
                logger.warning(
                    f"Keyword density warning: '{result.primary_keyword}' is at "
                    f"{result.density:.2f}%, required range "
                    f"{self.required_range.min:g}%-{self.required_range.max:g}%"
                )

        return result

    def suggest_insertion_points(
        self, content: Optional[str], keyword: str, target_count: int
    ) -> list[InsertionSuggestion]:
        """
        Suggest paragraphs where a keyword could be added.

        Suggestions are spread evenly over the blank-line separated
        paragraphs until the target occurrence count would be reached.

        Args:
            content: Raw text.
            keyword: Keyword phrase.
            target_count: Desired number of occurrences.

        Returns:
            One InsertionSuggestion per missing occurrence, as far as the
            paragraphs allow. Empty when the target is already met.
        """
        if not content or not isinstance(content, str):
            return []

        current = count_keyword(clean_content(content), keyword)
        needed = max(0, target_count - current)
        if needed == 0:
            return []

        paragraphs = split_paragraphs(content)
        step = max(1, len(paragraphs) // needed)

        suggestions = []
        for i in range(needed):
            index = i * step
            if index >= len(paragraphs):
                break
            paragraph = paragraphs[index]
            suggestions.append(InsertionSuggestion(
                position=index,
                suggestion=f'Work "{keyword}" naturally into paragraph {index + 1}',
                context=paragraph[:100] + "...",
            ))

        return suggestions
