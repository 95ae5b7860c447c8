"""
Data models for the keyword density toolkit.

This module defines the report, change and validation structures shared by
the analyzer, optimizer and validator.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class RecommendationType(Enum):
    """What should happen to a keyword's occurrence count."""
    INCREASE = "increase"
    DECREASE = "decrease"
    OPTIMAL = "optimal"


class ChangeType(Enum):
    """Kind of edit applied by the optimizer."""
    ADDITION = "addition"
    REPLACEMENT = "replacement"


class DensityStatus(Enum):
    """Validator verdict for a single keyword density."""
    TOO_LOW = "too_low"
    TOO_HIGH = "too_high"
    OPTIMAL = "optimal"


class KeywordTier(Enum):
    """Role of a keyword in a page keyword plan."""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    LONG_TAIL = "long_tail"


@dataclass(frozen=True)
class DensityRange:
    """Inclusive density range, in percent."""
    min: float
    max: float

    def __post_init__(self) -> None:
        """Validate range bounds."""
        if self.min < 0:
            raise ValueError(f"min density must be >= 0, got {self.min}")
        if self.max < self.min:
            raise ValueError(
                f"max density ({self.max}) must be >= min density ({self.min})"
            )

    def contains(self, density: float) -> bool:
        """Check if a density lies inside the range."""
        return self.min <= density <= self.max

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}


@dataclass
class Keyword:
    """A tracked keyword phrase with optional per-keyword density target."""
    phrase: str
    target_density: Optional[DensityRange] = None
    tier: Optional[KeywordTier] = None
    importance: int = 0

    def __post_init__(self) -> None:
        """Normalize the keyword phrase."""
        self.phrase = re.sub(r"\s+", " ", self.phrase.strip()).lower()


@dataclass
class Recommendation:
    """An actionable suggestion for one keyword."""
    type: RecommendationType
    keyword: str
    current_density: float
    action: str
    target_density: Optional[float] = None
    current_count: Optional[int] = None
    recommended_count: Optional[int] = None
    message: Optional[str] = None
    priority: str = "medium"  # "high", "medium", "low"

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "keyword": self.keyword,
            "current_density": self.current_density,
            "target_density": self.target_density,
            "current_count": self.current_count,
            "recommended_count": self.recommended_count,
            "action": self.action,
            "message": self.message,
            "priority": self.priority,
        }


@dataclass
class AnalysisReport:
    """Density statistics for a set of tracked keywords over one text."""
    word_count: int = 0
    keyword_counts: dict[str, int] = field(default_factory=dict)
    densities: dict[str, float] = field(default_factory=dict)
    recommendations: list[Recommendation] = field(default_factory=list)
    is_optimal: bool = False
    overall_score: int = 0

    def recommendation_for(self, keyword: str) -> Optional[Recommendation]:
        """Get the recommendation produced for a keyword, if any."""
        for rec in self.recommendations:
            if rec.keyword == keyword:
                return rec
        return None

    def to_dict(self) -> dict:
        return {
            "word_count": self.word_count,
            "keyword_counts": dict(self.keyword_counts),
            "densities": dict(self.densities),
            "recommendations": [r.to_dict() for r in self.recommendations],
            "is_optimal": self.is_optimal,
            "overall_score": self.overall_score,
        }


@dataclass
class Change:
    """A single edit made by the optimizer.

    ``position`` is the offset in the text as it was when the edit was applied.
    """
    type: ChangeType
    keyword: str
    position: int
    reason: str
    text: Optional[str] = None  # Inserted text (additions)
    original: Optional[str] = None  # Replaced text (replacements)
    replacement: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "keyword": self.keyword,
            "position": self.position,
            "text": self.text,
            "original": self.original,
            "replacement": self.replacement,
            "reason": self.reason,
        }


@dataclass
class Improvement:
    """Before/after comparison of two analysis reports."""
    score_improvement: int
    improved_keywords: list[str] = field(default_factory=list)
    worsened_keywords: list[str] = field(default_factory=list)
    overall_improvement: str = "unchanged"  # "improved", "worsened", "unchanged"

    def to_dict(self) -> dict:
        return {
            "score_improvement": self.score_improvement,
            "improved_keywords": list(self.improved_keywords),
            "worsened_keywords": list(self.worsened_keywords),
            "overall_improvement": self.overall_improvement,
        }


@dataclass
class OptimizationResult:
    """Rewritten text plus a fresh analysis of it.

    ``changes`` is in the order the edits were applied: every addition
    first, then the replacements. Each change's ``position`` is an offset
    into the intermediate text produced by the changes before it, not into
    the original input, so applying the changes in list order to the
    original text reproduces ``content``.
    """
    content: str
    analysis: AnalysisReport
    changes: list[Change] = field(default_factory=list)
    improvement: Optional[Improvement] = None

    @property
    def additions(self) -> list[Change]:
        return [c for c in self.changes if c.type == ChangeType.ADDITION]

    @property
    def replacements(self) -> list[Change]:
        return [c for c in self.changes if c.type == ChangeType.REPLACEMENT]

    def to_dict(self) -> dict:
        return {
            "content": self.content,
            "analysis": self.analysis.to_dict(),
            "changes": [c.to_dict() for c in self.changes],
            "improvement": self.improvement.to_dict() if self.improvement else None,
        }


@dataclass
class ValidationResult:
    """Verdict of the single-keyword density gate."""
    is_valid: bool
    category: str
    primary_keyword: Optional[str] = None
    density: float = 0.0
    count: int = 0
    word_count: int = 0
    required_range: Optional[DensityRange] = None
    status: Optional[DensityStatus] = None
    recommendations: list[Recommendation] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "category": self.category,
            "primary_keyword": self.primary_keyword,
            "density": self.density,
            "count": self.count,
            "word_count": self.word_count,
            "required_range": self.required_range.to_dict() if self.required_range else None,
            "status": self.status.value if self.status else None,
            "recommendations": [r.to_dict() for r in self.recommendations],
            "error": self.error,
        }


@dataclass
class InsertionSuggestion:
    """Where a keyword could be worked into existing copy."""
    position: int  # Paragraph index
    suggestion: str
    context: str


@dataclass
class ConfigValidation:
    """Completeness check of a page keyword configuration."""
    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
