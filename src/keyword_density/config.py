# -*- coding: utf-8 -*-
"""
Centralized configuration for the keyword density toolkit.

This module holds the default keyword list, the default and tier density
ranges, the validator's primary keyword map, and a configuration dataclass
that bundles them for the analyzer, optimizer and validator.
"""

from dataclasses import dataclass, field
from typing import Optional

from .models import DensityRange, KeywordTier


# Homepage keywords, most important first.
DEFAULT_KEYWORDS: tuple[str, ...] = (
    "usb device not recognized",
    "usb recognized",
    "usb",
    "recognized",
    "usb not recognized",
    "usb device recognized",
)

DEFAULT_TARGET_DENSITY = DensityRange(min=3, max=5)

# The validator gate is fixed at 3-5% regardless of page configuration.
VALIDATOR_RANGE = DensityRange(min=3, max=5)

# Category identifier -> primary keyword checked by the validator.
PRIMARY_KEYWORDS: dict[str, str] = {
    "usb-not-recognized": "usb device not recognized",
    "usb-recognized": "usb recognized",
}

# Default ranges per keyword tier, used when a page does not override them.
TIER_DENSITY_RULES: dict[KeywordTier, DensityRange] = {
    KeywordTier.PRIMARY: DensityRange(min=3, max=5),
    KeywordTier.SECONDARY: DensityRange(min=1.5, max=4),
    KeywordTier.LONG_TAIL: DensityRange(min=0.3, max=2),
}

# Fallback for tiers missing from TIER_DENSITY_RULES.
FALLBACK_DENSITY = DensityRange(min=1, max=3)

# Relative weight of each tier when planning keyword placement.
TIER_WEIGHTS: dict[KeywordTier, float] = {
    KeywordTier.PRIMARY: 1.0,
    KeywordTier.SECONDARY: 0.8,
    KeywordTier.LONG_TAIL: 0.6,
}

SUPPORTED_LANGUAGES = ("zh", "en")
DEFAULT_LANGUAGE = "zh"


@dataclass
class DensityConfig:
    """
    Configuration shared by the analyzer, optimizer and validator.

    Attributes:
        target_density: Range applied to keywords without their own target.
        default_keywords: Keywords tracked when none are supplied.
        validator_range: Range enforced by the single-keyword gate.
        primary_keywords: Category -> primary keyword for the validator.
        max_insertions_per_keyword: Optional cap on additions per keyword,
            on top of the number of available templates. None = no cap.
    """

    target_density: DensityRange = DEFAULT_TARGET_DENSITY
    default_keywords: tuple[str, ...] = DEFAULT_KEYWORDS
    validator_range: DensityRange = VALIDATOR_RANGE
    primary_keywords: dict[str, str] = field(
        default_factory=lambda: dict(PRIMARY_KEYWORDS)
    )
    max_insertions_per_keyword: Optional[int] = None

    def __post_init__(self):
        """Validate configuration values."""
        if not self.default_keywords:
            raise ValueError("default_keywords must contain at least one keyword")
        if any(not k or not k.strip() for k in self.default_keywords):
            raise ValueError("default_keywords must not contain blank keywords")
        if (
            self.max_insertions_per_keyword is not None
            and self.max_insertions_per_keyword < 0
        ):
            raise ValueError(
                f"max_insertions_per_keyword must be >= 0, "
                f"got {self.max_insertions_per_keyword}"
            )

    @classmethod
    def for_tier(cls, tier: KeywordTier, **overrides) -> "DensityConfig":
        """Create config whose target range is the default for a keyword tier.

        Args:
            tier: Keyword tier whose default range becomes the target.
            **overrides: Override any config values.

        Returns:
            DensityConfig targeting the tier's range.
        """
        defaults = {"target_density": TIER_DENSITY_RULES.get(tier, FALLBACK_DENSITY)}
        defaults.update(overrides)
        return cls(**defaults)

    @classmethod
    def strict(cls, **overrides) -> "DensityConfig":
        """Create config that targets the validator range and inserts sparingly.

        Args:
            **overrides: Override any config values.

        Returns:
            DensityConfig with the validator range as target and at most
            one insertion per keyword.
        """
        defaults = {
            "target_density": VALIDATOR_RANGE,
            "max_insertions_per_keyword": 1,
        }
        defaults.update(overrides)
        return cls(**defaults)
