"""
Keyword Density Toolkit

Keyword density tooling for troubleshooting content that:
- Measures how often tracked keywords occur, across Latin and CJK text
- Scores densities against target ranges and recommends fixes
- Rewrites text to move under- and over-used keywords into range
- Gates each content category's primary keyword at 3-5%
"""

__version__ = "1.0.0"
__author__ = "Keyword Density Toolkit Team"

from .config import DensityConfig

from .models import (
    AnalysisReport,
    Change,
    ChangeType,
    ConfigValidation,
    DensityRange,
    DensityStatus,
    Improvement,
    InsertionSuggestion,
    Keyword,
    KeywordTier,
    OptimizationResult,
    Recommendation,
    RecommendationType,
    ValidationResult,
)

from .text_processing import (
    clean_content,
    count_words,
    count_keyword,
    calculate_density,
)

from .analyzer import DensityAnalyzer
from .optimizer import DensityOptimizer
from .validator import DensityValidator
from .templates import TemplateBook, InsertionTemplate

# Page keyword plans
from .page_config import (
    get_page_keyword_config,
    get_page_optimization_strategy,
    get_keyword_competition_data,
    get_distribution_rule,
    get_tier_weight,
    generate_keyword_list,
    get_target_density_range,
    validate_keyword_config,
)

__all__ = [
    # Configuration
    "DensityConfig",
    # Models
    "AnalysisReport",
    "Change",
    "ChangeType",
    "ConfigValidation",
    "DensityRange",
    "DensityStatus",
    "Improvement",
    "InsertionSuggestion",
    "Keyword",
    "KeywordTier",
    "OptimizationResult",
    "Recommendation",
    "RecommendationType",
    "ValidationResult",
    # Text processing
    "clean_content",
    "count_words",
    "count_keyword",
    "calculate_density",
    # Engines
    "DensityAnalyzer",
    "DensityOptimizer",
    "DensityValidator",
    "TemplateBook",
    "InsertionTemplate",
    # Page keyword plans
    "get_page_keyword_config",
    "get_page_optimization_strategy",
    "get_keyword_competition_data",
    "get_distribution_rule",
    "get_tier_weight",
    "generate_keyword_list",
    "get_target_density_range",
    "validate_keyword_config",
]
