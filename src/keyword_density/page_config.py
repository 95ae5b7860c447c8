# -*- coding: utf-8 -*-
"""
Page-specific keyword plans.

Each troubleshooting page type has a primary keyword plus secondary and
long-tail keywords. Every keyword has a Chinese and an English phrase, its
own density range and an importance. Pages also carry a content strategy,
a title/content optimization strategy, and there is a small table of
search competition data per keyword.
"""

from typing import Optional

from .config import (
    DEFAULT_LANGUAGE,
    FALLBACK_DENSITY,
    SUPPORTED_LANGUAGES,
    TIER_DENSITY_RULES,
    TIER_WEIGHTS,
)
from .models import ConfigValidation, DensityRange, Keyword, KeywordTier
from .text_processing import normalize_keyword

DEFAULT_PAGE_TYPE = "usb-not-recognized"
DEFAULT_DISTRIBUTION = "even"


def _entry(zh: str, en: str, low: float, high: float, importance: int) -> dict:
    return {
        "zh": zh,
        "en": en,
        "density": DensityRange(min=low, max=high),
        "importance": importance,
    }


PAGE_KEYWORD_CONFIGS: dict[str, dict] = {
    "usb-not-recognized": {
        "page_info": {
            "title": "Fix USB Not Recognized Problems",
            "description": "Complete troubleshooting guide for USB devices that are not recognized",
            "category": "troubleshooting",
            "priority": "high",
        },
        "keywords": {
            "primary": _entry("usb device not recognized", "usb device not recognized", 3, 5, 10),
            "secondary": [
                _entry("usb设备不被识别", "usb device not recognized", 2, 4, 8),
                _entry("usb识别问题", "usb recognition issues", 1.5, 3, 7),
                _entry("usb故障排除", "usb troubleshooting", 1, 2.5, 6),
            ],
            "long_tail": [
                _entry("usb闪存驱动器不被识别", "usb flash drive not recognized", 0.5, 1.5, 5),
                _entry("外部usb不被识别", "external usb not recognized", 0.5, 1.5, 5),
                _entry("windows usb不被识别", "windows usb not recognized", 0.3, 1, 4),
                _entry("usb端口不工作", "usb port not working", 0.3, 1, 4),
            ],
        },
        "content_strategy": {
            "focus_areas": ["driver_issues", "hardware_problems", "system_settings"],
            "content_length": {"min": 2000, "max": 4000},
            "keyword_distribution": "even",
            "semantic_keywords": [
                "usb驱动程序", "usb driver", "设备管理器", "device manager",
                "usb端口", "usb port", "硬件故障", "hardware failure",
            ],
        },
    },
    "usb-device-not-recognized": {
        "page_info": {
            "title": "USB Device Recognition Failure Solutions",
            "description": "Why USB devices fail to be recognized and how to repair them",
            "category": "technical",
            "priority": "high",
        },
        "keywords": {
            "primary": _entry("usb设备不被识别", "usb device not recognized", 4, 6, 10),
            "secondary": [
                _entry("usb设备检测", "usb device detection", 2, 4, 8),
                _entry("usb设备识别", "usb device identification", 2, 4, 8),
                _entry("usb枚举失败", "usb enumeration failure", 1, 2.5, 7),
            ],
            "long_tail": [
                _entry("usb设备不被识别windows", "usb device not recognized windows", 0.5, 1.5, 6),
                _entry("usb设备不被识别mac", "usb device not recognized mac", 0.5, 1.5, 6),
                _entry("usb设备描述符错误", "usb device descriptor error", 0.3, 1, 5),
            ],
        },
        "content_strategy": {
            "focus_areas": ["device_enumeration", "driver_loading", "system_compatibility"],
            "content_length": {"min": 2500, "max": 4500},
            "keyword_distribution": "front_loaded",
            "semantic_keywords": [
                "设备枚举", "device enumeration", "设备描述符", "device descriptor",
                "usb协议", "usb protocol", "兼容性", "compatibility",
            ],
        },
    },
    "usb-device-recognized": {
        "page_info": {
            "title": "USB Device Recognized but Not Working",
            "description": "Fixes for USB devices that are detected but misbehave",
            "category": "functional",
            "priority": "medium",
        },
        "keywords": {
            "primary": _entry("usb设备已识别", "usb device recognized", 3.5, 5.5, 10),
            "secondary": [
                _entry("usb设备检测到", "usb device detected", 2, 4, 8),
                _entry("usb设备工作", "usb device working", 1.5, 3, 7),
                _entry("usb功能异常", "usb malfunction", 1, 2.5, 6),
            ],
            "long_tail": [
                _entry("usb设备已识别但不工作", "usb device recognized but not working", 0.8, 2, 7),
                _entry("usb设备已识别windows", "usb device recognized windows", 0.5, 1.5, 5),
                _entry("usb权限问题", "usb permission issues", 0.3, 1, 4),
            ],
        },
        "content_strategy": {
            "focus_areas": ["driver_mismatch", "permissions", "configuration"],
            "content_length": {"min": 1800, "max": 3500},
            "keyword_distribution": "balanced",
            "semantic_keywords": [
                "驱动程序", "driver", "权限设置", "permissions",
                "设备配置", "device configuration", "功能测试", "functionality test",
            ],
        },
    },
    "usb-recognized": {
        "page_info": {
            "title": "USB Recognition Explained and Tuned",
            "description": "How USB recognition works and how to make it faster",
            "category": "technical_guide",
            "priority": "high",
        },
        "keywords": {
            "primary": _entry("usb recognized", "usb recognized", 3, 5, 10),
            "secondary": [
                _entry("usb检测", "usb detection", 2, 4, 8),
                _entry("usb识别机制", "usb recognition mechanism", 1.5, 3, 7),
                _entry("usb协议", "usb protocol", 1, 2.5, 6),
            ],
            "long_tail": [
                _entry("usb识别但无法访问", "usb recognized but not accessible", 0.5, 1.5, 6),
                _entry("usb识别linux", "usb recognized linux", 0.5, 1.5, 5),
                _entry("usb识别速度", "usb recognition speed", 0.3, 1, 4),
            ],
        },
        "content_strategy": {
            "focus_areas": ["protocol_analysis", "performance_optimization", "system_tuning"],
            "content_length": {"min": 2200, "max": 4200},
            "keyword_distribution": "technical_focused",
            "semantic_keywords": [
                "协议分析", "protocol analysis", "性能优化", "performance optimization",
                "系统调优", "system tuning", "识别速度", "recognition speed",
            ],
        },
    },
}

# Share of a keyword's occurrences per page section.
DISTRIBUTION_RULES: dict[str, dict[str, float]] = {
    "even": {"title": 0.15, "introduction": 0.25, "body": 0.50, "conclusion": 0.10},
    "front_loaded": {"title": 0.20, "introduction": 0.40, "body": 0.35, "conclusion": 0.05},
    "balanced": {"title": 0.12, "introduction": 0.22, "body": 0.55, "conclusion": 0.11},
    "technical_focused": {"title": 0.10, "introduction": 0.20, "body": 0.60, "conclusion": 0.10},
}

PAGE_OPTIMIZATION_STRATEGIES: dict[str, dict] = {
    "usb-not-recognized": {
        "title_optimization": {
            "include_keywords": ["usb不被识别", "usb not recognized"],
            "max_length": 60,
            "template": "{keyword} - Complete Troubleshooting Guide",
        },
        "content_optimization": {
            "keyword_placement": {"first_paragraph": True, "headings": True, "last_paragraph": True},
            "avoid_over_optimization": True,
            "natural_language": True,
        },
    },
    "usb-device-not-recognized": {
        "title_optimization": {
            "include_keywords": ["usb设备不被识别", "usb device not recognized"],
            "max_length": 60,
            "template": "{keyword}: Causes and Fixes",
        },
        "content_optimization": {
            "keyword_placement": {"first_paragraph": True, "headings": True, "technical_sections": True},
            "technical_terms": True,
            "detailed_explanations": True,
        },
    },
    "usb-device-recognized": {
        "title_optimization": {
            "include_keywords": ["usb设备已识别", "usb device recognized"],
            "max_length": 60,
            "template": "{keyword} but Not Working: Solutions",
        },
        "content_optimization": {
            "keyword_placement": {"problem_description": True, "solution_steps": True, "troubleshooting": True},
            "solution_focused": True,
            "step_by_step": True,
        },
    },
    "usb-recognized": {
        "title_optimization": {
            "include_keywords": ["usb识别", "usb recognized"],
            "max_length": 60,
            "template": "{keyword}: How It Works and How to Tune It",
        },
        "content_optimization": {
            # Code samples never get keywords forced into them
            "keyword_placement": {"technical_sections": True, "code_examples": False, "explanations": True},
            "technical_depth": True,
            "comprehensive_guide": True,
        },
    },
}

KEYWORD_COMPETITION_ANALYSIS: dict[str, dict] = {
    "usb not recognized": {
        "difficulty": "high",
        "search_volume": 12000,
        "competition": 0.8,
        "cpc": 1.2,
        "related_queries": [
            "usb device not recognized", "usb not working",
            "usb driver issues", "usb troubleshooting",
        ],
    },
    "usb device not recognized": {
        "difficulty": "high",
        "search_volume": 8500,
        "competition": 0.75,
        "cpc": 1.1,
        "related_queries": [
            "usb device not detected", "usb device unknown",
            "usb device error", "usb device driver",
        ],
    },
    "usb device recognized": {
        "difficulty": "medium",
        "search_volume": 3200,
        "competition": 0.6,
        "cpc": 0.8,
        "related_queries": [
            "usb device detected", "usb device working",
            "usb device connected", "usb device functional",
        ],
    },
    "usb recognized": {
        "difficulty": "medium",
        "search_volume": 2800,
        "competition": 0.55,
        "cpc": 0.7,
        "related_queries": [
            "usb detection", "usb identification",
            "usb protocol", "usb enumeration",
        ],
    },
}

_TIER_KEYS = {
    KeywordTier.PRIMARY: "primary",
    KeywordTier.SECONDARY: "secondary",
    KeywordTier.LONG_TAIL: "long_tail",
}


def get_page_keyword_config(page_type: Optional[str]) -> dict:
    """Get a page's keyword configuration, falling back to the default page."""
    if page_type and page_type in PAGE_KEYWORD_CONFIGS:
        return PAGE_KEYWORD_CONFIGS[page_type]
    return PAGE_KEYWORD_CONFIGS[DEFAULT_PAGE_TYPE]


def get_page_optimization_strategy(page_type: Optional[str]) -> dict:
    """Get a page's title and content strategy, falling back to the default page."""
    if page_type and page_type in PAGE_OPTIMIZATION_STRATEGIES:
        return PAGE_OPTIMIZATION_STRATEGIES[page_type]
    return PAGE_OPTIMIZATION_STRATEGIES[DEFAULT_PAGE_TYPE]


def get_keyword_competition_data(keyword: str) -> dict:
    """
    Get search competition data for a keyword.

    Args:
        keyword: Keyword phrase, matched after normalization.

    Returns:
        Competition data, or an "unknown" record with zero values.
    """
    data = KEYWORD_COMPETITION_ANALYSIS.get(normalize_keyword(keyword))
    if data is not None:
        return data
    return {
        "difficulty": "unknown",
        "search_volume": 0,
        "competition": 0,
        "cpc": 0,
        "related_queries": [],
    }


def get_distribution_rule(page_type: Optional[str]) -> dict[str, float]:
    """Get per-section occurrence shares for a page's keyword distribution."""
    strategy = get_page_keyword_config(page_type).get("content_strategy") or {}
    name = strategy.get("keyword_distribution", DEFAULT_DISTRIBUTION)
    return DISTRIBUTION_RULES.get(name, DISTRIBUTION_RULES[DEFAULT_DISTRIBUTION])


def get_tier_weight(tier: KeywordTier) -> float:
    return TIER_WEIGHTS.get(tier, 0.0)


def generate_keyword_list(
    page_type: Optional[str], language: str = DEFAULT_LANGUAGE
) -> list[Keyword]:
    """
    Build the tracked keyword list for a page type.

    Args:
        page_type: Page type identifier.
        language: "zh" or "en" phrase variant.

    Returns:
        Keywords with tier, range and importance, most important first.

    Raises:
        ValueError: If the language is not supported.
    """
    if language not in SUPPORTED_LANGUAGES:
        raise ValueError(
            f"Unsupported language: {language}. Expected one of: {', '.join(SUPPORTED_LANGUAGES)}"
        )

    keywords_cfg = get_page_keyword_config(page_type).get("keywords", {})
    keywords: list[Keyword] = []

    primary = keywords_cfg.get("primary")
    if primary:
        keywords.append(_to_keyword(primary, KeywordTier.PRIMARY, language))
    for item in keywords_cfg.get("secondary") or []:
        keywords.append(_to_keyword(item, KeywordTier.SECONDARY, language))
    for item in keywords_cfg.get("long_tail") or []:
        keywords.append(_to_keyword(item, KeywordTier.LONG_TAIL, language))

    # sorted() is stable, so equal importance keeps tier order
    return sorted(keywords, key=lambda kw: -kw.importance)


def _to_keyword(entry: dict, tier: KeywordTier, language: str) -> Keyword:
    return Keyword(
        phrase=entry[language],
        target_density=entry.get("density"),
        tier=tier,
        importance=entry.get("importance", 0),
    )


def get_target_density_range(page_type: Optional[str], tier: KeywordTier) -> DensityRange:
    """
    Get the density range for a keyword tier on a page.

    The page's own primary range wins; otherwise the tier default applies.

    Args:
        page_type: Page type identifier.
        tier: Keyword tier.

    Returns:
        DensityRange for the tier.
    """
    entry = get_page_keyword_config(page_type).get("keywords", {}).get(_TIER_KEYS[tier])
    if isinstance(entry, dict) and entry.get("density"):
        return entry["density"]
    return TIER_DENSITY_RULES.get(tier, FALLBACK_DENSITY)


def validate_keyword_config(page_type: Optional[str]) -> ConfigValidation:
    """
    Check a page keyword configuration for completeness.

    Missing primary keyword is an error; missing secondary or long-tail
    keywords and a missing content strategy are warnings.
    """
    config = get_page_keyword_config(page_type)
    keywords_cfg = config.get("keywords", {})
    validation = ConfigValidation()

    if not keywords_cfg.get("primary"):
        validation.is_valid = False
        validation.errors.append("Missing primary keyword configuration")

    if not keywords_cfg.get("secondary"):
        validation.warnings.append("Consider adding secondary keywords")

    if not keywords_cfg.get("long_tail"):
        validation.warnings.append("Consider adding long-tail keywords")

    if not config.get("content_strategy"):
        validation.warnings.append("Missing content strategy configuration")

    return validation
