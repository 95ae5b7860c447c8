"""
Keyword list loading and parsing from CSV and Excel files.

This module handles ingestion of tracked keywords, with optional
per-keyword density ranges, from:
- CSV files
- Excel files (.xlsx, .xls)
"""

from pathlib import Path
from typing import Optional, Union

import pandas as pd

from .models import DensityRange, Keyword, KeywordTier


class KeywordLoadError(Exception):
    """Raised when keyword loading fails."""
    pass


# Common column name variations for keyword data
KEYWORD_COLUMN_VARIANTS = ["keyword", "keywords", "term", "terms", "query", "queries", "phrase"]
MIN_DENSITY_COLUMN_VARIANTS = ["min_density", "density_min", "min", "min_pct"]
MAX_DENSITY_COLUMN_VARIANTS = ["max_density", "density_max", "max", "max_pct"]
TIER_COLUMN_VARIANTS = ["tier", "type", "keyword_type", "role"]
IMPORTANCE_COLUMN_VARIANTS = ["importance", "priority", "weight"]


def _normalize_column_name(name: str) -> str:
    """Normalize column name for matching."""
    return str(name).lower().strip().replace(" ", "_").replace("-", "_")


def _find_column(df: pd.DataFrame, variants: list[str]) -> Optional[str]:
    """
    Find a column in the DataFrame matching one of the variant names.

    Args:
        df: The DataFrame to search.
        variants: List of possible column name variants.

    Returns:
        The actual column name if found, None otherwise.
    """
    normalized_columns = {_normalize_column_name(col): col for col in df.columns}

    for variant in variants:
        normalized = _normalize_column_name(variant)
        if normalized in normalized_columns:
            return normalized_columns[normalized]

    return None


def _parse_tier(value) -> Optional[KeywordTier]:
    """Map free-form tier labels onto KeywordTier."""
    label = str(value).strip().lower().replace("-", "_").replace(" ", "_")
    if label in ("primary", "main", "p"):
        return KeywordTier.PRIMARY
    if label in ("secondary", "s"):
        return KeywordTier.SECONDARY
    if label in ("long_tail", "longtail", "lt", "tail"):
        return KeywordTier.LONG_TAIL
    return None


def load_keywords_from_csv(file_path: Union[str, Path]) -> list[Keyword]:
    """
    Load keywords from a CSV file.

    Args:
        file_path: Path to the CSV file.

    Returns:
        List of Keyword objects.

    Raises:
        KeywordLoadError: If the file cannot be read or parsed.
    """
    path = Path(file_path)

    if not path.exists():
        raise KeywordLoadError(f"File not found: {file_path}")

    try:
        df = pd.read_csv(path, encoding="utf-8")
    except UnicodeDecodeError:
        # Try alternative encoding
        try:
            df = pd.read_csv(path, encoding="latin-1")
        except Exception as e:
            raise KeywordLoadError(f"Failed to read CSV file: {e}")
    except pd.errors.EmptyDataError:
        raise KeywordLoadError("Keyword file is empty")
    except Exception as e:
        raise KeywordLoadError(f"Failed to read CSV file: {e}")

    return _parse_keyword_dataframe(df)


def load_keywords_from_excel(file_path: Union[str, Path], sheet_name: Optional[str] = None) -> list[Keyword]:
    """
    Load keywords from an Excel file.

    Args:
        file_path: Path to the Excel file (.xlsx or .xls).
        sheet_name: Optional sheet name to read from. Defaults to first sheet.

    Returns:
        List of Keyword objects.

    Raises:
        KeywordLoadError: If the file cannot be read or parsed.
    """
    path = Path(file_path)

    if not path.exists():
        raise KeywordLoadError(f"File not found: {file_path}")

    try:
        if sheet_name:
            df = pd.read_excel(path, sheet_name=sheet_name)
        else:
            df = pd.read_excel(path)
    except Exception as e:
        raise KeywordLoadError(f"Failed to read Excel file: {e}")

    return _parse_keyword_dataframe(df)


def _parse_keyword_dataframe(df: pd.DataFrame) -> list[Keyword]:
    """
    Parse a DataFrame into a list of Keyword objects.

    A density range is attached only when both min and max are present
    and form a valid range.

    Args:
        df: DataFrame containing keyword data.

    Returns:
        List of Keyword objects.

    Raises:
        KeywordLoadError: If required columns are missing.
    """
    if df.empty:
        raise KeywordLoadError("Keyword file is empty")

    keyword_col = _find_column(df, KEYWORD_COLUMN_VARIANTS)
    if keyword_col is None:
        raise KeywordLoadError(
            f"No keyword column found. Expected one of: {', '.join(KEYWORD_COLUMN_VARIANTS)}. "
            f"Found columns: {', '.join(str(c) for c in df.columns)}"
        )

    min_col = _find_column(df, MIN_DENSITY_COLUMN_VARIANTS)
    max_col = _find_column(df, MAX_DENSITY_COLUMN_VARIANTS)
    tier_col = _find_column(df, TIER_COLUMN_VARIANTS)
    importance_col = _find_column(df, IMPORTANCE_COLUMN_VARIANTS)

    keywords: list[Keyword] = []

    for _, row in df.iterrows():
        phrase = row[keyword_col]
        if pd.isna(phrase) or not str(phrase).strip():
            continue

        target_density: Optional[DensityRange] = None
        if min_col and max_col and not pd.isna(row[min_col]) and not pd.isna(row[max_col]):
            try:
                target_density = DensityRange(min=float(row[min_col]), max=float(row[max_col]))
            except (ValueError, TypeError):
                pass

        tier: Optional[KeywordTier] = None
        if tier_col and not pd.isna(row[tier_col]):
            tier = _parse_tier(row[tier_col])

        importance = 0
        if importance_col and not pd.isna(row[importance_col]):
            try:
                importance = int(float(row[importance_col]))
            except (ValueError, TypeError):
                pass

        keywords.append(
            Keyword(
                phrase=str(phrase),
                target_density=target_density,
                tier=tier,
                importance=importance,
            )
        )

    if not keywords:
        raise KeywordLoadError("No valid keywords found in file")

    return keywords


def load_keywords(file_path: Union[str, Path], sheet_name: Optional[str] = None) -> list[Keyword]:
    """
    Load keywords from a CSV or Excel file.

    Automatically detects file type based on extension.

    Args:
        file_path: Path to the keyword file.
        sheet_name: Optional sheet name for Excel files.

    Returns:
        List of Keyword objects.

    Raises:
        KeywordLoadError: If the file cannot be read or is invalid.
    """
    path = Path(file_path)
    suffix = path.suffix.lower()

    if suffix == ".csv":
        return load_keywords_from_csv(path)
    elif suffix in (".xlsx", ".xls"):
        return load_keywords_from_excel(path, sheet_name)
    else:
        raise KeywordLoadError(
            f"Unsupported file format: {suffix}. Supported formats: .csv, .xlsx, .xls"
        )


def deduplicate_keywords(keywords: list[Keyword]) -> list[Keyword]:
    """
    Remove duplicate keywords based on normalized phrase.

    Keeps the first occurrence of each keyword.
    """
    seen: set[str] = set()
    unique: list[Keyword] = []

    for kw in keywords:
        if kw.phrase not in seen:
            seen.add(kw.phrase)
            unique.append(kw)

    return unique


def sort_keywords_by_importance(keywords: list[Keyword]) -> list[Keyword]:
    """Sort keywords by importance, highest first, keeping file order on ties."""
    return sorted(keywords, key=lambda kw: -kw.importance)
