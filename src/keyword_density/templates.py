# -*- coding: utf-8 -*-
"""
Phrase tables used by the optimizer.

Insertion templates are short lead-in phrases spliced at the start of a
paragraph to raise a keyword's count. Replacement phrases stand in for a
keyword occurrence when its density is too high, and never have more words
than the keyword it stands in for, so a reduction does not dilute the other
keywords. Both tables are keyed by normalized keyword and have explicit
fallbacks for unknown keywords.
"""

from dataclasses import dataclass, field

from .text_processing import (
    build_keyword_pattern,
    clean_content,
    count_words,
    normalize_keyword,
)


@dataclass(frozen=True)
class InsertionTemplate:
    """A lead-in phrase containing the keyword, plus why it reads naturally."""
    text: str
    reason: str


INSERTION_TEMPLATES: dict[str, list[InsertionTemplate]] = {
    "usb": [
        InsertionTemplate("When a usb device is plugged in, ", "Natural scenario description"),
        InsertionTemplate("Ways to fix usb problems include the following. ", "Lead-in to a solution list"),
        InsertionTemplate("Most usb failures can be traced to a few causes. ", "Summarizing statement"),
    ],
    "recognized": [
        InsertionTemplate("Once the device is recognized, ", "Status description"),
        InsertionTemplate("To make sure the device is recognized, ", "Goal description"),
        InsertionTemplate("When the device is not recognized, ", "Problem scenario"),
    ],
    "usb recognized": [
        InsertionTemplate("Getting the drive usb recognized again is usually quick. ", "Outcome statement"),
        InsertionTemplate("A port that keeps the stick usb recognized is worth noting. ", "Hardware tip"),
    ],
    "usb not recognized": [
        InsertionTemplate("When you hit the usb not recognized issue, ", "Problem scenario description"),
        InsertionTemplate("Steps to resolve usb not recognized: ", "Lead-in to solution steps"),
    ],
    "usb device recognized": [
        InsertionTemplate("Once the usb device recognized message appears, ", "Success scenario"),
        InsertionTemplate("A usb device recognized by the system shows up in Device Manager. ", "Verification hint"),
    ],
    "usb device not recognized": [
        InsertionTemplate("When the usb device not recognized error appears, ", "Error scenario description"),
        InsertionTemplate("Fixing usb device not recognized errors requires a few checks. ", "Solution description"),
    ],
}


def default_insertion_templates(keyword: str) -> list[InsertionTemplate]:
    """
    Build generic insertion templates for a keyword with no table entry.

    Args:
        keyword: Keyword phrase.

    Returns:
        Two generic lead-in templates containing the keyword.
    """
    return [
        InsertionTemplate(f"Regarding a solution for {keyword}: ", "Generic solution lead-in"),
        InsertionTemplate(f"Common causes of {keyword} issues include the following. ", "Generic cause analysis"),
    ]


REPLACEMENTS: dict[str, str] = {
    "usb": "port",
    "recognized": "detected",
    "usb recognized": "detected",
    "usb not recognized": "undetected hardware",
    "usb device recognized": "detected hardware",
    "usb device not recognized": "this detection error",
}

DEFAULT_REPLACEMENT = "the device"
LAST_RESORT_REPLACEMENT = "it"


@dataclass
class TemplateBook:
    """
    Lookup of insertion templates and replacement phrases.

    Attributes:
        insertions: Keyword -> insertion templates.
        replacements: Keyword -> replacement phrase.
        default_replacement: Phrase used for keywords without a replacement.
    """
    insertions: dict[str, list[InsertionTemplate]] = field(
        default_factory=lambda: dict(INSERTION_TEMPLATES)
    )
    replacements: dict[str, str] = field(default_factory=lambda: dict(REPLACEMENTS))
    default_replacement: str = DEFAULT_REPLACEMENT

    def insertion_templates(self, keyword: str) -> list[InsertionTemplate]:
        """Get insertion templates for a keyword, falling back to generic ones."""
        key = normalize_keyword(keyword)
        if key in self.insertions:
            return list(self.insertions[key])
        return default_insertion_templates(key)

    def replacement_for(self, keyword: str) -> str:
        """
        Get the replacement phrase for a keyword.

        Candidates are the keyword's own entry, then the default phrase.
        A candidate is skipped when it would match the keyword itself or
        has more words than the keyword; "it" is the last resort.
        """
        key = normalize_keyword(keyword)
        pattern = build_keyword_pattern(key)
        budget = count_words(clean_content(key))

        for candidate in (self.replacements.get(key), self.default_replacement):
            if not candidate or pattern.search(candidate):
                continue
            if count_words(clean_content(candidate)) <= budget:
                return candidate
        return LAST_RESORT_REPLACEMENT
