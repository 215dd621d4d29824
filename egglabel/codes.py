"""Egg stamp code parsing and classification."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

UNKNOWN = "Unknown"

HOUSING_ORGANIC = "Organic"
HOUSING_FREE_RANGE = "Free Range (Floor)"
HOUSING_BARN = "Barn (Cell)"
HOUSING_CAGE = "Cage (Industrial)"

CATEGORY_C0 = "C0 - Highest Category"
CATEGORY_C1 = "C1 - First Category"
CATEGORY_C2 = "C2 - Second Category"
CATEGORY_C3 = "C3 - Third Category"
CATEGORY_STANDARD = "Table Egg - Standard"

# First digit of the stamp → hen-keeping system
_HOUSING_BY_DIGIT: dict[str, str] = {
    "0": HOUSING_ORGANIC,
    "1": HOUSING_FREE_RANGE,
    "2": HOUSING_BARN,
    "3": HOUSING_CAGE,
}

# Checked in this order; the first keyword found in the raw code wins
_CATEGORY_KEYWORDS: list[tuple[str, str]] = [
    ("C0", CATEGORY_C0),
    ("C1", CATEGORY_C1),
    ("C2", CATEGORY_C2),
    ("C3", CATEGORY_C3),
]

COUNTRY_CODES: dict[str, str] = {
    "AT": "Austria", "BE": "Belgium", "BG": "Bulgaria", "CY": "Cyprus",
    "CZ": "Czech Republic", "DE": "Germany", "DK": "Denmark", "EE": "Estonia",
    "ES": "Spain", "FI": "Finland", "FR": "France", "GB": "United Kingdom",
    "GR": "Greece", "HR": "Croatia", "HU": "Hungary", "IE": "Ireland",
    "IT": "Italy", "LT": "Lithuania", "LU": "Luxembourg", "LV": "Latvia",
    "MT": "Malta", "NL": "Netherlands", "PL": "Poland", "PT": "Portugal",
    "RO": "Romania", "RU": "Russia", "SE": "Sweden", "SI": "Slovenia",
    "SK": "Slovakia", "UA": "Ukraine", "US": "United States",
}

HOUSING_VALUES = frozenset([*_HOUSING_BY_DIGIT.values(), UNKNOWN])
CATEGORY_VALUES = frozenset([label for _, label in _CATEGORY_KEYWORDS] + [CATEGORY_STANDARD])
COUNTRY_VALUES = frozenset([*COUNTRY_CODES.values(), UNKNOWN])

HOUSING_GUIDE: list[tuple[str, str]] = [
    ("0 - Organic", "Hens roam freely, organic feed"),
    ("1 - Free Range", "Access to outdoors"),
    ("2 - Barn", "Indoor free movement"),
    ("3 - Cage", "Confined in cages"),
]

CATEGORY_GUIDE: list[tuple[str, str]] = [
    ("C0 - Highest", "Premium table eggs, largest size"),
    ("C1 - First", "Standard large eggs"),
    ("C2 - Second", "Medium eggs"),
    ("C3 - Third", "Small eggs"),
]

# A recognized text line that looks like a printed stamp, e.g. "1RU12345"
CANDIDATE_PATTERN = re.compile(r"^\d[A-Z]{2}\d+$")


@dataclass(frozen=True)
class Classification:
    housing: str = UNKNOWN
    country: str = UNKNOWN
    factory: str = UNKNOWN
    category: str = CATEGORY_STANDARD


def normalize(code: str) -> str:
    """Strip ``-`` separators and uppercase the rest."""
    return code.replace("-", "").upper()


def _positional_fields(normalized: str) -> tuple[str, str, str]:
    """Return (housing, country, factory) read by position."""
    if len(normalized) < 3 or normalized[0] not in "0123456789":
        return UNKNOWN, UNKNOWN, UNKNOWN

    housing = _HOUSING_BY_DIGIT.get(normalized[0], UNKNOWN)
    country = COUNTRY_CODES.get(normalized[1:3], UNKNOWN)
    # May be empty for a three-character code
    factory = normalized[3:]
    return housing, country, factory


def _category_for(code: str) -> str:
    for keyword, label in _CATEGORY_KEYWORDS:
        if keyword in code:
            return label
    return CATEGORY_STANDARD


def classify_fields(code: str) -> Classification:
    """Combine the positional fields and the keyword category.

    The two derivations look at different strings (normalized vs. raw) and
    are not reconciled, so a code such as ``C0-1-DE-500`` gets a C0 category
    while its positional fields stay unknown.
    """
    housing, country, factory = _positional_fields(normalize(code))
    return Classification(
        housing=housing,
        country=country,
        factory=factory,
        category=_category_for(code),
    )


def parse(code: str) -> Classification:
    """Decode a stamp code. Never raises; unreadable parts become ``Unknown``."""
    return classify_fields(code)


def is_candidate(text: str) -> bool:
    return CANDIDATE_PATTERN.match(text) is not None


def find_candidate(texts: Iterable[str]) -> str | None:
    """Return the first recognized line that matches the stamp pattern."""
    for text in texts:
        if is_candidate(text):
            return text
    return None
