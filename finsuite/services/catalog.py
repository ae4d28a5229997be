"""
Service catalog shown on the dashboard, with typo-tolerant search.
"""

import re
from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class ServiceEntry:
    name: str
    description: str
    href: str
    category: str


SERVICES = (
    ServiceEntry(
        name="BrainBites",
        description="Get quick, AI-powered explanations of complex financial and software engineering concepts.",
        href="/brain-bites",
        category="AI & Learning",
    ),
    ServiceEntry(
        name="Conceptify",
        description="Explore key financial and project management concepts, with clear definitions and formulas.",
        href="/conceptify",
        category="AI & Learning",
    ),
    ServiceEntry(
        name="Project Analytics",
        description="Upload a document for an AI-powered feasibility analysis, score, and recommendations.",
        href="/analytics",
        category="AI & Learning",
    ),
    ServiceEntry(
        name="NPV Calculator",
        description="Evaluate the profitability of an investment by comparing future cash flows to the initial investment.",
        href="/npv",
        category="Financial Planning",
    ),
    ServiceEntry(
        name="Annuity Factor",
        description="Calculate the present value of a series of equal future payments using the annuity factor shortcut.",
        href="/annuity",
        category="Financial Planning",
    ),
    ServiceEntry(
        name="Inflation Calculator",
        description="Calculate the future value of money adjusted for a consistent annual inflation rate.",
        href="/inflation",
        category="Financial Planning",
    ),
    ServiceEntry(
        name="COCOMO Calculator",
        description="Estimate software development effort and time using the basic Constructive Cost Model (COCOMO).",
        href="/cocomo",
        category="Project Management",
    ),
    ServiceEntry(
        name="Income Tax Calculator (India)",
        description="Calculate your income tax liability based on the 2025-26 Indian New Tax Regime.",
        href="/income-tax",
        category="Personal Finance",
    ),
)

_WORD_SPLIT = re.compile(r"[\s,.-]+")


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between two strings (insert, delete, substitute)."""
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(a) + 1))
    for j in range(1, len(b) + 1):
        current = [j] + [0] * len(a)
        for i in range(1, len(a) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            current[i] = min(
                current[i - 1] + 1,
                previous[i] + 1,
                previous[i - 1] + cost,
            )
        previous = current

    return previous[len(a)]


def _matches(entry: ServiceEntry, search_words: List[str]) -> bool:
    combined = f"{entry.name.lower()} {entry.description.lower()}"
    service_words = {word for word in _WORD_SPLIT.split(combined) if word}

    for search_word in search_words:
        if search_word in combined:
            continue

        # Longer words tolerate more typos
        threshold = 2 if len(search_word) > 5 else 1
        if not any(
            levenshtein_distance(search_word, word) <= threshold
            for word in service_words
        ):
            return False

    return True


def search_services(query: str = "") -> List[ServiceEntry]:
    """
    Filter the catalog by a free-text query.

    Every query word must appear in the name or description, either as
    a substring or as a close (typo-tolerant) match of a whole word.
    """
    search_words = [word for word in query.lower().strip().split() if word]
    if not search_words:
        return list(SERVICES)

    return [entry for entry in SERVICES if _matches(entry, search_words)]


def group_by_category(entries: List[ServiceEntry]) -> Dict[str, List[ServiceEntry]]:
    grouped: Dict[str, List[ServiceEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.category, []).append(entry)
    return grouped
