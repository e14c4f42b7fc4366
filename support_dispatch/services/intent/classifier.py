"""Keyword-based intent classifier."""

import logging
from collections.abc import Iterable

from support_dispatch.config.constants import Category
from support_dispatch.config.messages import DEFAULT_KEYWORDS

logger = logging.getLogger(__name__)


class KeywordClassifier:
    """Classifies support questions by substring keyword matching.

    Keywords are checked in table order and the first one found in the
    lower-cased text decides the category. Text matching nothing is
    ``Category.UNKNOWN``. The table is frozen at construction, so one
    instance can be shared by every worker thread.
    """

    def __init__(self, keywords: Iterable[tuple[str, Category]] = DEFAULT_KEYWORDS):
        table: list[tuple[str, Category]] = []
        for keyword, category in keywords:
            normalized = keyword.strip().lower()
            if not normalized:
                raise ValueError("Keywords must not be empty")
            table.append((normalized, Category(category)))
        self._keywords: tuple[tuple[str, Category], ...] = tuple(table)

    @property
    def keywords(self) -> tuple[tuple[str, Category], ...]:
        return self._keywords

    def classify(self, text: str) -> Category:
        """Return the category of the first keyword contained in ``text``."""
        text_lower = text.lower()

        for keyword, category in self._keywords:
            if keyword in text_lower:
                logger.debug("Keyword '%s' matched, category=%s", keyword, category.value)
                return category

        logger.debug("No keyword matched, query will be escalated")
        return Category.UNKNOWN
