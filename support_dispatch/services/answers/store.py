"""Static answer store."""

from collections.abc import Mapping
from types import MappingProxyType

from support_dispatch.config.constants import Category
from support_dispatch.config.messages import DEFAULT_ANSWERS, FALLBACK_ANSWER


class AnswerStore:
    """Read-only category -> answer table, loaded once at construction."""

    def __init__(
        self,
        answers: Mapping[Category, str] = DEFAULT_ANSWERS,
        fallback: str = FALLBACK_ANSWER,
    ):
        if Category.UNKNOWN in answers:
            raise ValueError("Category.UNKNOWN is routed to escalation and cannot have an answer")
        self._answers: Mapping[Category, str] = MappingProxyType(dict(answers))
        self._fallback = fallback

    @property
    def categories(self) -> list[Category]:
        return list(self._answers)

    def lookup(self, category: Category) -> str:
        """Return the canned answer for ``category`` or the generic fallback."""
        return self._answers.get(category, self._fallback)
