"""Collaborator contracts consumed by the dispatch engine."""

from typing import TYPE_CHECKING, Protocol

from support_dispatch.config.constants import Category

if TYPE_CHECKING:
    from support_dispatch.orchestrator.models import Query


class Classifier(Protocol):
    """Maps raw text to a category. Must be safe for concurrent use."""

    def classify(self, text: str) -> Category: ...


class AnswerSource(Protocol):
    """Maps a category to answer text. Must be safe for concurrent reads."""

    def lookup(self, category: Category) -> str: ...


class OperatorHandler(Protocol):
    """Performs the human-handling step for an escalated query."""

    def __call__(self, query: "Query") -> None: ...
