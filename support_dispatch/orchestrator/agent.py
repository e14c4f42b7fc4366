"""Per-query routing: automated answer, human escalation, or busy fallback."""

import logging

from support_dispatch.config.constants import Category, ResponseSource
from support_dispatch.config.messages import get_escalation_message
from support_dispatch.orchestrator.models import Query, Response
from support_dispatch.services.contracts import AnswerSource, Classifier
from support_dispatch.services.escalation.handoff import EscalationQueue

logger = logging.getLogger(__name__)


class SupportAgent:
    """Turns one query into exactly one response.

    Unknown queries go to the escalation queue; when it is full the caller
    gets an automated "operators busy" answer instead of waiting. Any error
    raised by a collaborator becomes an automated fallback response, so a
    bad input never takes down the worker running it.
    """

    def __init__(
        self,
        classifier: Classifier,
        answers: AnswerSource,
        escalation: EscalationQueue,
        fallback_text: str,
    ) -> None:
        self.classifier = classifier
        self.answers = answers
        self.escalation = escalation
        self.fallback_text = fallback_text

    def handle(self, query: Query) -> Response:
        try:
            return self._route(query)
        except Exception as e:
            logger.error("Failed to process query %s: %s", query.id, e, exc_info=True)
            return Response(query_id=query.id, text=self.fallback_text, source=ResponseSource.AUTOMATED)

    def _route(self, query: Query) -> Response:
        category = self.classifier.classify(query.text)

        if category == Category.UNKNOWN:
            if self.escalation.try_enqueue(query):
                return Response(
                    query_id=query.id,
                    text=get_escalation_message("forwarded"),
                    source=ResponseSource.HUMAN,
                )
            return Response(
                query_id=query.id,
                text=get_escalation_message("operators_busy"),
                source=ResponseSource.AUTOMATED,
            )

        answer = self.answers.lookup(category)
        logger.info("Query %s answered for category %s", query.id, category.value)
        return Response(query_id=query.id, text=answer, source=ResponseSource.AUTOMATED)
