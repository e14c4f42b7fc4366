"""Application wiring: build a ready-to-start dispatcher from settings."""

import logging

from support_dispatch.config.messages import FALLBACK_ANSWER
from support_dispatch.config.settings import Settings, get_settings
from support_dispatch.infrastructure.logging.logger import setup_logging
from support_dispatch.orchestrator.agent import SupportAgent
from support_dispatch.orchestrator.dispatcher import Dispatcher
from support_dispatch.services.answers.store import AnswerStore
from support_dispatch.services.contracts import AnswerSource, Classifier, OperatorHandler
from support_dispatch.services.escalation.handoff import EscalationQueue, SimulatedOperator
from support_dispatch.services.intent.classifier import KeywordClassifier

logger = logging.getLogger(__name__)


def build_dispatcher(
    settings: Settings | None = None,
    *,
    classifier: Classifier | None = None,
    answers: AnswerSource | None = None,
    operator: OperatorHandler | None = None,
    configure_logging: bool = False,
) -> Dispatcher:
    """Assemble classifier, answer store, escalation queue and dispatcher.

    Collaborators default to the keyword classifier, the static answer
    store and a simulated operator; any of them can be swapped in. The
    returned dispatcher is not started.
    """
    settings = settings or get_settings()

    if configure_logging:
        setup_logging(level=settings.log_level, json_output=not settings.debug)

    escalation = EscalationQueue(
        capacity=settings.escalation_queue_capacity,
        handler=operator or SimulatedOperator(delay=settings.escalation_handling_delay),
        poll_interval=settings.worker_poll_interval,
    )
    agent = SupportAgent(
        classifier=classifier or KeywordClassifier(),
        answers=answers or AnswerStore(),
        escalation=escalation,
        fallback_text=FALLBACK_ANSWER,
    )
    logger.info("Building %s v%s", settings.app_name, settings.app_version)
    return Dispatcher.from_settings(settings, agent)
