"""Pytest configuration and fixtures."""

import threading

import pytest

from support_dispatch.config.constants import Category
from support_dispatch.config.messages import FALLBACK_ANSWER
from support_dispatch.config.settings import Settings
from support_dispatch.orchestrator.agent import SupportAgent
from support_dispatch.orchestrator.models import Query
from support_dispatch.services.answers.store import AnswerStore
from support_dispatch.services.escalation.handoff import EscalationQueue
from support_dispatch.services.intent.classifier import KeywordClassifier


class GatedClassifier:
    """Keyword classifier that blocks until ``release`` is set."""

    def __init__(self) -> None:
        self.inner = KeywordClassifier()
        self.entered = threading.Event()
        self.release = threading.Event()

    def classify(self, text: str) -> Category:
        self.entered.set()
        self.release.wait(5)
        return self.inner.classify(text)


class BlockingOperator:
    """Operator handler that holds each query until ``release`` is set."""

    def __init__(self) -> None:
        self.started = threading.Event()
        self.release = threading.Event()
        self.seen: list[str] = []

    def __call__(self, query: Query) -> None:
        self.seen.append(query.id)
        self.started.set()
        self.release.wait(5)


@pytest.fixture
def settings():
    """Provide settings tuned for fast tests."""
    return Settings(
        _env_file=None,
        dispatcher_workers=3,
        intake_queue_capacity=10,
        escalation_queue_capacity=5,
        request_timeout=2.0,
        escalation_handling_delay=0.0,
        worker_poll_interval=0.02,
        shutdown_timeout=1.0,
    )


@pytest.fixture
def classifier():
    return KeywordClassifier()


@pytest.fixture
def answers():
    return AnswerStore()


@pytest.fixture
def escalation():
    """Escalation queue whose consumer is never started."""
    return EscalationQueue(capacity=2, poll_interval=0.02)


@pytest.fixture
def agent(classifier, answers, escalation):
    return SupportAgent(classifier, answers, escalation, fallback_text=FALLBACK_ANSWER)


@pytest.fixture
def gated_classifier():
    gate = GatedClassifier()
    yield gate
    gate.release.set()


@pytest.fixture
def blocking_operator():
    operator = BlockingOperator()
    yield operator
    operator.release.set()
