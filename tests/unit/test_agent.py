"""Tests for per-query routing in SupportAgent."""

from unittest.mock import MagicMock

from support_dispatch.config.constants import Category, ResponseSource
from support_dispatch.config.messages import DEFAULT_ANSWERS, FALLBACK_ANSWER, get_escalation_message
from support_dispatch.orchestrator.agent import SupportAgent
from support_dispatch.orchestrator.models import Query


def _query(text: str, query_id: str = "q1") -> Query:
    return Query(id=query_id, user_id="u1", text=text)


def test_known_category_gets_automated_answer(agent):
    response = agent.handle(_query("Привет, как дела?"))
    assert response.query_id == "q1"
    assert response.source == ResponseSource.AUTOMATED
    assert response.text == DEFAULT_ANSWERS[Category.GREETING]


def test_technical_question(agent):
    response = agent.handle(_query("сломалось что-то"))
    assert response.source == ResponseSource.AUTOMATED
    assert response.text == DEFAULT_ANSWERS[Category.TECHNICAL]


def test_unknown_query_is_forwarded_to_human(agent, escalation):
    response = agent.handle(_query("Как мне скачать отчет по транзакциям?"))
    assert response.source == ResponseSource.HUMAN
    assert response.text == get_escalation_message("forwarded")
    assert escalation.size == 1


def test_unknown_query_with_full_escalation_gets_busy_answer(agent, escalation):
    for n in range(escalation.capacity):
        assert escalation.try_enqueue(_query("???", query_id=f"pre{n}"))

    response = agent.handle(_query("???"))
    assert response.source == ResponseSource.AUTOMATED
    assert response.text == get_escalation_message("operators_busy")
    assert escalation.size == escalation.capacity


def test_classifier_failure_becomes_fallback_response(answers, escalation):
    classifier = MagicMock()
    classifier.classify.side_effect = RuntimeError("boom")
    agent = SupportAgent(classifier, answers, escalation, fallback_text=FALLBACK_ANSWER)

    response = agent.handle(_query("anything"))
    assert response.source == ResponseSource.AUTOMATED
    assert response.text == FALLBACK_ANSWER


def test_answer_lookup_failure_becomes_fallback_response(classifier, escalation):
    answers = MagicMock()
    answers.lookup.side_effect = KeyError("pricing")
    agent = SupportAgent(classifier, answers, escalation, fallback_text="fallback")

    response = agent.handle(_query("Какая цена?"))
    assert response.text == "fallback"
    answers.lookup.assert_called_once_with(Category.PRICING)
