"""Tests for the keyword intent classifier."""

import pytest

from support_dispatch.config.constants import Category
from support_dispatch.config.messages import DEFAULT_KEYWORDS
from support_dispatch.services.intent.classifier import KeywordClassifier


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Привет, как дела?", Category.GREETING),
        ("Добрый день!", Category.GREETING),
        ("Помогите, пожалуйста", Category.HELP),
        ("Сколько стоит ваш сервис?", Category.PRICING),
        ("У меня не работает авторизация", Category.TECHNICAL),
        ("сломалось что-то", Category.TECHNICAL),
        ("Где мой счёт за май?", Category.BILLING),
        ("ОПЛАТА не прошла", Category.BILLING),
    ],
)
def test_classify_known_keywords(classifier, text, expected):
    assert classifier.classify(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "Как мне скачать отчет по транзакциям?",
        "hello there",
        "",
    ],
)
def test_classify_without_keyword_returns_unknown(classifier, text):
    assert classifier.classify(text) == Category.UNKNOWN


def test_every_registered_keyword_maps_to_its_category():
    """Each keyword alone classifies to its own category."""
    classifier = KeywordClassifier()
    for keyword, category in DEFAULT_KEYWORDS:
        assert classifier.classify(f"... {keyword.upper()} ...") == category


def test_first_keyword_in_table_order_wins():
    classifier = KeywordClassifier(
        [
            ("ошибка", Category.TECHNICAL),
            ("оплата", Category.BILLING),
        ]
    )
    assert classifier.classify("оплата: ошибка") == Category.TECHNICAL

    reversed_classifier = KeywordClassifier(
        [
            ("оплата", Category.BILLING),
            ("ошибка", Category.TECHNICAL),
        ]
    )
    assert reversed_classifier.classify("оплата: ошибка") == Category.BILLING


def test_keywords_are_normalized_to_lower_case():
    classifier = KeywordClassifier([("  Refund ", Category.BILLING)])
    assert classifier.keywords == (("refund", Category.BILLING),)
    assert classifier.classify("I want a REFUND") == Category.BILLING


def test_empty_keyword_rejected():
    with pytest.raises(ValueError):
        KeywordClassifier([("  ", Category.HELP)])


def test_classification_is_repeatable(classifier):
    results = {classifier.classify("тариф и счет") for _ in range(20)}
    assert results == {Category.PRICING}
