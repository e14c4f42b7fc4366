"""
User-facing messages and default routing tables.
"""
from support_dispatch.config.constants import Category

# =============================================================================
# Keyword table
# =============================================================================
# Ordered: the first keyword found in the text decides the category.

DEFAULT_KEYWORDS: tuple[tuple[str, Category], ...] = (
    ("привет", Category.GREETING),
    ("здравствуй", Category.GREETING),
    ("здравствуйте", Category.GREETING),
    ("добрый день", Category.GREETING),
    ("доброе утро", Category.GREETING),
    ("добрый вечер", Category.GREETING),
    ("помощь", Category.HELP),
    ("помоги", Category.HELP),
    ("помогите", Category.HELP),
    ("поддержка", Category.HELP),
    ("цена", Category.PRICING),
    ("стоимость", Category.PRICING),
    ("тариф", Category.PRICING),
    ("стоит", Category.PRICING),
    ("план", Category.PRICING),
    ("проблема", Category.TECHNICAL),
    ("ошибка", Category.TECHNICAL),
    ("не работает", Category.TECHNICAL),
    ("сломалось", Category.TECHNICAL),
    ("техническая", Category.TECHNICAL),
    ("технический", Category.TECHNICAL),
    ("баг", Category.TECHNICAL),
    ("счет", Category.BILLING),
    ("счёт", Category.BILLING),
    ("оплата", Category.BILLING),
    ("платеж", Category.BILLING),
    ("платёж", Category.BILLING),
    ("деньги", Category.BILLING),
)

# =============================================================================
# Canned answers
# =============================================================================

DEFAULT_ANSWERS: dict[Category, str] = {
    Category.GREETING: "Здравствуйте! Чем я могу вам помочь?",
    Category.HELP: "Я могу помочь вам с вопросами о ценах, технической поддержке или счетах.",
    Category.PRICING: "Наш базовый тариф стоит $10/мес, премиум - $25/мес.",
    Category.TECHNICAL: "Для технических вопросов уточните, с какой функцией у вас проблемы.",
    Category.BILLING: "По вопросам счетов обратитесь в финансовый отдел.",
}

FALLBACK_ANSWER = "Извините, я не могу ответить на этот вопрос."

# =============================================================================
# Escalation messages
# =============================================================================

ESCALATION_MESSAGES: dict[str, str] = {
    "forwarded": "Ваш запрос передан специалисту поддержки.",
    "operators_busy": "Все операторы заняты. Попробуйте переформулировать вопрос.",
}

# =============================================================================
# Error messages
# =============================================================================

ERROR_MESSAGES: dict[str, str] = {
    "overloaded": "Система перегружена, повторите попытку позже.",
    "timeout": "Превышено время ожидания ответа.",
    "duplicate_request_id": "Запрос с таким идентификатором уже обрабатывается.",
    "closed": "Система поддержки остановлена.",
    "unknown_error": "Произошла непредвиденная ошибка.",
}


def get_escalation_message(key: str) -> str:
    """Get escalation message by key."""
    return ESCALATION_MESSAGES[key]


def get_error_message(error_key: str) -> str:
    """Get error message by key."""
    return ERROR_MESSAGES.get(error_key, ERROR_MESSAGES["unknown_error"])
