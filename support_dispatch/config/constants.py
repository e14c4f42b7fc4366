"""
Constants, enums, and static values.
"""

from enum import Enum


class Category(str, Enum):
    """Closed set of query categories produced by the classifier."""

    GREETING = "greeting"
    HELP = "help"
    PRICING = "pricing"
    TECHNICAL = "technical"
    BILLING = "billing"
    UNKNOWN = "unknown"  # No keyword matched: route to a human operator


class ResponseSource(str, Enum):
    """Who produced a response."""

    AUTOMATED = "automated"
    HUMAN = "human"


class DispatchEvent(str, Enum):
    """Terminal events of a query, as seen by the caller."""

    ANSWERED = "answered"
    ESCALATED = "escalated"
    REJECTED = "rejected"
    TIMED_OUT = "timed_out"
    DISCARDED = "discarded"
