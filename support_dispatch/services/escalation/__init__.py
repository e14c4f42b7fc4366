"""Human escalation module."""

from support_dispatch.services.escalation.handoff import EscalationQueue, SimulatedOperator

__all__ = [
    "EscalationQueue",
    "SimulatedOperator",
]
