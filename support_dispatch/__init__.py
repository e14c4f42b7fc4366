"""Concurrent dispatch of support queries to automated answers or human operators."""

from support_dispatch.app import build_dispatcher
from support_dispatch.config.constants import Category, ResponseSource
from support_dispatch.errors import (
    DispatchError,
    DispatcherClosedError,
    DuplicateRequestIDError,
    OverloadError,
    RequestTimeoutError,
)
from support_dispatch.orchestrator.dispatcher import Dispatcher
from support_dispatch.orchestrator.models import Query, Response

__all__ = [
    "Category",
    "DispatchError",
    "Dispatcher",
    "DispatcherClosedError",
    "DuplicateRequestIDError",
    "OverloadError",
    "Query",
    "RequestTimeoutError",
    "Response",
    "ResponseSource",
    "build_dispatcher",
]
