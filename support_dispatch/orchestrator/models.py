"""Dispatch models."""

import uuid

from pydantic import BaseModel, ConfigDict

from support_dispatch.config.constants import ResponseSource


class Query(BaseModel):
    """An inbound support question."""

    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    text: str

    @classmethod
    def create(cls, user_id: str, text: str) -> "Query":
        """Build a query with a freshly generated id."""
        return cls(id=uuid.uuid4().hex, user_id=user_id, text=text)


class Response(BaseModel):
    """The single answer produced for an accepted query."""

    model_config = ConfigDict(frozen=True)

    query_id: str
    text: str
    source: ResponseSource
