"""
Pydantic models for the server command protocol.

A server answers a submission with a JSON array of commands; the client
executes them in order.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class Command(BaseModel):
    """A server-issued (or locally synthesized) instruction."""

    type: str
    data: Any = None

    model_config = {
        "extra": "ignore",
    }


# Wire format of a response body
CommandList = TypeAdapter(list[Command])


class FieldErrors(BaseModel):
    """Errors reported by the server for one field."""

    field: str
    errors: list[str] = Field(default_factory=list)


FieldErrorsList = TypeAdapter(list[FieldErrors])


class CommandResult(BaseModel):
    """Outcome of dispatching a single command."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    type: str
    handled: bool = False
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SubmissionOutcome(str, Enum):
    """How a submission attempt ended."""

    SKIPPED = "skipped"
    DECLINED = "declined"
    INVALID = "invalid"
    SENT = "sent"
    TRANSPORT_ERROR = "transport_error"


class SubmissionResult(BaseModel):
    """Summary of one submission attempt."""

    outcome: SubmissionOutcome
    commands: list[Command] = Field(default_factory=list)
    results: list[CommandResult] = Field(default_factory=list)
    cleared: bool = False
