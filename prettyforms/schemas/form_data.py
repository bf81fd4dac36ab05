"""
Pydantic models for form fields, trigger controls and validation results.

These models describe the page-side state the engine reads and updates:
the fields of a form, the controls that drive a submission and the
outcome of validating a single field.
"""

from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class FieldKind(str, Enum):
    """Kinds of form fields the engine knows how to collect."""

    TEXT = "text"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    SELECT = "select"
    RICHTEXT = "richtext"
    HIDDEN = "hidden"


class FormField(BaseModel):
    """
    A single form field.

    ``rules`` holds the raw rule attribute (``"notempty;minlength:5"``).
    ``has_server_error`` is the sticky flag set when the server rejected
    the field's value; it is owned by the element validator.
    """

    name: str | None = None
    kind: FieldKind = FieldKind.TEXT
    value: Any = ""
    checked: bool = False
    rules: str | None = None
    dont_send: bool = False
    visible: bool = True
    enhanced: bool = False
    has_server_error: bool = False

    @property
    def is_array(self) -> bool:
        """Whether values of this field accumulate into a list."""
        return bool(self.name) and self.name.endswith("[]")


class Trigger(BaseModel):
    """A control (button or link) whose activation drives a submission."""

    key: str = Field(default_factory=lambda: uuid4().hex)
    href: str | None = None
    link: str | None = None
    input_container: str | None = None
    really: bool = False
    really_text: str | None = None
    clear_inputs: bool = False
    disabled: bool = False

    def resolve_url(self, current_url: str) -> str:
        """
        Resolve the submission target.

        ``href`` wins unless it is missing or ``#``; then ``link``; then
        the current page URL.
        """
        if self.href is not None and self.href != "#":
            return self.href
        if self.link is not None:
            return self.link
        return current_url


class SubmissionRequest(BaseModel):
    """Everything the send pipeline needs for one submission."""

    target_url: str
    field_values: dict[str, Any] = Field(default_factory=dict)
    trigger: Trigger
    clear_inputs: bool = False
    container: str | None = None
    banner: Any = None


class RuleToken(BaseModel):
    """One ``name[:param]`` entry of a rule descriptor."""

    model_config = ConfigDict(frozen=True)

    rule_name: str = Field(..., min_length=1)
    param: str | None = None


class RuleDescriptor(BaseModel):
    """Ordered rule invocations declared for one field."""

    model_config = ConfigDict(frozen=True)

    tokens: tuple[RuleToken, ...] = ()


class ValidationOutcome(BaseModel):
    """Result of validating one field: valid, or invalid with messages."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    messages: tuple[str, ...] = ()

    @classmethod
    def ok(cls) -> "ValidationOutcome":
        return cls(valid=True)

    @classmethod
    def failed(cls, messages: list[str] | tuple[str, ...] = ()) -> "ValidationOutcome":
        return cls(valid=False, messages=tuple(messages))

    def __bool__(self) -> bool:
        return self.valid
