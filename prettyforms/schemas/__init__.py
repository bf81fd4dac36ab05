"""
Pydantic schemas for fields, controls, validation results and commands.
"""

from prettyforms.schemas.commands import (
    Command,
    CommandList,
    CommandResult,
    FieldErrors,
    FieldErrorsList,
    SubmissionOutcome,
    SubmissionResult,
)
from prettyforms.schemas.form_data import (
    FieldKind,
    FormField,
    RuleDescriptor,
    RuleToken,
    SubmissionRequest,
    Trigger,
    ValidationOutcome,
)

__all__ = [
    "Command",
    "CommandList",
    "CommandResult",
    "FieldErrors",
    "FieldErrorsList",
    "SubmissionOutcome",
    "SubmissionResult",
    "FieldKind",
    "FormField",
    "RuleDescriptor",
    "RuleToken",
    "SubmissionRequest",
    "Trigger",
    "ValidationOutcome",
]
