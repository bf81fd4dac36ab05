"""
Core services of the form engine.

- Rules: named validation predicates and their messages
- Validator: rule descriptor parsing and per-field validation
- Commands: fail-isolated dispatch of server commands
- Submission: collection, sending and response handling
"""

from prettyforms.services.commands import BuiltinHandlers, CommandBus
from prettyforms.services.rules import RuleRegistry, default_registry
from prettyforms.services.submission import SubmissionController, SubmissionState
from prettyforms.services.validator import ElementValidator, parse_descriptor

__all__ = [
    "BuiltinHandlers",
    "CommandBus",
    "RuleRegistry",
    "default_registry",
    "SubmissionController",
    "SubmissionState",
    "ElementValidator",
    "parse_descriptor",
]
