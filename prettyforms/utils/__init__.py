"""
Utility modules for PrettyForms.
"""

from prettyforms.utils.markup import (
    field_from_attributes,
    is_eligible,
    is_trigger,
    trigger_from_attributes,
)

__all__ = [
    "field_from_attributes",
    "is_eligible",
    "is_trigger",
    "trigger_from_attributes",
]
