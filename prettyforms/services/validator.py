"""
Rule descriptor parsing and element validation.

A field declares its rules as ``name[:param]`` tokens separated by ``;``.
The element validator evaluates every token (no short-circuit) and
renders the result through the presentation adapter.
"""

import logging
from functools import lru_cache

from prettyforms.adapters.base import PresentationAdapter
from prettyforms.config import Settings
from prettyforms.schemas.form_data import (
    FormField,
    RuleDescriptor,
    RuleToken,
    ValidationOutcome,
)
from prettyforms.services.rules import RuleContext, RuleRegistry

logger = logging.getLogger(__name__)


@lru_cache(maxsize=512)
def parse_descriptor(text: str | None) -> RuleDescriptor:
    """
    Parse a rule attribute into an ordered descriptor.

    Tokens are split on ``;`` and each token on its first ``:`` only, so
    ``hasdomain:http://a.com`` keeps ``http://a.com`` as the parameter.
    Empty tokens are dropped.

    Args:
        text: Raw attribute value (e.g., "notempty;minlength:5")

    Returns:
        Descriptor with tokens in declaration order
    """
    if not text:
        return RuleDescriptor()

    tokens = []
    for raw in text.split(";"):
        name, sep, param = raw.partition(":")
        name = name.strip()
        if not name:
            continue
        tokens.append(RuleToken(rule_name=name, param=param.strip() if sep else None))
    return RuleDescriptor(tokens=tuple(tokens))


class ElementValidator:
    """
    Validates single fields against their declared rules.

    Owns the sticky server-error flag of each field: while it is set the
    field is reported invalid without re-running its rules.
    """

    def __init__(
        self,
        registry: RuleRegistry,
        page: PresentationAdapter,
        settings: Settings,
    ):
        self.registry = registry
        self.page = page
        self.settings = settings

    def validate(self, field: FormField) -> ValidationOutcome:
        """
        Validate a field and render the result.

        Invisible plain fields and fields without rules are valid. A field
        flagged by the server stays invalid until the flag is cleared.
        """
        if not self.page.is_visible(field) and not self.page.is_enhanced_widget(field):
            return ValidationOutcome.ok()

        if not field.rules:
            return ValidationOutcome.ok()

        if field.has_server_error:
            return ValidationOutcome.failed()

        outcome = self.check(field)
        handle = self.page.ensure_field_error_container(field)
        if outcome.valid:
            self.page.show_field_valid(handle)
        else:
            self.page.show_field_invalid(handle, self.render(outcome.messages), False)
        return outcome

    def check(self, field: FormField) -> ValidationOutcome:
        """Evaluate every rule of the field without rendering anything."""
        context = RuleContext(
            field=field,
            page=self.page,
            password_field=self.settings.password_field,
        )
        messages = []
        for token in parse_descriptor(field.rules).tokens:
            rule = self.registry.lookup(token.rule_name)
            if rule is None:
                logger.debug(f"Skipping unknown rule '{token.rule_name}' on {field.name}")
                continue

            value = self.page.get_field_value(field)
            if not rule.predicate(context, value, token.param):
                messages.append(rule.format_message(token.param))

        if messages:
            return ValidationOutcome.failed(messages)
        return ValidationOutcome.ok()

    def render(self, messages: list[str] | tuple[str, ...]) -> str:
        """Render messages through the configured HTML template."""
        return "".join(self.settings.render_message(m) for m in messages)

    def mark_server_error(self, field: FormField, messages: list[str]) -> str:
        """
        Render server-reported errors and set the sticky flag.

        Returns:
            The rendered HTML, for reuse in the form banner
        """
        html = self.render(messages)
        field.has_server_error = True
        handle = self.page.ensure_field_error_container(field)
        self.page.show_field_invalid(handle, html, True)
        return html

    def clear_server_errors(self, fields: list[FormField]) -> int:
        """Clear the sticky flag; returns how many fields were flagged."""
        count = 0
        for form_field in fields:
            if form_field.has_server_error:
                form_field.has_server_error = False
                count += 1
        return count
