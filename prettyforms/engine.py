"""
Engine setup.

``FormEngine`` is the per-page service object: it builds the rule
registry, validator, command bus, transport and submission controller
once and hands them to each other explicitly.
"""

import logging
from typing import Any

from prettyforms.adapters.base import PresentationAdapter
from prettyforms.clients.transport import FormTransport
from prettyforms.config import Settings, get_settings
from prettyforms.schemas.commands import CommandResult, SubmissionResult
from prettyforms.schemas.form_data import FormField, Trigger, ValidationOutcome
from prettyforms.services.commands import BuiltinHandlers, CommandBus, Handler
from prettyforms.services.rules import Predicate, RuleRegistry, default_registry
from prettyforms.services.submission import SubmissionController
from prettyforms.services.validator import ElementValidator

logger = logging.getLogger(__name__)


class FormEngine:
    """
    Form validation and submission engine for one page.

    Example:
        >>> page = MemoryPage()
        >>> async with FormEngine(page) as engine:
        ...     result = await engine.activate(trigger)
    """

    def __init__(
        self,
        page: PresentationAdapter,
        settings: Settings | None = None,
        transport: FormTransport | None = None,
        registry: RuleRegistry | None = None,
    ):
        self.settings = settings or get_settings()
        self.page = page
        self.registry = registry or default_registry(self.settings.rule_messages)
        self.transport = transport or FormTransport(timeout=self.settings.request_timeout)

        self.validator = ElementValidator(self.registry, page, self.settings)
        self.bus = CommandBus()
        self.handlers = BuiltinHandlers(page, self.validator, self.settings)
        self.handlers.register(self.bus)

        self.controller = SubmissionController(
            page=page,
            validator=self.validator,
            bus=self.bus,
            handlers=self.handlers,
            transport=self.transport,
            settings=self.settings,
        )

    def register_rule(self, name: str, message: str, predicate: Predicate) -> None:
        """Add or replace a validation rule."""
        self.registry.register(name, message, predicate)

    def register_handler(self, name: str, handler: Handler) -> None:
        """Add or replace a command handler."""
        self.bus.register_handler(name, handler)

    def execute(self, name: str, data: Any = None) -> CommandResult:
        return self.bus.execute(name, data)

    def field_changed(self, field: FormField) -> ValidationOutcome:
        return self.controller.field_changed(field)

    def form_submitted(self, selector: str) -> bool:
        return self.controller.form_submitted(selector)

    async def activate(self, trigger: Trigger) -> SubmissionResult:
        return await self.controller.activate(trigger)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.transport.close()

    async def __aenter__(self) -> "FormEngine":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
