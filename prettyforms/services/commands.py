"""
Command bus for server-issued commands.

Handlers are registered by name. Dispatch is fail-isolated: a handler
that raises is logged and recorded in its result, and the remaining
commands of the batch still run.
"""

import logging
from typing import Any, Callable

from prettyforms.adapters.base import PresentationAdapter
from prettyforms.config import Settings
from prettyforms.schemas.commands import Command, CommandResult, FieldErrorsList
from prettyforms.services.validator import ElementValidator

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Any]

VALIDATION_ERRORS = "validation_errors"
REDIRECT = "redirect"
NOTHING = "nothing"


class CommandBus:
    """Name-keyed registry of command handlers."""

    def __init__(self):
        self.handlers: dict[str, Handler] = {}

    def register_handler(self, name: str, handler: Handler) -> None:
        """
        Register a handler, replacing any previous one for ``name``.

        Handlers take one argument, the command data, which is None when
        the command carries none.
        """
        self.handlers[name] = handler

    def execute(self, name: str, data: Any = None) -> CommandResult:
        """
        Execute one command.

        Unknown commands are ignored. Handler errors are caught, logged and
        returned in the result, never raised.
        """
        handler = self.handlers.get(name)
        if handler is None:
            logger.debug("No handler registered for command %s", name)
            return CommandResult(type=name, handled=False)

        try:
            handler(data)
        except Exception as e:
            logger.exception("Error in handling command %s", name)
            return CommandResult(type=name, handled=True, error=e)

        return CommandResult(type=name, handled=True)

    def execute_all(self, commands: list[Command]) -> list[CommandResult]:
        """Execute commands strictly in order, isolating each one."""
        return [self.execute(command.type, command.data) for command in commands]


class BuiltinHandlers:
    """
    The standard command set: ``validation_errors``, ``redirect`` and
    ``nothing``.

    ``banner`` is the error banner of the form currently being submitted;
    the submission controller points it at the right container before
    commands run.
    """

    def __init__(
        self,
        page: PresentationAdapter,
        validator: ElementValidator,
        settings: Settings,
    ):
        self.page = page
        self.validator = validator
        self.settings = settings
        self.banner: Any = None

    def register(self, bus: CommandBus) -> None:
        bus.register_handler(VALIDATION_ERRORS, self.validation_errors)
        bus.register_handler(REDIRECT, self.redirect)
        bus.register_handler(NOTHING, self.nothing)

    def validation_errors(self, data: Any = None) -> None:
        """
        Show validation errors.

        ``data`` may be omitted (local validation already rendered the
        fields), a list of ``{field, errors}`` items from the server, or a
        single message string.
        """
        if isinstance(data, str):
            html = self.settings.render_message(data)
        else:
            html = self.settings.fix_and_retry_message
            if data is not None:
                html += self._render_field_errors(data)

        if self.banner is None:
            logger.warning("No error banner attached, validation errors shown inline only")
            return
        self.page.show_banner(self.banner, html)

    def _render_field_errors(self, data: Any) -> str:
        items = FieldErrorsList.validate_python(data)
        html = ""
        focused = False
        for item in items:
            form_field = self.page.find_field(item.field)
            if form_field is None:
                logger.debug(f"Server reported errors for unknown field {item.field}")
                continue

            html += self.validator.mark_server_error(form_field, item.errors)
            if not focused:
                self.page.focus(form_field)
                focused = True
        return html

    def redirect(self, link: str | None = None) -> None:
        """Navigate to ``link``, or reload the current page."""
        target = link if link is not None else self.page.current_url()
        logger.info(f"Redirecting to {target}")
        self.page.navigate(target)

    def nothing(self, data: Any = None) -> None:
        """Explicit acknowledgment, nothing to do."""
