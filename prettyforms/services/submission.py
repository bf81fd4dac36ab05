"""
Submission controller.

Collects and validates a container's fields, sends them, keeps the
trigger control locked while the request is in flight (with a failsafe
that always unlocks it) and executes the commands the server answers
with.
"""

import asyncio
import logging
from enum import Enum
from typing import Any

from prettyforms.adapters.base import PresentationAdapter
from prettyforms.clients.transport import FormTransport, TransportError
from prettyforms.config import Settings
from prettyforms.schemas.commands import SubmissionOutcome, SubmissionResult
from prettyforms.schemas.form_data import (
    FieldKind,
    FormField,
    SubmissionRequest,
    Trigger,
    ValidationOutcome,
)
from prettyforms.services.commands import VALIDATION_ERRORS, BuiltinHandlers, CommandBus
from prettyforms.services.validator import ElementValidator

logger = logging.getLogger(__name__)


class SubmissionState(str, Enum):
    """Per-control submission state."""

    IDLE = "idle"
    PENDING = "pending"


class SubmissionController:
    """
    Drives form submissions.

    Two entry paths end in the same pipeline:
    - ``form_submitted``: a native form submit, validated and then either
      blocked or let through
    - ``activate``: a trigger control, validated, sent and answered with
      commands
    """

    def __init__(
        self,
        page: PresentationAdapter,
        validator: ElementValidator,
        bus: CommandBus,
        handlers: BuiltinHandlers,
        transport: FormTransport,
        settings: Settings,
    ):
        self.page = page
        self.validator = validator
        self.bus = bus
        self.handlers = handlers
        self.transport = transport
        self.settings = settings
        self._states: dict[str, SubmissionState] = {}

    def state_of(self, trigger: Trigger) -> SubmissionState:
        return self._states.get(trigger.key, SubmissionState.IDLE)

    def field_changed(self, field: FormField) -> ValidationOutcome:
        """Validate a field after user input."""
        return self.validator.validate(field)

    def collect(self, container: str) -> dict[str, Any] | None:
        """
        Collect field values from a container, validating every field.

        Validation is not short-circuited: all fields render their result
        and the first invalid one gets focus.

        Returns:
            Mapping of field name to value (a list for ``[]`` names), or
            None if any field is invalid
        """
        values: dict[str, Any] = {}
        valid = True

        for form_field in self.page.fields_in(container):
            if not form_field.name or form_field.dont_send:
                continue

            if not self.validator.validate(form_field).valid:
                if valid:
                    self.page.focus(form_field)
                valid = False

            if form_field.is_array:
                values.setdefault(form_field.name, [])

            if form_field.kind is FieldKind.CHECKBOX and not form_field.checked:
                continue

            value = self.page.get_field_value(form_field)
            if form_field.is_array:
                values[form_field.name].append(value)
            else:
                values[form_field.name] = value

        if valid:
            return values
        return None

    def form_submitted(self, selector: str) -> bool:
        """
        Handle a native form submit.

        Returns:
            True to let the native submission proceed, False to block it
        """
        if self.collect(selector) is not None:
            return True

        self.handlers.banner = self.page.ensure_form_banner(selector)
        self.bus.execute(VALIDATION_ERRORS)
        return False

    async def activate(self, trigger: Trigger) -> SubmissionResult:
        """
        Handle activation of a trigger control.

        A disabled or pending control is ignored. A declined confirmation
        aborts without side effects. Without an input container an empty
        payload is sent as is.
        """
        if trigger.disabled or self.state_of(trigger) is SubmissionState.PENDING:
            logger.debug("Ignoring activation of busy control %s", trigger.key)
            return SubmissionResult(outcome=SubmissionOutcome.SKIPPED)

        url = trigger.resolve_url(self.page.current_url())

        if trigger.really:
            text = trigger.really_text or self.settings.confirm_message
            if not self.page.confirm(text):
                return SubmissionResult(outcome=SubmissionOutcome.DECLINED)

        container = trigger.input_container
        if not container:
            return await self.send(
                SubmissionRequest(
                    target_url=url, trigger=trigger, banner=self.handlers.banner
                )
            )

        banner = self.page.ensure_form_banner(container)
        self.page.clear_and_hide_banner(banner)
        self.handlers.banner = banner
        self.validator.clear_server_errors(self.page.fields_in(container))

        values = self.collect(container)
        if values is None:
            result = self.bus.execute(VALIDATION_ERRORS)
            return SubmissionResult(outcome=SubmissionOutcome.INVALID, results=[result])

        return await self.send(
            SubmissionRequest(
                target_url=url,
                field_values=values,
                trigger=trigger,
                clear_inputs=trigger.clear_inputs,
                container=container,
                banner=banner,
            )
        )

    async def send(self, request: SubmissionRequest) -> SubmissionResult:
        """
        Send collected values and execute the server's commands.

        Commands from the response are shown in the banner of the form
        that was submitted, even if another submission started meanwhile.
        The control is disabled for the duration of the request. A failsafe
        re-enables it after ``failsafe_seconds`` even if the request is still
        running; the request itself is never cancelled.
        """
        trigger = request.trigger
        if self.state_of(trigger) is SubmissionState.PENDING:
            return SubmissionResult(outcome=SubmissionOutcome.SKIPPED)

        self._lock(trigger)
        failsafe = asyncio.get_running_loop().call_later(
            self.settings.failsafe_seconds, self._failsafe, trigger
        )

        logger.info(
            f"Submitting {len(request.field_values)} field(s) to {request.target_url}"
        )
        failed = False
        try:
            commands = await self.transport.post_form(
                request.target_url, request.field_values
            )
        except TransportError as e:
            logger.warning("Submission to %s failed: %s", request.target_url, e)
            failed = True
        finally:
            failsafe.cancel()
            self._unlock(trigger)

        if failed:
            self._attach_banner(request)
            result = self.bus.execute(VALIDATION_ERRORS, self.settings.server_error_message)
            return SubmissionResult(
                outcome=SubmissionOutcome.TRANSPORT_ERROR, results=[result]
            )

        self._attach_banner(request)
        results = self.bus.execute_all(commands)

        cleared = False
        first_is_errors = bool(commands) and commands[0].type == VALIDATION_ERRORS
        if request.clear_inputs and request.container and not first_is_errors:
            self.clear_inputs(request.container)
            cleared = True

        return SubmissionResult(
            outcome=SubmissionOutcome.SENT,
            commands=commands,
            results=results,
            cleared=cleared,
        )

    def clear_inputs(self, container: str) -> None:
        """Empty every non-hidden field of a container."""
        for form_field in self.page.fields_in(container):
            if form_field.kind is not FieldKind.HIDDEN:
                self.page.clear_value(form_field)

    def _attach_banner(self, request: SubmissionRequest) -> None:
        if request.banner is not None:
            self.handlers.banner = request.banner

    def _lock(self, trigger: Trigger) -> None:
        self._states[trigger.key] = SubmissionState.PENDING
        self.page.set_control_enabled(trigger, False)

    def _unlock(self, trigger: Trigger) -> None:
        self._states[trigger.key] = SubmissionState.IDLE
        self.page.set_control_enabled(trigger, True)

    def _failsafe(self, trigger: Trigger) -> None:
        logger.warning(
            f"No response after {self.settings.failsafe_seconds}s, "
            f"re-enabling control {trigger.key}"
        )
        self._unlock(trigger)
