"""
In-memory presentation adapter.

Keeps containers of fields plus everything the engine renders (inline
error containers, banners, focus, navigation) as plain Python state.
Useful for driving forms headlessly and for tests.
"""

import logging
from dataclasses import dataclass, field as dc_field
from typing import Any, Callable

from prettyforms.adapters.base import PresentationAdapter
from prettyforms.adapters.extractors import ValueExtractors
from prettyforms.schemas.form_data import FormField, Trigger
from prettyforms.utils.markup import is_eligible

logger = logging.getLogger(__name__)


@dataclass
class ErrorContainer:
    """Inline error block rendered beside a field."""

    field_name: str
    html: str = ""
    visible: bool = False
    server_error: bool = False
    checked: bool = False


@dataclass
class Banner:
    """Form-level error banner."""

    selector: str
    html: str = ""
    visible: bool = False


@dataclass
class ControlState:
    enabled: bool = True
    changes: list[bool] = dc_field(default_factory=list)


class MemoryPage(PresentationAdapter):
    """
    Presentation adapter backed by in-memory state.

    Args:
        url: Current page URL
        extractors: Value extractors by field kind
        confirm: Answer for confirmation prompts, or a callable taking the
            prompt text
    """

    def __init__(
        self,
        url: str = "http://localhost/",
        extractors: ValueExtractors | None = None,
        confirm: bool | Callable[[str], bool] = True,
    ):
        super().__init__(extractors)
        self.url = url
        self.containers: dict[str, list[FormField]] = {}
        self.error_containers: dict[str, ErrorContainer] = {}
        self.banners: dict[str, Banner] = {}
        self.controls: dict[str, ControlState] = {}
        self.focused: FormField | None = None
        self.prompts: list[str] = []
        self.navigations: list[str] = []
        self._confirm = confirm

    def add_container(self, selector: str, fields: list[FormField]) -> list[FormField]:
        """Register a container (form or any element holding fields)."""
        self.containers[selector] = list(fields)
        return self.containers[selector]

    # Fields

    def fields_in(self, selector: str) -> list[FormField]:
        return [f for f in self.containers.get(selector, []) if is_eligible(f)]

    def find_field(self, name: str) -> FormField | None:
        for fields in self.containers.values():
            for form_field in fields:
                if form_field.name == name:
                    return form_field
        return None

    def read_value(self, field: FormField) -> Any:
        return field.value

    def clear_value(self, field: FormField) -> None:
        field.value = ""

    def is_visible(self, field: FormField) -> bool:
        return field.visible

    def is_enhanced_widget(self, field: FormField) -> bool:
        return field.enhanced

    def focus(self, field: FormField) -> None:
        self.focused = field

    # Inline errors

    def ensure_field_error_container(self, field: FormField) -> ErrorContainer:
        name = field.name or ""
        if name not in self.error_containers:
            self.error_containers[name] = ErrorContainer(field_name=name)
        return self.error_containers[name]

    def show_field_invalid(self, handle: ErrorContainer, html: str, server_error: bool) -> None:
        handle.html = html
        handle.visible = True
        handle.server_error = server_error
        handle.checked = False

    def show_field_valid(self, handle: ErrorContainer) -> None:
        handle.visible = False
        handle.server_error = False
        handle.checked = True

    def error_html(self, name: str) -> str | None:
        """Rendered inline errors of a field, None when hidden or absent."""
        container = self.error_containers.get(name)
        if container is None or not container.visible:
            return None
        return container.html

    # Form banner

    def ensure_form_banner(self, selector: str) -> Banner:
        if selector not in self.banners:
            self.banners[selector] = Banner(selector=selector)
        return self.banners[selector]

    def show_banner(self, handle: Banner, html: str) -> None:
        handle.html = html
        handle.visible = True

    def clear_and_hide_banner(self, handle: Banner) -> None:
        handle.html = ""
        handle.visible = False

    # Controls and navigation

    def set_control_enabled(self, trigger: Trigger, enabled: bool) -> None:
        trigger.disabled = not enabled
        state = self.controls.setdefault(trigger.key, ControlState())
        state.enabled = enabled
        state.changes.append(enabled)

    def confirm(self, text: str) -> bool:
        self.prompts.append(text)
        if callable(self._confirm):
            return bool(self._confirm(text))
        return self._confirm

    def navigate(self, url: str) -> None:
        logger.debug("Navigating to %s", url)
        self.navigations.append(url)
        self.url = url

    def current_url(self) -> str:
        return self.url
