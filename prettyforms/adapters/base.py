"""
Presentation adapter interface.

The engine never touches page markup directly. Everything it needs from
the page (reading fields, rendering errors and banners, focus, control
state, confirmation prompts and navigation) goes through this interface.
"""

from abc import ABC, abstractmethod
from typing import Any

from prettyforms.adapters.extractors import ValueExtractors
from prettyforms.schemas.form_data import FormField, Trigger


class PresentationAdapter(ABC):
    """
    Page-side collaborator consumed by the engine.

    Handles returned by ``ensure_*`` methods are opaque to the engine and
    only passed back to the adapter.
    """

    def __init__(self, extractors: ValueExtractors | None = None):
        self.extractors = extractors or ValueExtractors()

    # Fields

    @abstractmethod
    def fields_in(self, selector: str) -> list[FormField]:
        """
        Eligible fields inside a container, in document order.

        Eligible means text-like inputs, hidden inputs, checkboxes, checked
        radios, selects and text areas.
        """

    @abstractmethod
    def find_field(self, name: str) -> FormField | None:
        """First field on the page with the given name."""

    @abstractmethod
    def read_value(self, field: FormField) -> Any:
        """Raw value of the underlying field."""

    def get_field_value(self, field: FormField) -> Any:
        """Current value, routed through a registered extractor if any."""
        extractor = self.extractors.get(field.kind)
        if extractor is not None:
            return extractor(field)
        return self.read_value(field)

    @abstractmethod
    def clear_value(self, field: FormField) -> None:
        """Reset the field to an empty value."""

    @abstractmethod
    def is_visible(self, field: FormField) -> bool: ...

    @abstractmethod
    def is_enhanced_widget(self, field: FormField) -> bool:
        """Whether a rich replacement widget stands in for the field."""

    @abstractmethod
    def focus(self, field: FormField) -> None: ...

    # Inline errors

    @abstractmethod
    def ensure_field_error_container(self, field: FormField) -> Any:
        """Find the field's error container, creating it beside the field."""

    @abstractmethod
    def show_field_invalid(self, handle: Any, html: str, server_error: bool) -> None: ...

    @abstractmethod
    def show_field_valid(self, handle: Any) -> None: ...

    # Form banner

    @abstractmethod
    def ensure_form_banner(self, selector: str) -> Any:
        """Find the container's error banner, creating it if absent."""

    @abstractmethod
    def show_banner(self, handle: Any, html: str) -> None: ...

    @abstractmethod
    def clear_and_hide_banner(self, handle: Any) -> None: ...

    # Controls and navigation

    @abstractmethod
    def set_control_enabled(self, trigger: Trigger, enabled: bool) -> None: ...

    @abstractmethod
    def confirm(self, text: str) -> bool:
        """Blocking confirmation prompt; True when the user accepts."""

    @abstractmethod
    def navigate(self, url: str) -> None: ...

    @abstractmethod
    def current_url(self) -> str: ...
