"""
Declarative markup contract.

Maps the HTML attributes a page puts on fields and trigger controls to
the engine's field and trigger models.
"""

from collections.abc import Mapping

from prettyforms.schemas.form_data import FieldKind, FormField, Trigger

# Field attributes
ATTR_NAME = "name"
ATTR_TYPE = "type"
ATTR_VALUE = "value"
ATTR_CHECKED = "checked"
ATTR_HIDDEN = "hidden"
ATTR_VALIDATION = "data-validation"
ATTR_DONTSEND = "data-dontsend"

# Trigger attributes
ATTR_ID = "id"
ATTR_CLASS = "class"
ATTR_HREF = "href"
ATTR_LINK = "data-link"
ATTR_INPUT = "data-input"
ATTR_REALLY_TEXT = "data-really-text"
ATTR_CLEAR_INPUTS = "data-clearinputs"
ATTR_DISABLED = "disabled"

# Trigger classes
CLASS_SENDDATA = "senddata"
CLASS_REALLY = "really"
CLASS_DISABLED = "disabled"

# Mapping from <input type="..."> to field kinds; other types are not collected
INPUT_TYPE_KINDS: dict[str, FieldKind] = {
    # Text-like
    "text": FieldKind.TEXT,
    "email": FieldKind.TEXT,
    "password": FieldKind.TEXT,
    "tel": FieldKind.TEXT,
    "url": FieldKind.TEXT,
    "number": FieldKind.TEXT,
    "search": FieldKind.TEXT,
    # Hidden
    "hidden": FieldKind.HIDDEN,
    # Choice
    "checkbox": FieldKind.CHECKBOX,
    "radio": FieldKind.RADIO,
}


def get_field_kind(
    tag: str, input_type: str | None = None, enhanced: bool = False
) -> FieldKind | None:
    """
    Get the field kind for a tag.

    Args:
        tag: Element tag name (``input``, ``select``, ``textarea``)
        input_type: Value of the ``type`` attribute for inputs
        enhanced: Whether a rich replacement widget backs the element

    Returns:
        Field kind, or None if the element is never collected
    """
    tag = tag.strip().lower()
    if tag == "select":
        return FieldKind.SELECT
    if tag == "textarea":
        return FieldKind.RICHTEXT if enhanced else FieldKind.TEXT
    if tag == "input":
        type_str = (input_type or "text").strip().lower()
        return INPUT_TYPE_KINDS.get(type_str)
    return None


def _classes(attrs: Mapping[str, str | None]) -> set[str]:
    return set((attrs.get(ATTR_CLASS) or "").split())


def field_from_attributes(
    tag: str, attrs: Mapping[str, str | None], enhanced: bool = False
) -> FormField | None:
    """
    Build a form field from an element's tag and attributes.

    Returns None for elements that are never collected (buttons, files).
    """
    kind = get_field_kind(tag, attrs.get(ATTR_TYPE), enhanced)
    if kind is None:
        return None

    return FormField(
        name=attrs.get(ATTR_NAME),
        kind=kind,
        value=attrs.get(ATTR_VALUE) or "",
        checked=ATTR_CHECKED in attrs,
        rules=attrs.get(ATTR_VALIDATION) or None,
        dont_send=attrs.get(ATTR_DONTSEND) == "true",
        visible=kind is not FieldKind.HIDDEN and ATTR_HIDDEN not in attrs,
        enhanced=enhanced,
    )


def is_trigger(attrs: Mapping[str, str | None]) -> bool:
    """Whether the element drives a submission when activated."""
    return CLASS_SENDDATA in _classes(attrs)


def trigger_from_attributes(attrs: Mapping[str, str | None]) -> Trigger:
    """Build a trigger control from an element's attributes."""
    classes = _classes(attrs)
    values = {
        "href": attrs.get(ATTR_HREF),
        "link": attrs.get(ATTR_LINK),
        "input_container": attrs.get(ATTR_INPUT) or None,
        "really": CLASS_REALLY in classes,
        "really_text": attrs.get(ATTR_REALLY_TEXT) or None,
        "clear_inputs": attrs.get(ATTR_CLEAR_INPUTS) == "true",
        "disabled": CLASS_DISABLED in classes or ATTR_DISABLED in attrs,
    }
    if attrs.get(ATTR_ID):
        values["key"] = attrs[ATTR_ID]
    return Trigger(**values)


def is_eligible(field: FormField) -> bool:
    """Whether a field takes part in collection; unchecked radios do not."""
    if field.kind is FieldKind.RADIO:
        return field.checked
    return True
