"""
Validation rule registry.

Holds named, parameterized predicates together with their error message
templates. A predicate returns True when the value is valid.
"""

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from prettyforms.config import PLACEHOLDER
from prettyforms.schemas.form_data import FormField

if TYPE_CHECKING:
    from prettyforms.adapters.base import PresentationAdapter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleContext:
    """What a predicate may look at besides the value itself."""

    field: FormField
    page: "PresentationAdapter"
    password_field: str = "password"


Predicate = Callable[[RuleContext, Any, str | None], bool]


@dataclass(frozen=True)
class ValidationRule:
    """A named predicate plus its error message template."""

    name: str
    message: str
    predicate: Predicate

    def format_message(self, param: str | None) -> str:
        return self.message.replace(PLACEHOLDER, param or "", 1)


DEFAULT_MESSAGES: dict[str, str] = {
    "notempty": "This field cannot be empty.",
    "minlength": "At least {%} characters.",
    "maxlength": "No more than {%} characters.",
    "hasdomain": "The address must start with a valid domain ({%}).",
    "isnumeric": "This field may contain digits only.",
    "isemail": "A valid e-mail address is required.",
    "isurl": "A valid website URL is required.",
    "isdate": "This field must contain a date.",
    "isphone": "Invalid phone number format.",
    "minint": "The minimum allowed number is {%}.",
    "maxint": "The maximum allowed number is {%}.",
    "intonly": "Only a number can be entered.",
    "passretry": "Must match the password field.",
}

_DIGITS_RE = re.compile(r"[0-9]+")
_EMAIL_RE = re.compile(r".+@.+\..{2,9}")
_URL_RE = re.compile(r"(http|ftp|https)://.+\..{2,9}")
_DATE_RE = re.compile(r"([0-9]{1,2})(\.|/)([0-9]{1,2})(\.|/)([0-9]{4})")
_PHONE_RE = re.compile(r"((8|\+7)?[\- ]?)?(\(?\d{3}\)?[\- ]?)?[\d\- ]{7,10}", re.ASCII)
_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


def serialize_value(value: Any) -> str:
    """Text form of a field value as the rules see it."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return str(value)


def parse_leading_int(text: Any) -> int | None:
    """Parse the leading integer of ``text``; ``None`` when there is none."""
    if text is None:
        return None
    match = _LEADING_INT_RE.match(str(text))
    if match is None:
        return None
    return int(match.group(1))


def _is_empty(value: Any) -> bool:
    return serialize_value(value) == ""


def notempty(context: RuleContext, value: Any, param: str | None = None) -> bool:
    if value is None:
        return True
    return len(serialize_value(value)) != 0


def minlength(context: RuleContext, value: Any, param: str | None = None) -> bool:
    bound = parse_leading_int(param)
    if bound is None:
        return False
    return len(serialize_value(value)) >= bound


def maxlength(context: RuleContext, value: Any, param: str | None = None) -> bool:
    bound = parse_leading_int(param)
    if bound is None:
        return False
    return len(serialize_value(value)) <= bound


def hasdomain(context: RuleContext, value: Any, param: str | None = None) -> bool:
    """Passes when the value contains any of the comma-separated domains."""
    if _is_empty(value):
        return True
    text = serialize_value(value)
    domains = [d.strip() for d in (param or "").split(",")]
    return any(domain in text for domain in domains if domain)


def isnumeric(context: RuleContext, value: Any, param: str | None = None) -> bool:
    if _is_empty(value):
        return True
    return _DIGITS_RE.fullmatch(serialize_value(value)) is not None


def isemail(context: RuleContext, value: Any, param: str | None = None) -> bool:
    if _is_empty(value):
        return True
    return _EMAIL_RE.fullmatch(serialize_value(value)) is not None


def isurl(context: RuleContext, value: Any, param: str | None = None) -> bool:
    if _is_empty(value):
        return True
    return _URL_RE.match(serialize_value(value)) is not None


def isdate(context: RuleContext, value: Any, param: str | None = None) -> bool:
    """
    Loose date check.

    Only day <= 31, month <= 12 and year < 2500 are enforced, so
    ``31.02.2020`` passes.
    """
    if _is_empty(value):
        return True
    match = _DATE_RE.fullmatch(serialize_value(value))
    if match is None:
        return False
    day, month, year = int(match.group(1)), int(match.group(3)), int(match.group(5))
    return day <= 31 and month <= 12 and year < 2500


def isphone(context: RuleContext, value: Any, param: str | None = None) -> bool:
    if _is_empty(value):
        return True
    return _PHONE_RE.fullmatch(serialize_value(value)) is not None


def minint(context: RuleContext, value: Any, param: str | None = None) -> bool:
    if _is_empty(value):
        return True
    number, bound = parse_leading_int(serialize_value(value)), parse_leading_int(param)
    if number is None or bound is None:
        return False
    return number >= bound


def maxint(context: RuleContext, value: Any, param: str | None = None) -> bool:
    if _is_empty(value):
        return True
    number, bound = parse_leading_int(serialize_value(value)), parse_leading_int(param)
    if number is None or bound is None:
        return False
    return number <= bound


def passretry(context: RuleContext, value: Any, param: str | None = None) -> bool:
    """Cross-field equality with the reference field (``password`` by default)."""
    reference = context.page.find_field(param or context.password_field)
    if reference is None:
        return False
    return value == context.page.get_field_value(reference)


BUILTIN_RULES: dict[str, Predicate] = {
    "notempty": notempty,
    "minlength": minlength,
    "maxlength": maxlength,
    "hasdomain": hasdomain,
    "isnumeric": isnumeric,
    "isemail": isemail,
    "isurl": isurl,
    "isdate": isdate,
    "isphone": isphone,
    "minint": minint,
    "maxint": maxint,
    "intonly": isnumeric,
    "passretry": passretry,
}


class RuleRegistry:
    """
    Registry of named validation rules.

    Names are unique; registering an existing name replaces the rule.
    """

    def __init__(self):
        self._rules: dict[str, ValidationRule] = {}

    def register(self, name: str, message: str, predicate: Predicate) -> ValidationRule:
        """Store or overwrite a rule."""
        if name in self._rules:
            logger.debug("Overriding validation rule %s", name)
        rule = ValidationRule(name=name, message=message, predicate=predicate)
        self._rules[name] = rule
        return rule

    def lookup(self, name: str) -> ValidationRule | None:
        return self._rules.get(name)

    def names(self) -> list[str]:
        return list(self._rules)

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)


def default_registry(messages: dict[str, str] | None = None) -> RuleRegistry:
    """
    Build a registry holding the built-in rules.

    Args:
        messages: Message templates overriding the defaults by rule name

    Returns:
        A new, independent registry
    """
    overrides = messages or {}
    registry = RuleRegistry()
    for name, predicate in BUILTIN_RULES.items():
        registry.register(name, overrides.get(name, DEFAULT_MESSAGES[name]), predicate)
    return registry
