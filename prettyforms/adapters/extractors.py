"""
Pluggable value extraction keyed by field kind.

Rich input widgets (rich-text editors, enhanced selects) keep their real
value outside the underlying field; an extractor registered for the
field's kind reads it from the widget instead.
"""

import logging
from typing import Any, Callable

from prettyforms.schemas.form_data import FieldKind, FormField

logger = logging.getLogger(__name__)

Extractor = Callable[[FormField], Any]


class ValueExtractors:
    """Registry of value extractors by field kind."""

    def __init__(self, extractors: dict[FieldKind, Extractor] | None = None):
        self._extractors: dict[FieldKind, Extractor] = dict(extractors or {})

    def register(self, kind: FieldKind, extractor: Extractor) -> None:
        if kind in self._extractors:
            logger.debug(f"Replacing value extractor for {kind.value} fields")
        self._extractors[kind] = extractor

    def get(self, kind: FieldKind) -> Extractor | None:
        return self._extractors.get(kind)

    def __contains__(self, kind: object) -> bool:
        return kind in self._extractors
