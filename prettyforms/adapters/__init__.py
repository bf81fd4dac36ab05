"""
Presentation adapters: the engine's only view of the page.
"""

from prettyforms.adapters.base import PresentationAdapter
from prettyforms.adapters.extractors import ValueExtractors
from prettyforms.adapters.memory import MemoryPage

__all__ = ["PresentationAdapter", "ValueExtractors", "MemoryPage"]
