"""
HTTP clients used by the engine.
"""

from prettyforms.clients.transport import FormTransport, TransportError

__all__ = ["FormTransport", "TransportError"]
