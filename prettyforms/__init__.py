"""
PrettyForms

Form validation, submission and server command handling for web pages.
Fields declare their rules in markup; the engine validates them, posts
the collected values and executes the commands the server answers with.

Architecture:
- Rule registry: named, parameterized validation predicates
- Element validator: per-field rule evaluation without short-circuiting
- Command bus: fail-isolated dispatch of server commands
- Submission controller: collection, locking, failsafe and response handling
- Presentation adapter: the engine's only view of the page
"""

from prettyforms.engine import FormEngine

__version__ = "1.0.0"

__all__ = ["FormEngine", "__version__"]
