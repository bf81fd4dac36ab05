"""
Server-side helpers for answering submissions.

Build FastAPI responses whose body is the JSON array of commands the
engine executes, e.g.::

    @router.post("/profile")
    async def save_profile(...):
        if errors:
            return validation_errors_response({"email": ["Already taken."]})
        return redirect_response("/profile/done")
"""

from typing import Any

from fastapi.responses import JSONResponse

from prettyforms.schemas.commands import Command, FieldErrors
from prettyforms.services.commands import NOTHING, REDIRECT, VALIDATION_ERRORS


def command_response(*commands: Command, status_code: int = 200) -> JSONResponse:
    """Serialize commands into a response, preserving their order."""
    return JSONResponse(
        status_code=status_code,
        content=[command.model_dump() for command in commands],
    )


def validation_errors_response(
    errors: dict[str, list[str]] | list[FieldErrors],
) -> JSONResponse:
    """
    Answer with field-level validation errors.

    Args:
        errors: Messages keyed by field name, or ready-made items
    """
    if isinstance(errors, dict):
        items = [FieldErrors(field=name, errors=list(msgs)) for name, msgs in errors.items()]
    else:
        items = list(errors)
    data: list[dict[str, Any]] = [item.model_dump() for item in items]
    return command_response(Command(type=VALIDATION_ERRORS, data=data))


def redirect_response(link: str | None = None) -> JSONResponse:
    """Answer with a redirect; no link means reload the current page."""
    return command_response(Command(type=REDIRECT, data=link))


def nothing_response() -> JSONResponse:
    """Acknowledge without any client-side effect."""
    return command_response(Command(type=NOTHING))
