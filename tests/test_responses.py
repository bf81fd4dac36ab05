"""
Tests for the server-side response helpers.
"""

import json

from prettyforms.responses import (
    command_response,
    nothing_response,
    redirect_response,
    validation_errors_response,
)
from prettyforms.schemas.commands import Command, CommandList, FieldErrors


def body(response) -> list:
    return json.loads(response.body)


class TestResponses:
    """Tests for command response builders."""

    def test_command_response_keeps_order(self):
        response = command_response(
            Command(type="first", data=1), Command(type="second", data={"x": 2})
        )

        assert response.status_code == 200
        assert response.media_type == "application/json"
        assert body(response) == [
            {"type": "first", "data": 1},
            {"type": "second", "data": {"x": 2}},
        ]

    def test_validation_errors_from_dict(self):
        response = validation_errors_response({"email": ["Taken."], "login": ["Short.", "Bad."]})

        assert body(response) == [{
            "type": "validation_errors",
            "data": [
                {"field": "email", "errors": ["Taken."]},
                {"field": "login", "errors": ["Short.", "Bad."]},
            ],
        }]

    def test_validation_errors_from_items(self):
        response = validation_errors_response([FieldErrors(field="a", errors=["x"])])

        assert body(response)[0]["data"] == [{"field": "a", "errors": ["x"]}]

    def test_redirect(self):
        assert body(redirect_response("/next")) == [{"type": "redirect", "data": "/next"}]
        assert body(redirect_response()) == [{"type": "redirect", "data": None}]

    def test_nothing(self):
        assert body(nothing_response()) == [{"type": "nothing", "data": None}]

    def test_bodies_parse_as_commands(self):
        commands = CommandList.validate_json(validation_errors_response({"a": ["x"]}).body)

        assert commands[0].type == "validation_errors"
