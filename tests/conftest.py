"""
Shared fixtures for the PrettyForms tests.
"""

import asyncio
from urllib.parse import parse_qsl

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from prettyforms.adapters.memory import MemoryPage
from prettyforms.clients.transport import FormTransport
from prettyforms.config import Settings
from prettyforms.engine import FormEngine
from prettyforms.responses import (
    command_response,
    nothing_response,
    redirect_response,
    validation_errors_response,
)
from prettyforms.schemas.commands import Command
from prettyforms.services.rules import default_registry
from prettyforms.services.validator import ElementValidator

BASE_URL = "http://testserver"


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment, with a short failsafe."""
    return Settings(_env_file=None, failsafe_seconds=0.05)


@pytest.fixture
def page() -> MemoryPage:
    return MemoryPage(url=f"{BASE_URL}/current")


@pytest.fixture
def validator(page, settings) -> ElementValidator:
    return ElementValidator(default_registry(), page, settings)


class RecordingServer:
    """Records submitted form bodies and answers from a queue of responses."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []

    def reply(self, commands: list[dict], status_code: int = 200) -> None:
        self.responses.append(httpx.Response(status_code, json=commands))

    def form(self, index: int = -1) -> list[tuple[str, str]]:
        return parse_qsl(self.requests[index].content.decode(), keep_blank_values=True)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responses:
            return self.responses.pop(0)
        return httpx.Response(200, json=[{"type": "nothing"}])


@pytest.fixture
def server() -> RecordingServer:
    return RecordingServer()


@pytest.fixture
def engine(page, settings, server) -> FormEngine:
    """Engine wired to the recording server."""
    transport = FormTransport(transport=httpx.MockTransport(server))
    return FormEngine(page, settings=settings, transport=transport)


def create_test_app() -> FastAPI:
    """A small application answering in the command protocol."""
    app = FastAPI()

    @app.post("/ok")
    async def ok():
        return nothing_response()

    @app.post("/errors")
    async def errors():
        return validation_errors_response({"email": ["This address is already taken."]})

    @app.post("/redirect")
    async def redirect():
        return redirect_response(f"{BASE_URL}/done")

    @app.post("/echo")
    async def echo(request: Request):
        body = (await request.body()).decode()
        return command_response(Command(type="echo", data=parse_qsl(body, keep_blank_values=True)))

    @app.post("/slow")
    async def slow():
        await asyncio.sleep(0.2)
        return nothing_response()

    @app.post("/boom")
    async def boom():
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    @app.post("/garbage")
    async def garbage():
        return PlainTextResponse("definitely not json")

    @app.post("/object")
    async def object_body():
        return JSONResponse(content={"type": "nothing"})

    return app


@pytest_asyncio.fixture
async def app_engine(page, settings):
    """Engine talking to the FastAPI test application over ASGI."""
    transport = FormTransport(transport=httpx.ASGITransport(app=create_test_app()))
    async with FormEngine(page, settings=settings, transport=transport) as form_engine:
        yield form_engine
