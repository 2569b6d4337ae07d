"""Error mapping tests — engine exceptions rendered as RFC 7807 responses,
plus the shared logging setup.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from leave_engine.common.dates import day_span, parse_date
from leave_engine.common.exceptions import (
    BASE_ERROR_URI,
    InvalidTransitionError,
    NotFoundException,
    PolicyConfigurationError,
    register_exception_handlers,
)
from leave_engine.common.logging_config import LOG_FORMAT, configure_logging


# ── Host app wired with the engine's handlers ───────────────────────

@pytest.fixture
def app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/parse/{value}")
    async def _parse(value: str):
        return {"date": parse_date(value).isoformat()}

    @app.get("/span")
    async def _span():
        return {"days": len(day_span("2024-03-10", "2024-03-01"))}

    @app.get("/users/{user_id}")
    async def _user(user_id: str):
        raise NotFoundException("User", user_id)

    @app.get("/transition")
    async def _transition():
        raise InvalidTransitionError("approved", "pending")

    @app.get("/policy")
    async def _policy():
        raise PolicyConfigurationError({"tenure_accrual_rules": ["tier years must be >= 1"]})

    return app


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ═════════════════════════════════════════════════════════════════════
# Problem Detail responses
# ═════════════════════════════════════════════════════════════════════


class TestProblemDetail:

    async def test_valid_date_passes_through(self, client: AsyncClient):
        resp = await client.get("/parse/2024-02-29")
        assert resp.status_code == 200
        assert resp.json() == {"date": "2024-02-29"}

    async def test_date_parse_error(self, client: AsyncClient):
        resp = await client.get("/parse/2023-02-29")
        assert resp.status_code == 422
        assert resp.headers["content-type"].startswith("application/problem+json")
        body = resp.json()
        assert body["type"] == f"{BASE_ERROR_URI}/date-parse-error"
        assert body["status"] == 422
        assert body["instance"] == "/parse/2023-02-29"
        assert "date" in body["errors"]

    async def test_invalid_range(self, client: AsyncClient):
        resp = await client.get("/span")
        assert resp.status_code == 422
        assert resp.json()["type"].endswith("/invalid-range")

    async def test_not_found(self, client: AsyncClient):
        resp = await client.get("/users/abc")
        assert resp.status_code == 404
        body = resp.json()
        assert body["title"] == "User Not Found"
        assert "errors" not in body

    async def test_invalid_transition(self, client: AsyncClient):
        resp = await client.get("/transition")
        assert resp.status_code == 409
        assert resp.json()["type"].endswith("/invalid-transition")

    async def test_policy_configuration(self, client: AsyncClient):
        resp = await client.get("/policy")
        assert resp.status_code == 422
        assert resp.json()["errors"] == {"tenure_accrual_rules": ["tier years must be >= 1"]}


# ═════════════════════════════════════════════════════════════════════
# Logging setup
# ═════════════════════════════════════════════════════════════════════


class TestConfigureLogging:

    def test_explicit_level(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))

        configure_logging("debug")

        assert calls[0]["level"] == "DEBUG"
        assert calls[0]["format"] == LOG_FORMAT

    def test_level_from_settings(self, monkeypatch):
        from leave_engine.config import settings

        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        monkeypatch.setattr(settings, "LOG_LEVEL", "warning")

        configure_logging()

        assert calls[0]["level"] == "WARNING"
