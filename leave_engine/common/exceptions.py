"""Engine exceptions and RFC 7807 Problem Detail error handlers."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

BASE_ERROR_URI = "https://leave.internal/errors"


# ── Exception hierarchy ─────────────────────────────────────────────

class AppException(Exception):
    """Base for all engine exceptions → RFC 7807 JSON."""

    def __init__(
        self,
        status_code: int,
        error_type: str,
        title: str,
        detail: str,
        errors: Optional[dict[str, Any]] = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.title = title
        self.detail = detail
        self.errors = errors
        super().__init__(detail)


class NotFoundException(AppException):
    """404 — entity not found."""

    def __init__(self, entity_type: str, entity_id: Any) -> None:
        super().__init__(
            status_code=404,
            error_type="not-found",
            title=f"{entity_type} Not Found",
            detail=f"{entity_type} with id '{entity_id}' does not exist.",
        )


class DateParseError(AppException):
    """422 — malformed or out-of-range date input."""

    def __init__(self, value: Any, reason: str = "is not a valid YYYY-MM-DD date") -> None:
        self.value = value
        super().__init__(
            status_code=422,
            error_type="date-parse-error",
            title="Invalid Date",
            detail=f"'{value}' {reason}.",
            errors={"date": [f"'{value}' {reason}."]},
        )


class InvalidRangeError(AppException):
    """422 — a range whose start falls after its end."""

    def __init__(self, start: Any, end: Any) -> None:
        self.start = start
        self.end = end
        super().__init__(
            status_code=422,
            error_type="invalid-range",
            title="Invalid Date Range",
            detail=f"Range start {start} is after range end {end}.",
            errors={"range": [f"{start} > {end}"]},
        )


class InvalidTransitionError(AppException):
    """409 — leave status change not permitted from the current state."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            status_code=409,
            error_type="invalid-transition",
            title="Invalid Status Transition",
            detail=f"A leave request cannot move from '{current}' to '{target}'.",
        )


class PolicyConfigurationError(AppException):
    """422 — malformed accrual rule table or carryover policy."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        super().__init__(
            status_code=422,
            error_type="policy-configuration",
            title="Invalid Leave Policy",
            detail="The company leave policy is malformed.",
            errors=errors,
        )


# ── RFC 7807 builder ────────────────────────────────────────────────

def _build_problem_detail(exc: AppException, request: Request) -> dict[str, Any]:
    body: dict[str, Any] = {
        "type": f"{BASE_ERROR_URI}/{exc.error_type}",
        "title": exc.title,
        "status": exc.status_code,
        "detail": exc.detail,
        "instance": str(request.url.path),
    }
    if exc.errors:
        body["errors"] = exc.errors
    return body


# ── FastAPI handlers ────────────────────────────────────────────────

async def _handle_app_exception(
    request: Request,
    exc: AppException,
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_build_problem_detail(exc, request),
        media_type="application/problem+json",
    )


# ── Registration helper (called by the host application) ────────────

def register_exception_handlers(app: FastAPI) -> None:
    """Attach the engine's exception handler to a host FastAPI app."""
    app.add_exception_handler(AppException, _handle_app_exception)  # type: ignore[arg-type]
