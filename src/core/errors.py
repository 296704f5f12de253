from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

NO_DATA_HINTS = [
    'Make sure every sheet is shared as "Anyone with the link can view"',
    "Check that the configured sheet ids and gids are correct",
    "Configure SALES_PROXY_URL_TEMPLATE if the sheets are only reachable through a proxy",
]


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


class AppError(Exception):
    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details


class SourceFetchFailure(Exception):
    """Every endpoint of one source failed. Recorded per source, never fatal on its own."""

    def __init__(self, label: str, reasons: List[str]) -> None:
        self.label = label
        self.reasons = list(reasons)
        super().__init__(f"{label}: " + "; ".join(self.reasons))


class NoDataAvailableError(AppError):
    def __init__(self, failures: Dict[str, str]) -> None:
        lines = ["No data could be fetched from any configured sales source."]
        if failures:
            lines.append("Errors:")
            lines.extend(f"- {label}: {reason}" for label, reason in failures.items())
        lines.append("Please ensure:")
        lines.extend(f"{index}. {hint}" for index, hint in enumerate(NO_DATA_HINTS, start=1))
        super().__init__(
            code="no_data_available",
            message="\n".join(lines),
            status_code=503,
            details={"failures": dict(failures), "hints": list(NO_DATA_HINTS)},
        )
        self.failures = dict(failures)


class EmptyResultError(AppError):
    def __init__(self, message: str = "No sales rows survived validation", details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(code="empty_result", message=message, status_code=503, details=details)


class ErrorEnvelope(BaseModel):
    error: ErrorDetail


def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    envelope = ErrorEnvelope(error=ErrorDetail(code=exc.code, message=exc.message, details=exc.details))
    return JSONResponse(status_code=exc.status_code, content=envelope.model_dump())


def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    envelope = ErrorEnvelope(
        error=ErrorDetail(
            code="validation_error",
            message="Validation error",
            details={"errors": exc.errors()},
        )
    )
    return JSONResponse(status_code=422, content=envelope.model_dump())
