"""Normalisierte HTTP-Fehler fuer die Web-Schicht.

Jeder HttpError hat:
- status_code: HTTP-Status (400-599)
- message: Interne, vollstaendige Fehlermeldung
- payload: Was der Client sieht (statusCode, error, message, optional validation)
- is_developer_error: True wenn der Fehler im eigenen Code liegt (fuer Logging/Monitoring)
"""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus

from fastapi import HTTPException

INTERNAL_ERROR_MESSAGE = "An internal server error occurred"


@dataclass(frozen=True)
class ValidationItem:
    """Ein einzelnes Feldproblem einer Validierung."""
    field: str
    resource: str | None = None
    code: str | None = None

    def to_dict(self) -> dict:
        item = {}
        if self.resource:
            item["resource"] = self.resource
        item["field"] = self.field
        if self.code:
            item["code"] = self.code
        return item


def safe_str(value) -> str:
    """str(value), oder der Klassenname wenn __str__ selbst fehlschlaegt."""
    try:
        return str(value)
    except Exception:
        return type(value).__name__


def _coerce_status(status_code) -> int:
    """Nur 4xx/5xx sind gueltige Fehler-Status, alles andere wird 500."""
    if isinstance(status_code, bool) or not isinstance(status_code, int):
        return 500
    if status_code < 400 or status_code > 599:
        return 500
    return status_code


def _phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown"


class HttpError(HTTPException):
    """Normalisierter Fehler. Die Klasse selbst ist das Pass-Through-Merkmal."""

    def __init__(
        self,
        status_code: int = 500,
        message: str | None = None,
        *,
        data=None,
        is_developer_error: bool = False,
        validation: list[ValidationItem] | tuple[ValidationItem, ...] | None = None,
        headers: dict[str, str] | None = None,
    ):
        status_code = _coerce_status(status_code)
        error = _phrase(status_code)
        self.message = message or error
        super().__init__(status_code=status_code, detail=self.message, headers=headers)

        self.data = data
        self.is_developer_error = is_developer_error
        self.validation = tuple(validation or ())

        self.payload = {
            "statusCode": status_code,
            "error": error,
            "message": INTERNAL_ERROR_MESSAGE if status_code >= 500 else self.message,
        }
        if self.validation:
            self.payload["validation"] = [item.to_dict() for item in self.validation]

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"<HttpError {self.status_code} {self.message!r}>"

    @property
    def is_server(self) -> bool:
        return self.status_code >= 500

    def to_dict(self) -> dict:
        payload = dict(self.payload)
        if "validation" in payload:
            payload["validation"] = [dict(item) for item in payload["validation"]]
        return payload

    # ── Factories ────────────────────────────────────────────

    @classmethod
    def wrap(cls, error: BaseException, status_code: int, message: str | None = None) -> HttpError:
        """Wrap an existing exception, keeping it as `data`.

        The message is "<message>: <error>" when both are present and differ.
        """
        error_message = safe_str(error)
        if message and error_message and error_message != message:
            full_message = f"{message}: {error_message}"
        else:
            full_message = message or error_message or None
        http_error = cls(status_code, full_message, data=error)
        http_error.__cause__ = error
        return http_error

    @classmethod
    def bad_data(
        cls,
        message: str | None = None,
        validation: list[ValidationItem] | tuple[ValidationItem, ...] | None = None,
        data=None,
    ) -> HttpError:
        """422 - Semantisch ungueltige Daten."""
        return cls(422, message, data=data, validation=validation)

    @classmethod
    def bad_implementation(cls, message: str | None = None, data=None) -> HttpError:
        """500 - Fehler im eigenen Code (Developer Error)."""
        return cls(500, message, data=data, is_developer_error=True)
