"""ORM-Fehlerhierarchie, wie sie der Translator konsumiert.

- OrmError: allgemeiner Fehler mit status + reason
- OrmValidationError: Attribut-Verletzungen (invalid_attributes)
- OrmUsageError: Falsche Benutzung der ORM-API (Developer-Fehler)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence


class OrmError(Exception):
    """Basis-Exception fuer alle ORM-Fehler."""
    status: int = 500
    code: str = "E_UNKNOWN"
    reason: str = "Encountered an unexpected error"

    def __init__(
        self,
        reason: str | None = None,
        status: int | None = None,
        code: str | None = None,
        original_error: BaseException | None = None,
    ):
        if reason is not None:
            self.reason = reason
        if status is not None:
            self.status = status
        if code is not None:
            self.code = code
        self.original_error = original_error
        super().__init__(self.reason)

    def __str__(self) -> str:
        return str(self.reason)

    def to_dict(self) -> dict:
        return {
            "error": self.code,
            "status": self.status,
            "summary": self.reason,
            "raw": repr(self.original_error) if self.original_error else None,
        }


class OrmValidationError(OrmError):
    """Ein oder mehrere Attribute verletzen ihre Regeln."""
    status = 400
    code = "E_VALIDATION"

    def __init__(
        self,
        invalid_attributes: Mapping[str, Sequence] | None = None,
        reason: str | None = None,
        **kwargs,
    ):
        self.invalid_attributes = invalid_attributes
        if reason is None:
            count = len(invalid_attributes) if invalid_attributes else 0
            reason = f"{count} attribute{'s' if count != 1 else ''} {'are' if count != 1 else 'is'} invalid"
        super().__init__(reason=reason, **kwargs)

    def to_dict(self) -> dict:
        result = super().to_dict()
        result["invalidAttributes"] = dict(self.invalid_attributes or {})
        return result


class OrmUsageError(OrmError):
    """Die ORM-API wurde falsch aufgerufen."""
    status = 0
    code = "E_USAGE"
    reason = "Invalid usage"
