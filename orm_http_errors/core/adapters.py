"""Adapter: SQLAlchemy- und pydantic-Exceptions → ORM-Fehler.

Laeuft an der Grenze, bevor der Translator klassifiziert. Unbekannte
Exceptions werden unveraendert zurueckgegeben.
"""

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import (
    ArgumentError,
    CompileError,
    IntegrityError,
    InvalidRequestError,
    MultipleResultsFound,
    NoResultFound,
    OperationalError,
    SQLAlchemyError,
)

from orm_http_errors.core.orm_errors import OrmError, OrmUsageError, OrmValidationError

# Request-Sektionen, die nicht Teil des Feldnamens sind
REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def _integrity_error(exc: IntegrityError) -> OrmError:
    detail_msg = str(exc.orig) if exc.orig else str(exc)
    lowered = detail_msg.lower()

    # Unique-Constraint-Verletzung erkennen
    if "unique" in lowered or "duplicate" in lowered:
        return OrmError(
            reason="A record with this identifier already exists.",
            status=409,
            code="E_UNIQUE",
            original_error=exc,
        )

    # FK-Constraint
    if "foreign key" in lowered:
        return OrmError(
            reason="Referenced record does not exist.",
            status=422,
            code="E_FOREIGN_KEY",
            original_error=exc,
        )

    # Check-Constraint (Enum, Email, etc.)
    if "check" in lowered:
        return OrmError(
            reason="Data violates a check constraint.",
            status=422,
            code="E_CHECK",
            original_error=exc,
        )

    return OrmError(
        reason="Database constraint violation.",
        status=409,
        code="E_CONSTRAINT",
        original_error=exc,
    )


def from_sqlalchemy(exc: SQLAlchemyError) -> OrmError:
    """Mappt eine SQLAlchemy-Exception auf die ORM-Fehlerarten."""
    # NoResultFound/MultipleResultsFound sind InvalidRequestError-Subklassen
    if isinstance(exc, NoResultFound):
        return OrmError(reason="Record not found.", status=404, code="E_NOT_FOUND", original_error=exc)
    if isinstance(exc, MultipleResultsFound):
        return OrmUsageError(reason=f"Expected a single record: {exc}", original_error=exc)
    if isinstance(exc, IntegrityError):
        return _integrity_error(exc)
    if isinstance(exc, OperationalError):
        return OrmError(
            reason="Database is unavailable.",
            status=503,
            code="E_UNAVAILABLE",
            original_error=exc,
        )
    if isinstance(exc, (ArgumentError, InvalidRequestError, CompileError)):
        return OrmUsageError(reason=str(exc) or None, original_error=exc)
    return OrmError(original_error=exc)


def _field_name(loc: tuple) -> str:
    parts = list(loc)
    if parts and parts[0] in REQUEST_LOCATIONS:
        parts = parts[1:]
    return ".".join(str(p) for p in parts) or "__root__"


def from_pydantic(exc: PydanticValidationError | RequestValidationError) -> OrmValidationError:
    """Pydantic-Fehlerliste → invalid_attributes {feld: [{rule, message}]}."""
    invalid_attributes: dict[str, list[dict]] = {}
    for err in exc.errors():
        field = _field_name(tuple(err.get("loc", ())))
        invalid_attributes.setdefault(field, []).append({
            "rule": err.get("type"),
            "message": err.get("msg"),
        })
    return OrmValidationError(invalid_attributes=invalid_attributes, original_error=exc)


def to_orm_error(exc):
    """Bekannte Fremd-Exceptions in ORM-Fehler umwandeln, Rest unveraendert."""
    if isinstance(exc, SQLAlchemyError):
        return from_sqlalchemy(exc)
    if isinstance(exc, (PydanticValidationError, RequestValidationError)):
        return from_pydantic(exc)
    return exc
