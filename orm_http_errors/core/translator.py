"""ORM-Fehler → normalisierter HttpError.

Klassifiziert einen Fehler genau einmal (classify) und baut daraus:
- Pass-Through fuer bereits normalisierte Fehler
- Wrap von OrmError mit Original-Status und Reason
- 422 mit Feld-Liste fuer OrmValidationError
- 500 (Developer-Fehler) fuer alles andere, auch fuer Nicht-Exceptions

translate() wirft nie.
"""

from collections.abc import Iterable, Mapping
from enum import Enum

from orm_http_errors.core.errors import HttpError, ValidationItem, safe_str
from orm_http_errors.core.orm_errors import OrmError, OrmUsageError, OrmValidationError

NON_ERROR_MESSAGE = "Could not convert non-error value to an HTTP error."
VALIDATION_MESSAGE = "Validation Failed"


class ErrorKind(str, Enum):
    PASS_THROUGH = "pass_through"
    UPSTREAM = "upstream"
    VALIDATION = "validation"
    USAGE = "usage"
    UNRECOGNIZED = "unrecognized"
    NON_ERROR = "non_error"


def classify(error) -> ErrorKind:
    """Bestimmt die Fehlerart. Spezifischste Klasse zuerst."""
    if isinstance(error, HttpError):
        return ErrorKind.PASS_THROUGH
    if not isinstance(error, BaseException):
        return ErrorKind.NON_ERROR
    if isinstance(error, OrmValidationError):
        return ErrorKind.VALIDATION
    if isinstance(error, OrmUsageError):
        return ErrorKind.USAGE
    if isinstance(error, OrmError):
        return ErrorKind.UPSTREAM
    return ErrorKind.UNRECOGNIZED


def _is_field_collection(value) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping))


def _rule_of(violation) -> str | None:
    if isinstance(violation, Mapping):
        return violation.get("rule")
    return getattr(violation, "rule", None)


def build_validation_items(
    invalid_attributes: Mapping | None,
    resource: str | None = None,
    allowed_fields: Iterable[str] | None = None,
) -> tuple[ValidationItem, ...]:
    """Ein ValidationItem pro Verletzung, Attribute in Mapping-Reihenfolge.

    Erlaubte Felder, die im Mapping fehlen, werden still uebersprungen.
    """
    if not invalid_attributes:
        return ()

    if isinstance(allowed_fields, str):
        allowed_fields = (allowed_fields,)
    allowed = set(allowed_fields) if allowed_fields is not None else None
    return tuple(
        ValidationItem(
            field=attribute,
            resource=resource or None,
            code=_rule_of(violation) or None,
        )
        for attribute, violations in invalid_attributes.items()
        if allowed is None or attribute in allowed
        for violation in violations
    )


def _developer_message(error: BaseException) -> str:
    return safe_str(error) or type(error).__name__


def translate(
    error,
    resource=None,
    allowed_fields=None,
    *,
    validation_message: str = VALIDATION_MESSAGE,
) -> HttpError:
    """Uebersetzt einen beliebigen Fehler in einen HttpError.

    Accepts translate(err, allowed_fields) as well: a non-string collection
    in the second position is taken as the allow-list, a bare string in the
    third position as a single allowed field.
    """
    kind = classify(error)

    if kind is ErrorKind.PASS_THROUGH:
        return error

    if _is_field_collection(resource):
        allowed_fields = resource
        resource = None

    if kind is ErrorKind.NON_ERROR:
        return HttpError.bad_implementation(NON_ERROR_MESSAGE, data=error)

    if kind is ErrorKind.UPSTREAM:
        return HttpError.wrap(error, error.status, safe_str(error.reason))

    if kind is ErrorKind.VALIDATION:
        try:
            items = build_validation_items(error.invalid_attributes, resource, allowed_fields)
        except Exception as e:
            return HttpError.bad_implementation(
                f"Malformed validation error: {safe_str(e)}",
                data=error,
            )
        return HttpError.bad_data(validation_message, validation=items, data=error)

    # USAGE und UNRECOGNIZED: Developer-Fehler
    return HttpError.bad_implementation(_developer_message(error), data=error)
