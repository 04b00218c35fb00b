from orm_http_errors.core.errors import HttpError, ValidationItem
from orm_http_errors.core.orm_errors import OrmError, OrmValidationError, OrmUsageError
from orm_http_errors.core.translator import ErrorKind, classify, translate
from orm_http_errors.core.adapters import to_orm_error

__all__ = [
    "HttpError", "ValidationItem",
    "OrmError", "OrmValidationError", "OrmUsageError",
    "ErrorKind", "classify", "translate",
    "to_orm_error",
]
