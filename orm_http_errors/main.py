"""ORM HTTP Errors - FastAPI-Integration.

Registriert globale Exception-Handler, die ORM-, SQLAlchemy- und
pydantic-Fehler ueber den Translator in einheitliche JSON-Fehler umwandeln.

### Fehler-Format

```json
{
  "statusCode": 422,
  "error": "Unprocessable Entity",
  "message": "Validation Failed",
  "validation": [{"resource": "user", "field": "email", "code": "unique"}]
}
```

`validation` fehlt, wenn es keine Feldprobleme gibt. Bei 5xx ist `message`
generisch, ausser `debug` ist aktiv.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError

from orm_http_errors.config import get_settings
from orm_http_errors.core.adapters import to_orm_error
from orm_http_errors.core.errors import HttpError
from orm_http_errors.core.orm_errors import OrmError
from orm_http_errors.core.translator import translate

logger = logging.getLogger(__name__)


def error_response(http_error: HttpError) -> JSONResponse:
    """HttpError → JSONResponse (Payload + Header)."""
    content = http_error.to_dict()
    if http_error.is_server and get_settings().debug:
        content["message"] = http_error.message
    return JSONResponse(
        status_code=http_error.status_code,
        content=content,
        headers=http_error.headers,
    )


def _log(request: Request, exc: Exception, orm_error, http_error: HttpError) -> None:
    where = f"{request.method} {request.url.path}"
    message = f"{http_error.status_code} on {where}: {http_error.message}"
    if isinstance(orm_error, OrmError):
        message = f"{message} {orm_error.to_dict()}"

    if http_error.is_developer_error:
        logger.error(
            f"Developer error: {message}",
            exc_info=(type(exc), exc, exc.__traceback__),
        )
    elif http_error.is_server:
        logger.error(message)
    else:
        logger.warning(message)


async def orm_error_handler(request: Request, exc: Exception):
    """Jede registrierte Exception → Translator → strukturierte JSON-Response."""
    orm_error = to_orm_error(exc)
    http_error = translate(orm_error, validation_message=get_settings().validation_message)
    _log(request, exc, orm_error, http_error)
    return error_response(http_error)


def register_error_handlers(app: FastAPI) -> None:
    """Register the translating exception handlers on a FastAPI app."""
    for exc_class in (
        HttpError,
        OrmError,
        SQLAlchemyError,
        PydanticValidationError,
        RequestValidationError,
    ):
        app.add_exception_handler(exc_class, orm_error_handler)


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=__doc__,
    )
    register_error_handlers(app)

    @app.get("/health", tags=["Health"],
             summary="Health Check",
             description="Einfacher Health-Check fuer Load Balancer / Monitoring.")
    async def health():
        return {"status": "ok"}

    return app
