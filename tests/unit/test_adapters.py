"""Tests for SQLAlchemy/pydantic → ORM error adapters."""

import pytest
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import (
    ArgumentError,
    IntegrityError,
    InvalidRequestError,
    MultipleResultsFound,
    NoResultFound,
    OperationalError,
    SQLAlchemyError,
)

from orm_http_errors.core.adapters import from_pydantic, from_sqlalchemy, to_orm_error
from orm_http_errors.core.orm_errors import OrmError, OrmUsageError, OrmValidationError
from orm_http_errors.core.translator import translate


def _integrity(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO users (email) VALUES (?)", {}, Exception(message))


class User(BaseModel):
    name: str
    age: int


class TestFromSqlalchemy:

    @pytest.mark.parametrize("message, status", [
        ("duplicate key value violates unique constraint \"users_email_key\"", 409),
        ("UNIQUE constraint failed: users.email", 409),
        ("insert or update violates foreign key constraint", 422),
        ("new row violates check constraint \"ck_users_age\"", 422),
        ("NOT NULL constraint failed: users.name", 409),
    ])
    def test_integrity_errors(self, message, status):
        err = from_sqlalchemy(_integrity(message))

        assert type(err) is OrmError
        assert err.status == status
        assert isinstance(err.original_error, IntegrityError)

    def test_no_result_is_404(self):
        err = from_sqlalchemy(NoResultFound("No row was found when one was required"))

        assert err.status == 404
        assert translate(err).status_code == 404

    def test_multiple_results_is_usage_error(self):
        assert isinstance(from_sqlalchemy(MultipleResultsFound("many")), OrmUsageError)

    @pytest.mark.parametrize("exc", [ArgumentError("bad arg"), InvalidRequestError("bad request")])
    def test_usage_errors(self, exc):
        err = from_sqlalchemy(exc)

        assert isinstance(err, OrmUsageError)
        assert translate(err).is_developer_error is True

    def test_operational_error_is_503(self):
        err = from_sqlalchemy(OperationalError("SELECT 1", {}, Exception("could not connect")))

        assert err.status == 503

    def test_unknown_sqlalchemy_error_is_500(self):
        err = from_sqlalchemy(SQLAlchemyError("?"))

        assert type(err) is OrmError
        assert err.status == 500


class TestFromPydantic:

    def test_model_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            User.model_validate({"age": "old"})

        err = from_pydantic(exc_info.value)

        assert isinstance(err, OrmValidationError)
        assert list(err.invalid_attributes) == ["name", "age"]
        assert err.invalid_attributes["name"][0]["rule"] == "missing"
        assert err.invalid_attributes["age"][0]["rule"] == "int_parsing"

    def test_request_validation_error_strips_location(self):
        exc = RequestValidationError([
            {"loc": ("body", "address", "zip"), "msg": "Field required", "type": "missing"},
            {"loc": ("query", "page"), "msg": "Input should be a valid integer", "type": "int_parsing"},
        ])

        err = from_pydantic(exc)

        assert list(err.invalid_attributes) == ["address.zip", "page"]

    def test_whole_body_error_uses_root_field(self):
        exc = RequestValidationError([{"loc": ("body",), "msg": "Field required", "type": "missing"}])

        assert list(from_pydantic(exc).invalid_attributes) == ["__root__"]

    def test_translates_to_422_items(self):
        with pytest.raises(ValidationError) as exc_info:
            User.model_validate({"name": "Ada", "age": "x"})

        processed = translate(to_orm_error(exc_info.value), "user")

        assert processed.status_code == 422
        assert processed.payload["validation"] == [
            {"resource": "user", "field": "age", "code": "int_parsing"},
        ]


class TestToOrmError:

    def test_unknown_exceptions_pass_unchanged(self):
        exc = KeyError("x")

        assert to_orm_error(exc) is exc

    def test_orm_errors_pass_unchanged(self):
        exc = OrmError()

        assert to_orm_error(exc) is exc

    def test_non_errors_pass_unchanged(self):
        value = {"error": True}

        assert to_orm_error(value) is value
