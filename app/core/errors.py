# =========================================================
# APPLICATION ERRORS
#
# Caller-facing failures raised by the order engine and the
# routers. Each carries the HTTP status it is rendered with;
# app.main registers a single handler for AppError.
# =========================================================

from fastapi import status
from sqlalchemy.exc import IntegrityError


FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OrderValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ReferentialError(AppError):
    status_code = status.HTTP_409_CONFLICT


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT


class StockInsufficientError(AppError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, product_id: int):
        super().__init__(f"Insufficient stock for product {product_id}")
        self.product_id = product_id


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)


def _sqlstate(exc: IntegrityError):
    return getattr(exc.orig, "pgcode", None)


def _constraint_name(exc: IntegrityError) -> str:
    diag = getattr(exc.orig, "diag", None)
    return getattr(diag, "constraint_name", None) or ""


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    return (
        _sqlstate(exc) == FOREIGN_KEY_VIOLATION
        or "FOREIGN KEY constraint failed" in str(exc.orig)
    )


def is_unique_violation(exc: IntegrityError) -> bool:
    return (
        _sqlstate(exc) == UNIQUE_VIOLATION
        or "UNIQUE constraint failed" in str(exc.orig)
    )


def translate_integrity_error(
    exc: IntegrityError,
    messages: dict[str, str] | None = None,
) -> AppError:
    """
    Map a store integrity failure to the error the caller sees.

    ``messages`` maps a constraint name (or a fragment of the driver
    message) to a human readable explanation. PostgreSQL reports the
    violated constraint so the message can be specific; SQLite only
    reports the kind of violation and falls back to the generic text.
    """
    detail = f"{_constraint_name(exc)} {exc.orig}"
    message = None
    for fragment, text in (messages or {}).items():
        if fragment in detail:
            message = text
            break

    if is_foreign_key_violation(exc):
        return ReferentialError(message or "Referenced record does not exist")

    if is_unique_violation(exc):
        return ConflictError(message or "Record already exists")

    return InternalError()
