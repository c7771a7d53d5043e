# library_api/errors.py
from __future__ import annotations

import traceback
from enum import Enum

from flask import current_app, jsonify, request
from werkzeug.exceptions import HTTPException


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHENTICATED = "unauthenticated"
    UNAUTHORIZED = "unauthorized"
    INTERNAL = "internal"


class AppError(Exception):
    """Base class for every failure the API knows how to render."""

    kind = ErrorKind.INTERNAL

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationFailure(AppError):
    kind = ErrorKind.VALIDATION

    def __init__(self, errors: list[str], message: str = "Datos de validación incorrectos"):
        self.errors = list(errors)
        super().__init__(message)


class InvalidArgument(ValidationFailure):
    kind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, message: str):
        super().__init__([message], message=message)


class NotFound(AppError):
    kind = ErrorKind.NOT_FOUND

    LABELS = {"book": "Libro", "user": "Usuario"}

    def __init__(self, entity: str, identifier=None):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{self.LABELS.get(entity, entity)} no encontrado")


class NotFoundRoute(AppError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Ruta no encontrada: {path}")


class Conflict(AppError):
    kind = ErrorKind.CONFLICT

    def __init__(self, entity: str, field: str, value=None):
        self.entity = entity
        self.field = field
        self.value = value
        super().__init__(f"El {field} ya existe")


class Unauthenticated(AppError):
    kind = ErrorKind.UNAUTHENTICATED

    MESSAGES = {
        "missing": "Token de acceso requerido",
        "invalid": "Token inválido",
        "expired": "Token expirado",
        "unknown_user": "Usuario no encontrado",
        "credentials": "Credenciales inválidas",
    }

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(self.MESSAGES[reason])


class Unauthorized(AppError):
    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "Acceso denegado"):
        super().__init__(message)


class InternalError(AppError):
    kind = ErrorKind.INTERNAL


STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.UNAUTHORIZED: 403,
    ErrorKind.INTERNAL: 500,
}


def _body(message: str, errors: list[str] | None = None, stack: str | None = None) -> dict:
    body = {"success": False, "message": message}
    if errors is not None:
        body["errors"] = errors
    if stack is not None:
        body["error"] = stack
    return body


def _debug_stack(exc: BaseException) -> str | None:
    if not current_app.debug:
        return None
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def error_response(exc: AppError):
    """Render an AppError as the JSON envelope with the status of its kind."""
    status = STATUS_BY_KIND[exc.kind]

    if exc.kind in (ErrorKind.VALIDATION, ErrorKind.INVALID_ARGUMENT):
        current_app.logger.warning(f"[errors] {request.method} {request.path}: {exc.errors}")
        return jsonify(_body(exc.message, errors=exc.errors)), status

    if exc.kind is ErrorKind.INTERNAL:
        current_app.logger.exception(f"[errors] {request.method} {request.path}: {exc.message}")
        message = exc.message if current_app.debug else "Error interno del servidor"
        return jsonify(_body(message, stack=_debug_stack(exc))), status

    current_app.logger.warning(f"[errors] {request.method} {request.path}: {exc.kind.value} - {exc.message}")
    return jsonify(_body(exc.message)), status


def register_error_handlers(app):
    @app.errorhandler(AppError)
    def handle_app_error(exc: AppError):
        return error_response(exc)

    @app.errorhandler(404)
    def handle_route_not_found(exc):
        return error_response(NotFoundRoute(request.path))

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        app.logger.warning(f"[errors] {request.method} {request.path}: {exc.code} {exc.name}")
        return jsonify(_body(exc.description or exc.name)), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        app.logger.exception(f"[errors] Unhandled {type(exc).__name__}: {exc}")
        return jsonify(_body("Error interno del servidor", stack=_debug_stack(exc))), 500
