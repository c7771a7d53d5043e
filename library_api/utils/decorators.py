from functools import wraps

from flask import current_app, g, request
from flask_jwt_extended import get_current_user, verify_jwt_in_request
from flask_jwt_extended.exceptions import (
    InvalidHeaderError,
    JWTExtendedException,
    NoAuthorizationError,
    UserLookupError,
)
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from library_api.errors import Unauthenticated, ValidationFailure


def _authenticate():
    """Decodes the bearer token and resolves its user, raising Unauthenticated on any failure."""
    try:
        verify_jwt_in_request()
    except (NoAuthorizationError, InvalidHeaderError) as e:
        # "Bearer" without a token counts as no token
        raise Unauthenticated("missing") from e
    except ExpiredSignatureError as e:
        raise Unauthenticated("expired") from e
    except UserLookupError as e:
        raise Unauthenticated("unknown_user") from e
    except (InvalidTokenError, JWTExtendedException) as e:
        raise Unauthenticated("invalid") from e
    return get_current_user()


def token_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        g.current_user = _authenticate()
        return fn(*args, **kwargs)
    return wrapper


def optional_token(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        g.current_user = None
        if request.headers.get("Authorization"):
            try:
                g.current_user = _authenticate()
            except Unauthenticated as e:
                current_app.logger.debug(f"[auth] Optional token ignored: {e.reason}")
        return fn(*args, **kwargs)
    return wrapper


def json_body() -> dict:
    """The request body as a non-empty JSON object, or a ValidationFailure."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        raise ValidationFailure(
            ["Se requiere un cuerpo JSON válido"],
            message="Se requiere un cuerpo JSON válido",
        )
    return data


def validate_json(validator, partial: bool = False):
    """Rejects the request before the view runs when the JSON body breaks the validator's rules."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            data = json_body()
            errors = validator(data, partial=partial)
            if errors:
                raise ValidationFailure(errors)
            return fn(*args, **kwargs)
        return wrapper
    return decorator
