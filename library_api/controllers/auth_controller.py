from flask import Blueprint, current_app, request

from library_api.container import get_services
from library_api.utils.auth import current_request_user
from library_api.utils.decorators import json_body, token_required, validate_json
from library_api.utils.responses import ok
from library_api.utils.validation import validate_user

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.post("/register")
@validate_json(validate_user)
def register():
    token, user = get_services().auth.register(request.get_json())
    current_app.logger.info(f"[auth] User {user.id} registered")
    return ok("Usuario registrado exitosamente", {"token": token, "user": user.to_dict()}, status=201)


@auth_bp.post("/login")
def login():
    data = json_body()
    token, user = get_services().auth.login(data.get("email"), data.get("password"))
    current_app.logger.info(f"[auth] User {user.id} logged in")
    return ok("Login exitoso", {"token": token, "user": user.to_dict()})


@auth_bp.get("/me")
@token_required
def me():
    return ok("Usuario obtenido exitosamente", current_request_user().to_dict())
