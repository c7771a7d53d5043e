from flask import Blueprint, current_app, request

from library_api.container import get_services
from library_api.utils.decorators import token_required, validate_json
from library_api.utils.responses import ok
from library_api.utils.validation import validate_user

user_bp = Blueprint("users", __name__, url_prefix="/api/v1/users")


@user_bp.get("")
@token_required
def list_users():
    users = get_services().users.list_users()
    return ok("Usuarios obtenidos exitosamente", [u.to_dict() for u in users])


@user_bp.get("/stats")
@token_required
def user_stats():
    return ok("Estadísticas obtenidas exitosamente", get_services().users.stats())


@user_bp.get("/<int:user_id>")
@token_required
def get_user(user_id: int):
    user = get_services().users.get_user(user_id)
    return ok("Usuario obtenido exitosamente", user.to_dict())


@user_bp.put("/<int:user_id>")
@validate_json(validate_user, partial=True)
@token_required
def update_user(user_id: int):
    user = get_services().users.update_user(user_id, request.get_json())
    current_app.logger.info(f"[users] User {user_id} updated")
    return ok("Usuario actualizado exitosamente", user.to_dict())


@user_bp.delete("/<int:user_id>")
@token_required
def delete_user(user_id: int):
    get_services().users.delete_user(user_id)
    current_app.logger.info(f"[users] User {user_id} deleted")
    return ok("Usuario eliminado exitosamente", include_data=False)
