from flask import g

from library_api.container import get_services


def register_jwt_callbacks(jwt):
    @jwt.user_lookup_loader
    def load_user(_jwt_header, jwt_data):
        # None makes flask-jwt-extended raise UserLookupError
        try:
            user_id = int(jwt_data["sub"])
        except (KeyError, TypeError, ValueError):
            return None
        return get_services().users.repo.get_by_id(user_id)


def current_request_user():
    """User attached by token_required/optional_token, or None."""
    return g.get("current_user")
