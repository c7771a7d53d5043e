from flask_jwt_extended import create_access_token
from werkzeug.security import check_password_hash

from library_api.errors import Unauthenticated


class AuthService:
    def __init__(self, users):
        self.users = users

    @staticmethod
    def issue_token(user) -> str:
        # expiry comes from JWT_ACCESS_TOKEN_EXPIRES
        return create_access_token(
            identity=str(user.id),
            additional_claims={"userId": user.id, "email": user.email},
        )

    def register(self, data: dict):
        user = self.users.create_user(data)
        return self.issue_token(user), user

    def login(self, email, password):
        if not isinstance(email, str) or not isinstance(password, str):
            raise Unauthenticated("credentials")

        user = self.users.get_by_email(email)
        if not user or not check_password_hash(user.password_hash, password):
            raise Unauthenticated("credentials")

        self.users.touch_last_login(user)
        return self.issue_token(user), user
