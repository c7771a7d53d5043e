from werkzeug.security import generate_password_hash

from library_api.errors import Conflict, NotFound, ValidationFailure
from library_api.repositories.user_repo import UserRepo
from library_api.utils.validation import validate_user

_FIELD_MAP = {"email": "email", "firstName": "first_name", "lastName": "last_name"}


class UserService:
    def __init__(self, repo=UserRepo):
        self.repo = repo

    def list_users(self):
        return self.repo.list_all()

    def get_user(self, user_id: int):
        user = self.repo.get_by_id(user_id)
        if not user:
            raise NotFound("user", user_id)
        return user

    def get_by_email(self, email: str):
        return self.repo.get_by_email(email.strip().lower())

    def create_user(self, data: dict):
        errors = validate_user(data)
        if errors:
            raise ValidationFailure(errors)

        email = data["email"].strip().lower()
        if self.repo.exists_by_email(email):
            raise Conflict("user", "email", email)

        return self.repo.create({
            "email": email,
            "password_hash": generate_password_hash(data["password"]),
            "first_name": data["firstName"].strip(),
            "last_name": data["lastName"].strip(),
        })

    def update_user(self, user_id: int, data: dict):
        user = self.get_user(user_id)

        errors = validate_user(data, partial=True)
        if errors:
            raise ValidationFailure(errors)

        changes = {attr: data[key].strip() for key, attr in _FIELD_MAP.items() if key in data}
        if "email" in changes:
            changes["email"] = changes["email"].lower()
            other = self.repo.get_by_email(changes["email"])
            if other is not None and other.id != user.id:
                raise Conflict("user", "email", changes["email"])
        if "password" in data:
            changes["password_hash"] = generate_password_hash(data["password"])

        merged = {**user.fields(), **changes}
        return self.repo.update(user, merged)

    def delete_user(self, user_id: int) -> bool:
        self.get_user(user_id)
        return self.repo.delete(user_id)

    def touch_last_login(self, user):
        return self.repo.update_last_login(user)

    def stats(self) -> dict:
        total = self.repo.count()
        return {
            "totalUsers": total,
            "message": f"Total de usuarios registrados: {total}",
        }
