from datetime import datetime
from sqlalchemy.orm import validates

from library_api.errors import ValidationFailure
from library_api.extensions import db
from library_api.utils.validation import EMAIL_MAX, check_email, check_first_name, check_last_name

_CHECKS = {
    "email": check_email,
    "first_name": check_first_name,
    "last_name": check_last_name,
}


class User(db.Model):
    __tablename__ = "user"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(EMAIL_MAX), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(255), nullable=False)
    last_name = db.Column(db.String(255), nullable=False)
    last_login_at = db.Column(db.DateTime, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    @validates("email", "first_name", "last_name")
    def _validate_required(self, key, value):
        errors = _CHECKS[key](value)
        if errors:
            raise ValidationFailure(errors)
        return value

    def fields(self) -> dict:
        return {
            "email": self.email,
            "password_hash": self.password_hash,
            "first_name": self.first_name,
            "last_name": self.last_name,
        }

    def to_dict(self) -> dict:
        # password_hash never leaves the model
        return {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "lastLoginAt": self.last_login_at.isoformat() if self.last_login_at else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
