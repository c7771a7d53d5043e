from datetime import datetime
from sqlalchemy.orm import validates

from library_api.errors import ValidationFailure
from library_api.extensions import db
from library_api.utils.validation import (
    AUTHOR_MAX,
    TITLE_MAX,
    check_author,
    check_published_at,
    check_title,
    parse_date,
)


class Book(db.Model):
    __tablename__ = "book"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(TITLE_MAX), nullable=False, index=True)
    author = db.Column(db.String(AUTHOR_MAX), nullable=True, index=True)
    published_at = db.Column(db.Date, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    @validates("title")
    def _validate_title(self, key, value):
        errors = check_title(value)
        if errors:
            raise ValidationFailure(errors)
        return value

    @validates("author")
    def _validate_author(self, key, value):
        errors = check_author(value)
        if errors:
            raise ValidationFailure(errors)
        return value

    @validates("published_at")
    def _validate_published_at(self, key, value):
        errors = check_published_at(value)
        if errors:
            raise ValidationFailure(errors)
        return parse_date(value)

    def fields(self) -> dict:
        return {"title": self.title, "author": self.author, "published_at": self.published_at}

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "publishedAt": self.published_at.isoformat() if self.published_at else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
