# library_api/utils/validation.py
"""
Field rules shared by the request validator and the ORM models.

Each check_* function returns a list of violation messages for a single
value; an empty list means the value is acceptable.
"""
from __future__ import annotations

import re
from datetime import date, datetime

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

TITLE_MAX = 500
AUTHOR_MAX = 255
EMAIL_MAX = 255
PASSWORD_MIN = 6


def _blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


def parse_date(value) -> date | None:
    """Accepts a date, a datetime or an ISO-8601 string. Raises ValueError otherwise."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"invalid date: {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError:
        return datetime.fromisoformat(value).date()


# Book

def check_title(value) -> list[str]:
    if _blank(value):
        return ["El título es requerido"]
    if len(value) > TITLE_MAX:
        return [f"El título no puede exceder {TITLE_MAX} caracteres"]
    return []


def check_author(value) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, str):
        return ["El autor debe ser texto"]
    if len(value) > AUTHOR_MAX:
        return [f"El autor no puede exceder {AUTHOR_MAX} caracteres"]
    return []


def check_published_at(value) -> list[str]:
    try:
        parse_date(value)
    except ValueError:
        return ["La fecha de publicación debe ser válida"]
    return []


# User

def check_email(value) -> list[str]:
    if _blank(value):
        return ["El email es requerido"]
    errors = []
    if not EMAIL_RE.match(value):
        errors.append("El email debe tener un formato válido")
    if len(value) > EMAIL_MAX:
        errors.append(f"El email no puede exceder {EMAIL_MAX} caracteres")
    return errors


def check_password(value) -> list[str]:
    if not isinstance(value, str) or len(value) < PASSWORD_MIN:
        return [f"La contraseña debe tener al menos {PASSWORD_MIN} caracteres"]
    return []


def check_first_name(value) -> list[str]:
    return ["El nombre es requerido"] if _blank(value) else []


def check_last_name(value) -> list[str]:
    return ["El apellido es requerido"] if _blank(value) else []


BOOK_RULES = {
    "title": check_title,
    "author": check_author,
    "publishedAt": check_published_at,
}

USER_RULES = {
    "email": check_email,
    "password": check_password,
    "firstName": check_first_name,
    "lastName": check_last_name,
}


def _run(rules: dict, data: dict, partial: bool) -> list[str]:
    errors: list[str] = []
    for field, check in rules.items():
        if partial and field not in data:
            continue
        errors.extend(check(data.get(field)))
    return errors


def validate_book(data: dict, partial: bool = False) -> list[str]:
    return _run(BOOK_RULES, data, partial)


def validate_user(data: dict, partial: bool = False) -> list[str]:
    return _run(USER_RULES, data, partial)
