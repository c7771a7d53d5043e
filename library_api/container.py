# library_api/container.py
from __future__ import annotations

from dataclasses import dataclass

from flask import current_app

from library_api.repositories.book_repo import BookRepo
from library_api.repositories.user_repo import UserRepo
from library_api.services.auth_service import AuthService
from library_api.services.book_service import BookService
from library_api.services.user_service import UserService

EXTENSION_KEY = "library"


@dataclass
class Services:
    books: BookService
    users: UserService
    auth: AuthService


def build_services(book_repo=BookRepo, user_repo=UserRepo) -> Services:
    users = UserService(user_repo)
    return Services(books=BookService(book_repo), users=users, auth=AuthService(users))


def init_services(app, services: Services | None = None) -> Services:
    services = services or build_services()
    app.extensions[EXTENSION_KEY] = services
    return services


def get_services() -> Services:
    return current_app.extensions[EXTENSION_KEY]
