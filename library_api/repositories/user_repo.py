from datetime import datetime
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from library_api.errors import AppError, Conflict, InternalError, NotFound
from library_api.extensions import db
from library_api.models.user import User


def _failed(operation: str, exc: Exception) -> InternalError:
    db.session.rollback()
    return InternalError(f"Error {operation}: {exc}")


class UserRepo:
    @staticmethod
    def list_all():
        try:
            return User.query.order_by(User.created_at.desc(), User.id.desc()).all()
        except SQLAlchemyError as e:
            raise _failed("obteniendo usuarios", e) from e

    @staticmethod
    def get_by_id(user_id: int):
        try:
            return db.session.get(User, user_id)
        except OverflowError:
            db.session.rollback()
            return None
        except SQLAlchemyError as e:
            raise _failed("obteniendo usuario", e) from e

    @staticmethod
    def get_by_email(email: str):
        try:
            return User.query.filter_by(email=email).first()
        except SQLAlchemyError as e:
            raise _failed("obteniendo usuario por email", e) from e

    @staticmethod
    def exists_by_email(email: str) -> bool:
        return UserRepo.get_by_email(email) is not None

    @staticmethod
    def create(fields: dict) -> User:
        try:
            user = User(**fields)
            db.session.add(user)
            db.session.commit()
            return user
        except AppError:
            db.session.rollback()
            raise
        except IntegrityError as e:
            db.session.rollback()
            raise Conflict("user", "email", fields.get("email")) from e
        except SQLAlchemyError as e:
            raise _failed("creando usuario", e) from e

    @staticmethod
    def update(user: User, fields: dict) -> User:
        try:
            for key, value in fields.items():
                setattr(user, key, value)
            db.session.commit()
            return user
        except AppError:
            db.session.rollback()
            raise
        except IntegrityError as e:
            db.session.rollback()
            raise Conflict("user", "email", fields.get("email")) from e
        except SQLAlchemyError as e:
            raise _failed("actualizando usuario", e) from e

    @staticmethod
    def update_last_login(user: User) -> User:
        try:
            user.last_login_at = datetime.utcnow()
            db.session.commit()
            return user
        except SQLAlchemyError as e:
            raise _failed("actualizando último login", e) from e

    @staticmethod
    def delete(user_id: int) -> bool:
        try:
            user = UserRepo.get_by_id(user_id)
            if user is None:
                raise NotFound("user", user_id)
            db.session.delete(user)
            db.session.commit()
            return True
        except SQLAlchemyError as e:
            raise _failed("eliminando usuario", e) from e

    @staticmethod
    def count() -> int:
        try:
            return User.query.count()
        except SQLAlchemyError as e:
            raise _failed("contando usuarios", e) from e
