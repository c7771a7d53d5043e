from sqlalchemy.exc import SQLAlchemyError

from library_api.errors import AppError, InternalError, NotFound
from library_api.extensions import db
from library_api.models.book import Book


def _failed(operation: str, exc: Exception) -> InternalError:
    db.session.rollback()
    return InternalError(f"Error {operation}: {exc}")


class BookRepo:
    @staticmethod
    def list_all():
        try:
            return Book.query.order_by(Book.created_at.desc(), Book.id.desc()).all()
        except SQLAlchemyError as e:
            raise _failed("obteniendo libros", e) from e

    @staticmethod
    def get(book_id: int):
        try:
            return db.session.get(Book, book_id)
        except OverflowError:
            # id outside the column range cannot match a row
            db.session.rollback()
            return None
        except SQLAlchemyError as e:
            raise _failed("obteniendo libro", e) from e

    @staticmethod
    def create(fields: dict) -> Book:
        try:
            book = Book(
                title=fields["title"],
                author=fields.get("author") or None,
                published_at=fields.get("published_at") or None,
            )
            db.session.add(book)
            db.session.commit()
            return book
        except AppError:
            db.session.rollback()
            raise
        except SQLAlchemyError as e:
            raise _failed("creando libro", e) from e

    @staticmethod
    def update(book: Book, fields: dict) -> Book:
        """Writes an already merged field set onto the book."""
        try:
            for key, value in fields.items():
                setattr(book, key, value)
            db.session.commit()
            return book
        except AppError:
            db.session.rollback()
            raise
        except SQLAlchemyError as e:
            raise _failed("actualizando libro", e) from e

    @staticmethod
    def delete(book_id: int) -> bool:
        try:
            book = BookRepo.get(book_id)
            if book is None:
                raise NotFound("book", book_id)
            db.session.delete(book)
            db.session.commit()
            return True
        except SQLAlchemyError as e:
            raise _failed("eliminando libro", e) from e

    @staticmethod
    def exists(book_id: int) -> bool:
        return BookRepo.get(book_id) is not None

    @staticmethod
    def find_by_title(title: str):
        try:
            return (
                Book.query
                .filter(Book.title.ilike(f"%{title}%"))
                .order_by(Book.created_at.desc(), Book.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            raise _failed("buscando libros por título", e) from e

    @staticmethod
    def find_by_author(author: str):
        try:
            return (
                Book.query
                .filter(Book.author.ilike(f"%{author}%"))
                .order_by(Book.created_at.desc(), Book.id.desc())
                .all()
            )
        except SQLAlchemyError as e:
            raise _failed("buscando libros por autor", e) from e

    @staticmethod
    def count() -> int:
        try:
            return Book.query.count()
        except SQLAlchemyError as e:
            raise _failed("contando libros", e) from e
