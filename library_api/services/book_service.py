from library_api.errors import InvalidArgument, NotFound, ValidationFailure
from library_api.repositories.book_repo import BookRepo
from library_api.utils.validation import check_title, parse_date

# API payload key -> model attribute
_FIELD_MAP = {"title": "title", "author": "author", "publishedAt": "published_at"}


def _to_fields(data: dict) -> dict:
    return {attr: data[key] for key, attr in _FIELD_MAP.items() if key in data}


class BookService:
    def __init__(self, repo=BookRepo):
        self.repo = repo

    def list_books(self):
        return self.repo.list_all()

    def get_book(self, book_id: int):
        book = self.repo.get(book_id)
        if not book:
            raise NotFound("book", book_id)
        return book

    def book_exists(self, book_id: int) -> bool:
        return self.repo.exists(book_id)

    def create_book(self, data: dict):
        errors = check_title(data.get("title"))
        if errors:
            raise ValidationFailure(errors)

        fields = _to_fields(data)
        if "published_at" in fields:
            fields["published_at"] = parse_date(fields["published_at"])
        return self.repo.create(fields)

    def update_book(self, book_id: int, data: dict):
        book = self.get_book(book_id)

        if "title" in data:
            errors = check_title(data["title"])
            if errors:
                raise ValidationFailure(errors)

        changes = _to_fields(data)
        if "published_at" in changes:
            changes["published_at"] = parse_date(changes["published_at"])

        merged = {**book.fields(), **changes}
        return self.repo.update(book, merged)

    def delete_book(self, book_id: int) -> bool:
        self.get_book(book_id)
        return self.repo.delete(book_id)

    def search_by_title(self, title):
        if not title or not title.strip():
            raise InvalidArgument("El término de búsqueda es requerido")
        return self.repo.find_by_title(title.strip())

    def search_by_author(self, author):
        if not author or not author.strip():
            raise InvalidArgument("El autor es requerido para la búsqueda")
        return self.repo.find_by_author(author.strip())

    def search(self, title=None, author=None):
        """
        Unified search: no criteria returns every book, and when both are
        given the title wins over the author.
        """
        if not title and not author:
            return self.list_books()
        if title and title.strip():
            return self.repo.find_by_title(title.strip())
        if author and author.strip():
            return self.repo.find_by_author(author.strip())
        return []

    def stats(self) -> dict:
        total = self.repo.count()
        return {
            "totalBooks": total,
            "message": f"Total de libros en la biblioteca: {total}",
        }
