# library_api/controllers/book_controller.py
"""
Book endpoints for both API generations.

build_book_bp() registers the shared CRUD/stats views; each generation only
supplies its search routes and whether writes need a token.
"""
from flask import Blueprint, current_app, request

from library_api.container import get_services
from library_api.utils.auth import current_request_user
from library_api.utils.decorators import optional_token, token_required, validate_json
from library_api.utils.responses import ok
from library_api.utils.validation import validate_book


def _books_payload(books):
    return [b.to_dict() for b in books]


def _actor():
    user = current_request_user()
    return user.email if user else "anonymous"


# Search adapters: translate each generation's query shape into a service call.

def legacy_title_search():
    return get_services().books.search_by_title(request.args.get("title"))


def legacy_author_search():
    return get_services().books.search_by_author(request.args.get("author"))


def unified_search():
    return get_services().books.search(
        title=request.args.get("title"),
        author=request.args.get("author"),
    )


LEGACY_SEARCH = [
    ("/search", "search_by_title", legacy_title_search),
    ("/search/author", "search_by_author", legacy_author_search),
]

V1_SEARCH = [
    ("/search", "search", unified_search),
]


def _search_view(adapter):
    def view():
        books = adapter()
        return ok("Búsqueda completada exitosamente", _books_payload(books))
    return view


def build_book_bp(name: str, url_prefix: str, search_routes, writes_require_token: bool) -> Blueprint:
    bp = Blueprint(name, __name__, url_prefix=url_prefix)
    write_auth = token_required if writes_require_token else optional_token

    @bp.get("")
    @optional_token
    def list_books():
        books = get_services().books.list_books()
        return ok("Libros obtenidos exitosamente", _books_payload(books))

    @bp.get("/stats")
    def book_stats():
        return ok("Estadísticas obtenidas exitosamente", get_services().books.stats())

    for rule, endpoint, adapter in search_routes:
        bp.add_url_rule(rule, endpoint=endpoint, view_func=optional_token(_search_view(adapter)), methods=["GET"])

    @bp.get("/<int:book_id>")
    @optional_token
    def get_book(book_id: int):
        book = get_services().books.get_book(book_id)
        return ok("Libro obtenido exitosamente", book.to_dict())

    @bp.post("")
    @validate_json(validate_book)
    @write_auth
    def create_book():
        book = get_services().books.create_book(request.get_json())
        current_app.logger.info(f"[books] Book {book.id} created by {_actor()}")
        return ok("Libro creado exitosamente", book.to_dict(), status=201)

    @bp.put("/<int:book_id>")
    @validate_json(validate_book, partial=True)
    @write_auth
    def update_book(book_id: int):
        book = get_services().books.update_book(book_id, request.get_json())
        current_app.logger.info(f"[books] Book {book_id} updated by {_actor()}")
        return ok("Libro actualizado exitosamente", book.to_dict())

    @bp.delete("/<int:book_id>")
    @write_auth
    def delete_book(book_id: int):
        get_services().books.delete_book(book_id)
        current_app.logger.info(f"[books] Book {book_id} deleted by {_actor()}")
        return ok("Libro eliminado exitosamente", include_data=False)

    return bp


legacy_book_bp = build_book_bp("books_legacy", "/api/books", LEGACY_SEARCH, writes_require_token=True)
book_bp = build_book_bp("books_v1", "/api/v1/books", V1_SEARCH, writes_require_token=False)
