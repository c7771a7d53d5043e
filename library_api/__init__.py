from datetime import datetime

from flask import Flask, jsonify, request

from library_api.config import DEFAULT_JWT_SECRET, config_from_env
from library_api.container import init_services
from library_api.errors import register_error_handlers
from library_api.extensions import db, jwt, migrate
from library_api.utils.auth import register_jwt_callbacks


def create_app(config=None, services=None):
    app = Flask(__name__)
    app.config.from_object(config or config_from_env())
    app.logger.setLevel(app.config["LOG_LEVEL"])

    if app.config["APP_ENV"] == "production" and app.config["JWT_SECRET_KEY"] == DEFAULT_JWT_SECRET:
        raise RuntimeError("JWT_SECRET_KEY must be set in production")

    # 1) db first, everything else needs db.engine / db.session
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    register_jwt_callbacks(jwt)

    # 2) services are built once per app and looked up through app.extensions
    init_services(app, services)

    register_error_handlers(app)

    from library_api.controllers.auth_controller import auth_bp
    from library_api.controllers.book_controller import book_bp, legacy_book_bp
    from library_api.controllers.user_controller import user_bp
    app.register_blueprint(legacy_book_bp)
    app.register_blueprint(book_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(user_bp)

    @app.before_request
    def log_request():
        app.logger.info(f"[request] {request.method} {request.path}")

    @app.get("/health")
    def health():
        return jsonify({
            "success": True,
            "message": "API funcionando correctamente con SQLAlchemy",
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "version": app.config["APP_VERSION"],
            "apiVersion": app.config["API_VERSION"],
            "orm": "SQLAlchemy",
        })

    @app.get("/")
    def index():
        return jsonify({
            "success": True,
            "message": "API de Biblioteca - Python + Flask + SQLAlchemy",
            "version": app.config["APP_VERSION"],
            "apiVersion": app.config["API_VERSION"],
            "orm": "SQLAlchemy",
            "endpoints": {
                "v1": {
                    "books": {
                        "GET /api/v1/books": "Obtener todos los libros",
                        "GET /api/v1/books/stats": "Obtener estadísticas de libros",
                        "GET /api/v1/books/search?title=...&author=...": "Buscar libros (título o autor)",
                        "GET /api/v1/books/:id": "Obtener libro por ID",
                        "POST /api/v1/books": "Crear nuevo libro",
                        "PUT /api/v1/books/:id": "Actualizar libro",
                        "DELETE /api/v1/books/:id": "Eliminar libro",
                    },
                    "users": {
                        "GET /api/v1/users": "Obtener todos los usuarios",
                        "GET /api/v1/users/stats": "Obtener estadísticas de usuarios",
                        "GET /api/v1/users/:id": "Obtener usuario por ID",
                        "PUT /api/v1/users/:id": "Actualizar usuario",
                        "DELETE /api/v1/users/:id": "Eliminar usuario",
                    },
                },
                "auth": {
                    "POST /api/auth/register": "Registrar usuario",
                    "POST /api/auth/login": "Iniciar sesión",
                    "GET /api/auth/me": "Usuario autenticado",
                },
            },
        })

    if app.config.get("AUTO_CREATE_TABLES"):
        with app.app_context():
            db.create_all()

    return app
