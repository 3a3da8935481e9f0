import os
from typing import Optional, Tuple

from flask import Flask, Response, json, jsonify, request, url_for
from werkzeug.exceptions import HTTPException

from .errors import NotFoundError, RecipeError, ValidationError
from .models import Recipe
from .schemas import RecipeFields, RecipeUpdate, validate_payload
from .storage import InMemoryRecipeStorage, RecipeRepository

MAX_CONTENT_LENGTH = 1024 * 1024


def create_app(storage: Optional[RecipeRepository] = None) -> Flask:
    """Create and configure the Flask application.

    Parameters
    ----------
    storage:
        Optional recipe repository. When ``None`` the application will use
        :class:`InMemoryRecipeStorage` configured through environment variables.
    """

    app = Flask(__name__)
    # Flask's default config defines MAX_CONTENT_LENGTH as None.
    app.config["MAX_CONTENT_LENGTH"] = MAX_CONTENT_LENGTH
    app.json.sort_keys = False

    log_level = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
    try:
        app.logger.setLevel(log_level)
    except ValueError as exc:
        raise RuntimeError(
            f"Unknown LOG_LEVEL '{log_level}'. Expected a logging level such as 'INFO'."
        ) from exc

    if storage is None:
        storage = InMemoryRecipeStorage.from_env()
    app.config["RECIPE_STORAGE"] = storage

    def _storage() -> RecipeRepository:
        return app.config["RECIPE_STORAGE"]

    @app.after_request
    def log_request(response: Response) -> Response:
        app.logger.info("%s %s %s", request.method, request.path, response.status_code)
        return response

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError) -> Tuple[Response, int]:
        app.logger.warning("Rejected %s %s: %s", request.method, request.path, exc)
        return jsonify(exc.to_dict()), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(exc: NotFoundError) -> Tuple[Response, int]:
        app.logger.warning("Rejected %s %s: %s", request.method, request.path, exc)
        return jsonify(exc.to_dict()), 404

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException) -> Response:
        response = exc.get_response()
        response.data = json.dumps(
            {"error": _error_code(exc.name), "message": exc.description}
        )
        response.content_type = "application/json"
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception) -> Tuple[Response, int]:
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "internal_error", "message": "Internal server error."}), 500

    @app.get("/recipes")
    def list_recipes() -> Response:
        recipes = _storage().list_recipes()
        return jsonify([recipe.to_dict() for recipe in recipes])

    @app.post("/recipes")
    def create_recipe() -> Response:
        payload = validate_payload(RecipeFields, request.get_json(silent=True))
        recipe = _storage().add_recipe(name=payload.name, ingredients=payload.ingredients)

        response = jsonify(recipe.to_dict())
        response.status_code = 201
        response.headers["Location"] = url_for("get_recipe", recipe_id=recipe.id)
        return response

    @app.get("/recipes/<recipe_id>")
    def get_recipe(recipe_id: str) -> Response:
        recipe = _storage().get_recipe(recipe_id)
        return jsonify(recipe.to_dict())

    @app.put("/recipes/<recipe_id>")
    def update_recipe(recipe_id: str) -> Response:
        payload = validate_payload(RecipeUpdate, request.get_json(silent=True))
        recipe = _storage().update_recipe(
            recipe_id,
            name=payload.name,
            ingredients=payload.ingredients,
            body_id=payload.id,
        )
        return jsonify(recipe.to_dict())

    @app.delete("/recipes/<recipe_id>")
    def delete_recipe(recipe_id: str) -> Tuple[str, int]:
        _storage().delete_recipe(recipe_id)
        return "", 204

    return app


def _error_code(name: str) -> str:
    return name.lower().replace(" ", "_").replace("'", "")


__all__ = [
    "MAX_CONTENT_LENGTH",
    "create_app",
    "InMemoryRecipeStorage",
    "NotFoundError",
    "Recipe",
    "RecipeError",
    "RecipeRepository",
    "ValidationError",
]
