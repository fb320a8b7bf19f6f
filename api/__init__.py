import logging

from flask import Flask
from flasgger import Swagger
from flask_cors import CORS

from .config import get_config
from .errors import register_error_handlers
from models import storage
from models.credential_store import CredentialStore
from models.item import Item
from models.recipe import Recipe
from models.resource_store import ResourceStore
from models.revocation import RevocationList
from models.schemas.validator import SchemaValidator
from models.store import Store
from utils.references import check_item_references, check_recipe_references
from utils.security import SecretHasher, TokenManager

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0",
    "info": {
        "title": "Pantry Inventory API",
        "version": "1.0.0",
        "description": "REST API for household stores, items and recipes with token-based access control.",
    },
    "basePath": "/",  # blueprints are mounted under /api/v1
    "schemes": ["http"],
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Enter the token with the `Bearer ` prefix, e.g. \"Bearer abcde12345\"."
        }
    }
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str):
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())


def init_services(app: Flask):
    """
    Build the long-lived collaborators from config and hang them on
    app.extensions["pantry"]. The signing secret and hash cost are read here,
    once, and passed in explicitly.
    """
    cfg = app.config
    validator = SchemaValidator()
    hasher = SecretHasher(
        time_cost=cfg["PASSWORD_TIME_COST"],
        memory_cost=cfg["PASSWORD_MEMORY_COST"],
        parallelism=cfg["PASSWORD_PARALLELISM"],
    )
    tokens = TokenManager(
        secret=cfg["JWT_SECRET"],
        algorithm=cfg["JWT_ALGORITHM"],
        ttl=cfg["JWT_TOKEN_EXPIRES"],
        issuer=cfg["JWT_ISSUER"],
    )
    app.extensions["pantry"] = {
        "validator": validator,
        "hasher": hasher,
        "tokens": tokens,
        "credentials": CredentialStore(storage, hasher, validator),
        "revocations": RevocationList(storage, validator),
        "stores": ResourceStore(storage, validator, Store, "store"),
        "items": ResourceStore(storage, validator, Item, "item", check_references=check_item_references),
        "recipes": ResourceStore(storage, validator, Recipe, "recipe", check_references=check_recipe_references),
    }


def create_app(config_name: str | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.
    """
    app = Flask(__name__)

    config = get_config(config_name)
    config.check()
    app.config.from_object(config)
    configure_logging(app.config["LOG_LEVEL"])

    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    register_error_handlers(app)

    storage.configure(app.config["DATABASE_URL"], echo=app.config["SQL_ECHO"])
    storage.reload()
    init_services(app)

    from .health import bp as health_bp
    from .auth import bp as auth_bp
    from .users import bp as users_bp
    from .stores import bp as stores_bp
    from .items import bp as items_bp
    from .recipes import bp as recipes_bp

    app.register_blueprint(health_bp, url_prefix="/api/v1")
    app.register_blueprint(auth_bp, url_prefix="/api/v1/auth")
    app.register_blueprint(users_bp, url_prefix="/api/v1")
    app.register_blueprint(stores_bp, url_prefix="/api/v1")
    app.register_blueprint(items_bp, url_prefix="/api/v1")
    app.register_blueprint(recipes_bp, url_prefix="/api/v1")

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        storage.close()

    @app.route("/")
    def root():
        return {
            "message": "Welcome to Pantry Inventory API",
            "docs": "/apidocs/",
            "health": "/api/v1/health",
        }, 200

    logging.getLogger(__name__).info("app created (env=%s)", app.config["APP_ENV"])
    return app
