# app/__init__.py
from flask import Flask, jsonify
from flask_cors import CORS
import logging

from app.config import Config
from app.utils.errors import AccessControlError
from app.utils.logger import setup_logger


def create_app(config_object=None, user_store=None):
    """
    Application factory.

    Args:
        config_object: Config class to load, defaults to Config
        user_store: UserStore supplying user records, defaults to an
            in-memory store seeded from SEED_USERS_FILE
    """
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config_object or Config)

    setup_logger(
        'app',
        level=getattr(logging, str(app.config['LOG_LEVEL']).upper(), logging.INFO),
        log_dir=app.config['LOG_DIR'],
        log_to_file=app.config['LOG_TO_FILE'],
    )

    # Configure CORS for the dashboard front end
    CORS(app,
         resources={
             r"/*": {
                 "origins": app.config['CORS_ORIGINS'],
                 "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
                 "allow_headers": ["Content-Type", "Authorization", "X-Requested-With"],
             }
         },
         supports_credentials=True)

    # User store (import here to avoid circular imports)
    from app.rbac.context import STORE_EXTENSION, InMemoryUserStore
    from app.utils.admin_init import create_default_admin, load_seed_users

    if user_store is None:
        user_store = InMemoryUserStore()
        load_seed_users(user_store, app.config['SEED_USERS_FILE'])
    if app.config['CREATE_DEFAULT_ADMIN']:
        create_default_admin(user_store, app.config['DEFAULT_ADMIN_ID'], app.config['DEFAULT_ADMIN_EMAIL'])
    app.extensions[STORE_EXTENSION] = user_store

    # Navigation guard runs before every view
    from app.rbac.decorators import navigation_guard
    app.before_request(navigation_guard)

    @app.errorhandler(AccessControlError)
    def handle_access_control_error(error):
        return jsonify(error.to_dict()), error.status_code

    # Register blueprints
    from app.routes.auth import bp as auth_bp
    from app.routes.dashboard_routes import bp as dashboard_bp
    from app.routes.admin_routes import bp as admin_bp
    from app.routes.instructor_routes import bp as instructor_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(instructor_bp)

    # Register RBAC template helpers
    from app.rbac.template_helpers import TEMPLATE_HELPERS
    for name, func in TEMPLATE_HELPERS.items():
        app.jinja_env.globals[name] = func

    return app
