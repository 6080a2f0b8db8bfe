from flask import Flask,jsonify
from werkzeug.exceptions import HTTPException
from flask_cors import CORS
from dotenv import load_dotenv
from portal.extension import db, migrate, jwt, ma
from portal.routes_controller import register_routes
from portal.models import TokenBlocklist
from portal.service.paypal_client import PayPalClient
from portal.service.identity_provider import GoogleIdentityClient
from portal.utils.errors import PortalError
from portal.utils.gateway import init_gateway
import os
from datetime import timedelta
from portal.seed import seed


load_dotenv()


def _env_list(name, default):
    value = os.getenv(name)
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


def create_app(test_config=None):
    app = Flask(__name__)

    # Database Configuration
    app.config["SQLALCHEMY_DATABASE_URI"] = os.getenv("DATABASE_URL", "sqlite:///portal.db")
    app.config['SQLALCHEMY_ENGINE_OPTIONS'] = {
        "pool_pre_ping": True
    }

    # JWT Configuration
    app.config["JWT_SECRET_KEY"] = os.getenv("JWT_SECRET_KEY", "fallback-secret-key")
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(hours=24)
    app.config["JWT_TOKEN_LOCATION"] = ["headers", "cookies"]
    app.config["JWT_HEADER_NAME"] = "Authorization"
    app.config["JWT_HEADER_TYPE"] = "Bearer"
    app.config["JWT_COOKIE_SECURE"] = os.getenv("JWT_COOKIE_SECURE", "false").lower() == "true"
    # flask-restful hides flask-jwt-extended errors otherwise
    app.config["PROPAGATE_EXCEPTIONS"] = True

    # Payment processor
    app.config["PAYPAL_CLIENT_ID"] = os.getenv("PAYPAL_CLIENT_ID", "")
    app.config["PAYPAL_CLIENT_SECRET"] = os.getenv("PAYPAL_CLIENT_SECRET", "")
    app.config["PAYPAL_API_BASE"] = os.getenv("PAYPAL_API_BASE", "https://api-m.sandbox.paypal.com")
    app.config["PAYMENT_CURRENCY"] = os.getenv("PAYMENT_CURRENCY", "USD")

    # Federated sign-in
    app.config["GOOGLE_CLIENT_ID"] = os.getenv("GOOGLE_CLIENT_ID", "")

    # Identity verification throttling, 0 attempts disables it
    app.config["VERIFY_MAX_ATTEMPTS"] = int(os.getenv("VERIFY_MAX_ATTEMPTS", "5"))
    app.config["VERIFY_LOCKOUT_MINUTES"] = int(os.getenv("VERIFY_LOCKOUT_MINUTES", "15"))

    # Route-level access control
    app.config["PROTECTED_PREFIXES"] = ["/dashboard", "/payment", "/confirmation", "/verify"]
    app.config["AUTH_PREFIXES"] = ["/auth"]
    app.config["AUTH_PASSTHROUGH"] = ["/auth/sign-out", "/auth/session"]

    app.config["CORS_ORIGINS"] = _env_list("CORS_ORIGINS", ["http://localhost:3000", "http://127.0.0.1:3000"])
    app.config["RUN_MIGRATIONS"] = os.getenv("RUN_MIGRATIONS", "false").lower() == "true"
    app.config["SEED_ON_STARTUP"] = os.getenv("SEED_ON_STARTUP", "false").lower() == "true"

    app.config.from_prefixed_env()
    if test_config:
        app.config.update(test_config)

    CORS(app,
         supports_credentials=True,
         origins=app.config["CORS_ORIGINS"],
         methods=["GET", "POST", "PATCH", "OPTIONS"],
         allow_headers=["Content-Type", "Authorization", "X-CSRF-TOKEN"],
         expose_headers=["Authorization"],
         max_age=3600
    )

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    ma.init_app(app)

    # External clients, replaceable per app
    app.extensions["payment_processor"] = PayPalClient(
        client_id=app.config["PAYPAL_CLIENT_ID"],
        client_secret=app.config["PAYPAL_CLIENT_SECRET"],
        base_url=app.config["PAYPAL_API_BASE"],
    )
    app.extensions["identity_provider"] = GoogleIdentityClient(
        client_id=app.config["GOOGLE_CLIENT_ID"],
    )

    with app.app_context():
        if app.config["RUN_MIGRATIONS"]:
            from flask_migrate import upgrade
            upgrade()
        if app.config["SEED_ON_STARTUP"]:
            seed()

    init_gateway(app)

    # Register routes
    register_routes(app)

    @app.cli.command("seed")
    def seed_command():
        """Load development debtors, debts and a demo account."""
        seed()

    @app.errorhandler(PortalError)
    def handle_portal_error(e):
        return jsonify({"message": e.message}), e.status_code

    @app.errorhandler(Exception)
    def handle_error(e):
        if isinstance(e, HTTPException):
            return e
        app.logger.error(f"Unhandled error: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred"}), 500


    @app.route('/')
    def home():
        return {"message": "Welcome to the debtor payment portal API"}

    # Add JWT error handlers
    @jwt.token_in_blocklist_loader
    def check_if_token_revoked(jwt_header, jwt_payload):
        jti = jwt_payload["jti"]
        return db.session.query(TokenBlocklist.id).filter_by(jti=jti).scalar() is not None

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return {
            "message": "Invalid token",
            "error": str(error)
        }, 401

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return {
            "message": "Missing authorization token",
            "error": str(error)
        }, 401

    @jwt.revoked_token_loader
    def revoked_token_callback(jwt_header, jwt_payload):
        return {"message": "Session has been signed out"}, 401


    return app
