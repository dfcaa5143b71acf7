from flask import Flask
from database_init import db
from dotenv import load_dotenv
import os
from datetime import timedelta
from log import setup_logging
from extensions import cors, csrf, login_manager, migrate
from util.constant import REMEMBER_ME_DAYS
from util.errors import register_error_handlers

# Import để SQLAlchemy biết hết các bảng trước khi create_all / migrate
from models.user import User  # noqa: F401
from models.seller_profile import SellerProfile  # noqa: F401
from models.product import Product  # noqa: F401
from models.order import Order  # noqa: F401
from models.product_order import ProductOrder  # noqa: F401
from models.payment import Payment  # noqa: F401

load_dotenv()


def _database_uri():
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")
    if os.getenv("NAME_DB"):
        return (
            f"mysql://{os.getenv('USER_DB')}:{os.getenv('PASSWORD_DB')}"
            f"@{os.getenv('ADDRESS_DB', 'localhost')}/{os.getenv('NAME_DB')}"
        )
    return "sqlite:///campus_trader.db"


def create_app(config=None):
    app = Flask(__name__)

    @app.context_processor
    def inject_common_env():
        return dict(
            app_name=os.getenv("APP_NAME", "Campus Trader"),
            contact_email=os.getenv("CONTACT_EMAIL", "support@campustrader.app"),
        )

    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", "dev-secret-change-me")
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SECURE"] = (
        os.getenv("SESSION_COOKIE_SECURE", "true").lower() == "true"
    )
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
    app.config["REMEMBER_COOKIE_DURATION"] = timedelta(days=REMEMBER_ME_DAYS)
    app.config["REMEMBER_COOKIE_HTTPONLY"] = True
    app.config["SQLALCHEMY_DATABASE_URI"] = _database_uri()
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    if config:
        app.config.update(config)

    # Cấu hình logging
    setup_logging()

    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)
    cors.init_app(app, resources={r"/api/*": {"origins": "*"}})
    login_manager.init_app(app)
    login_manager.login_view = "auth.login"

    # user_loader được đăng ký khi import session_service
    from service import session_service  # noqa: F401
    from routes.home import home_bp
    from routes.auth import auth_bp
    from routes.admin import admin_bp
    from routes.seller import seller_bp
    from routes.api import api_bp

    # API JSON cho frontend khách, dùng CORS thay vì CSRF token
    csrf.exempt(api_bp)

    app.register_blueprint(home_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(seller_bp)
    app.register_blueprint(api_bp)

    register_error_handlers(app)

    @app.cli.command("seed")
    def seed_command():
        """Tạo bảng và seed admin, user demo, sản phẩm, đơn hàng."""
        from seeder.seed import run_seeders

        db.create_all()
        run_seeders(app)

    return app


if __name__ == "__main__":
    from seeder.seed import run_seeders

    app = create_app()
    with app.app_context():
        db.create_all()
        run_seeders(app)
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", 4000)), debug=True)
