# synciot/app/__init__.py
import logging

from flask import Flask, jsonify, request
from flask_login import LoginManager
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import Config
from synciot.db import db
from synciot.models import User
from synciot.utils.errors import SyncIoTError

logger = logging.getLogger(__name__)

login_manager = LoginManager()
migrate = Migrate()


def _register_auth(app: Flask):
    from synciot.services.auth_service import AuthService

    @login_manager.user_loader
    def load_user(user_id: str):
        return db.session.get(User, int(user_id))

    @login_manager.request_loader
    def load_user_from_request(req):
        header = req.headers.get("Authorization", "")
        if header.startswith("Bearer "):
            return AuthService.user_from_token(header[len("Bearer "):].strip())
        return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"success": False, "message": "Authentication required"}), 401


def _register_error_handlers(app: Flask):

    @app.errorhandler(SyncIoTError)
    def handle_domain_error(error: SyncIoTError):
        if error.status_code >= 500:
            logger.error("%s %s -> %s: %s", request.method, request.path, error.status_code, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        message = "Route not found" if error.code == 404 else error.description
        return jsonify({"success": False, "message": message}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        logger.exception("Erro não tratado em %s %s", request.method, request.path)
        return jsonify({"success": False, "message": "Internal server error"}), 500


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    _register_auth(app)
    _register_error_handlers(app)

    # Blueprints
    from synciot.views.routes.main_routes import main as main_bp
    from synciot.views.routes.auth_routes import auth_bp
    from synciot.views.routes.robot_routes import robots_bp
    from synciot.views.routes.sensor_routes import sensors_bp
    from synciot.views.routes.rover_routes import rover_bp
    from synciot.views.routes.sensor_log_routes import sensor_logs_bp
    from synciot.views.routes.alert_routes import alerts_bp
    from synciot.views.routes.dashboard_routes import dashboard_bp
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(robots_bp)
    app.register_blueprint(sensors_bp)
    app.register_blueprint(rover_bp)
    app.register_blueprint(sensor_logs_bp)
    app.register_blueprint(alerts_bp)
    app.register_blueprint(dashboard_bp)

    from synciot.simulations.seed import seed_command
    app.cli.add_command(seed_command)

    return app
