import os

from flask import Flask

from .config import config_by_name
from .extensions import cors, ma
from .services.nas_service import NasUploadSession
from .storage import SubmissionStore


def create_app(config_name=None, store=None, nas_session=None, config_overrides=None):
    app = Flask(__name__, instance_relative_config=False)
    env = config_name or os.getenv("FLASK_ENV", "development")
    app.config.from_object(config_by_name.get(env, config_by_name["development"]))
    if config_overrides:
        app.config.update(config_overrides)

    # initialize extensions
    ma.init_app(app)
    origins = [o.strip() for o in app.config["CORS_ORIGINS"].split(",")]
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": origins}},
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    )

    os.makedirs(app.config["UPLOAD_FOLDER"], exist_ok=True)

    app.extensions["submission_store"] = store if store is not None else SubmissionStore(
        filter_field=app.config["SUBMISSION_FILTER_FIELD"],
        all_sentinel=app.config["ALL_SENTINEL"],
    )
    app.extensions["nas_session"] = (
        nas_session if nas_session is not None else NasUploadSession.from_config(app.config)
    )

    # register blueprints
    from prepay.routes.submission_routes import bp as submission_bp
    from prepay.routes.health_routes import bp as health_bp

    app.register_blueprint(submission_bp)
    app.register_blueprint(health_bp)

    # error handlers to match required error format
    from prepay.utils.exceptions import ServiceError
    from prepay.utils.response_formatter import error_response

    @app.errorhandler(ServiceError)
    def service_error(e):
        return error_response(e.code, e.message, e.details, status=e.status)

    @app.errorhandler(400)
    def bad_request(e):
        return error_response("BAD_REQUEST", str(e), status=400)

    @app.errorhandler(404)
    def not_found(e):
        return error_response("NOT_FOUND", "Resource not found", status=404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return error_response("METHOD_NOT_ALLOWED", str(e), status=405)

    @app.errorhandler(413)
    def too_large(e):
        return error_response(
            "FILE_TOO_LARGE",
            f"파일 크기는 {app.config['MAX_UPLOAD_SIZE'] // (1024 * 1024)}MB를 초과할 수 없습니다.",
            status=413,
        )

    @app.errorhandler(500)
    def server_error(e):
        return error_response("SERVER_ERROR", "Internal server error", status=500)

    return app
