# app.py
import logging

from flask import Flask, jsonify

from config import Config
from extensions import db, login_manager


def configure_logging(app):
    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app)

    # Initialize db and login
    db.init_app(app)
    login_manager.init_app(app)

    from actions import blueprints
    from auth import auth_bp
    from pages import pages_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(pages_bp)
    for bp in blueprints:
        app.register_blueprint(bp)

    @app.route('/')
    def home():
        return jsonify(name="pocketbook", status="ok")

    @app.errorhandler(404)
    def not_found(err):
        return jsonify(success=False, error="Not found"), 404

    @app.errorhandler(405)
    def method_not_allowed(err):
        return jsonify(success=False, error="Method not allowed"), 405

    # Import models after initializing db
    with app.app_context():
        import models  # noqa: F401
        db.create_all()

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
