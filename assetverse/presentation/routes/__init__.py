"""
Routes package for AssetVerse
JSON endpoints, organized to mirror the business layer
"""

from flask import request
from assetverse.utils.logger import get_logger

logger = get_logger("assetverse.routes")


def init_app(app):
    """Register all route blueprints and error handlers with the Flask app"""
    logger.debug("Initializing route blueprints")

    from .errors import register_error_handlers
    from .requests import requests_bp
    from .affiliations import affiliations_bp
    from .assets import assets_bp
    from .users import users_bp

    app.register_blueprint(requests_bp)
    app.register_blueprint(affiliations_bp)
    app.register_blueprint(assets_bp)
    app.register_blueprint(users_bp)

    register_error_handlers(app)

    logger.info("Registered request, affiliation, asset and user blueprints")


def json_body():
    """Request JSON as a dict; a missing, malformed or non-object body reads as {}"""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}
