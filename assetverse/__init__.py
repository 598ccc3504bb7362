from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
import os
from assetverse.utils.logger import get_logger

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()


def _env_flag(name, default='False'):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def create_app(test_config=None):
    from pathlib import Path

    app = Flask(__name__)

    # Get singleton logger
    logger = get_logger("assetverse")
    logger.info("Initializing Flask application")

    # Configuration
    # SECURITY: Require SECRET_KEY in environment - no fallback
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY')

    # Prefer an explicit DATABASE_URL env var; otherwise keep the SQLite
    # database inside the project's `instance/` directory.
    db_env = os.environ.get('DATABASE_URL')
    if db_env:
        app.config['SQLALCHEMY_DATABASE_URI'] = db_env
    else:
        base_dir = Path(__file__).parent.parent
        instance_dir = base_dir / 'instance'
        instance_dir.mkdir(parents=True, exist_ok=True)
        default_db_path = instance_dir / 'assetverse.db'
        app.config['SQLALCHEMY_DATABASE_URI'] = f"sqlite:///{str(default_db_path.resolve())}"

    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    # Approval cascade retry policy (transient storage errors only)
    app.config['APPROVAL_MAX_RETRIES'] = int(os.environ.get('APPROVAL_MAX_RETRIES', '3'))
    app.config['APPROVAL_RETRY_BACKOFF'] = float(os.environ.get('APPROVAL_RETRY_BACKOFF', '0.05'))

    # Seats granted to a newly registered HR account
    app.config['DEFAULT_PACKAGE_LIMIT'] = int(os.environ.get('DEFAULT_PACKAGE_LIMIT', '5'))

    app.config['DEBUG_SQL'] = _env_flag('DEBUG_SQL')

    if test_config is not None:
        app.config.update(test_config)

    if not app.config['SECRET_KEY']:
        logger.critical("SECRET_KEY not set in environment! Application cannot start.")
        raise RuntimeError("SECRET_KEY environment variable is required")

    if app.config['DEBUG_SQL']:
        app.config['SQLALCHEMY_ECHO'] = True

    logger.debug(f"Database configured: {app.config['SQLALCHEMY_DATABASE_URI'].split(':', 1)[0]}")

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)

    logger.debug("Extensions initialized")

    # Import models to ensure they're registered with SQLAlchemy
    from assetverse.data.core.user_info.user import User
    from assetverse.data.core.user_info.payment import Payment
    from assetverse.data.core.asset_info.asset import Asset
    from assetverse.data.requests.asset_request import AssetRequest
    from assetverse.data.requests.assignment import Assignment
    from assetverse.data.affiliations.employee_affiliation import EmployeeAffiliation

    logger.debug("Models imported and registered")

    # Register blueprints
    from assetverse.presentation.routes import init_app as init_routes
    init_routes(app)

    @app.get('/')
    def index():
        return "AssetVerse Server is Running"

    logger.info("Flask application initialization complete")

    return app
