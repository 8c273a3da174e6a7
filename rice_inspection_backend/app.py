# app.py
"""
Flask application factory
Rice inspection backend: standards, inspections, history and reports
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from flask import Flask
from flask_cors import CORS

from config.settings import Config
from api import init_services
from api.routes import (
    health_bp,
    standards_bp,
    inspections_bp
)

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

LOG_FILENAME = 'backend.log'


def _configure_file_logging(log_folder):
    """
    Persist logs to a rotating file in the configured LOG_FOLDER
    Only one file handler is attached per log path
    """
    try:
        os.makedirs(log_folder, exist_ok=True)
        log_path = os.path.abspath(os.path.join(log_folder, LOG_FILENAME))

        root_logger = logging.getLogger()
        for existing in root_logger.handlers:
            if getattr(existing, 'baseFilename', None) == log_path:
                return

        handler = RotatingFileHandler(
            log_path,
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
            encoding='utf-8'
        )
        handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )

        root_logger.addHandler(handler)
        logger.info(f"File logging enabled at {log_path}")
    except OSError as exc:
        logger.warning(f"Failed to initialize file logging: {exc}")


def create_app(config_object=Config):
    """
    Application factory pattern
    Creates and configures Flask application with all routes

    Args:
        config_object: Config class (or subclass) to load

    Returns:
        Flask: Configured Flask application
    """
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config_object)

    _configure_file_logging(app.config['LOG_FOLDER'])

    # Enable CORS
    CORS(app, origins=app.config['CORS_ORIGINS'])

    # Create necessary directories
    logger.info("Creating application directories...")
    config_object.create_directories()

    init_services(app)

    # Register blueprints
    logger.info("Registering blueprints...")
    app.register_blueprint(health_bp)
    app.register_blueprint(standards_bp)
    app.register_blueprint(inspections_bp)

    logger.info("Application initialized successfully")
    logger.info(f"Standards file: {app.config['STANDARDS_FILE']}")
    logger.info(f"Inspection history stored in: {app.config['HISTORY_FOLDER']}")
    if app.config['STRICT_VALIDATION']:
        logger.info("Strict input validation enabled")

    return app


if __name__ == "__main__":
    app = create_app()
    logger.info(f"Starting Flask application on {Config.HOST}:{Config.PORT}...")
    logger.info(f"Debug mode: {Config.DEBUG}")

    try:
        app.run(
            host=Config.HOST,
            port=Config.PORT,
            debug=Config.DEBUG
        )
    except Exception as exc:
        logger.exception(f"Backend failed to start: {exc}")
        raise
