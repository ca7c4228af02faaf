"""
Hostal - Room Booking Backend
Flask application factory and initialization
"""

import os
import sqlite3
import click
import logging
from flask import Flask, g, jsonify
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

# Load environment variables
load_dotenv()

# Import configuration
from config import config

# Import extensions
from extensions import csrf

# Import database functions
from database import close_db, init_db

from utils.api_response import api_error
from utils.errors import AppError
from utils.events import EventPublisher
from utils.messages import get_message


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config[config_name])

    # Make sure the database directory exists
    db_dir = os.path.dirname(app.config['DATABASE_PATH'])
    if db_dir and not os.path.exists(db_dir):
        os.makedirs(db_dir)

    # Initialize extensions
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_cli_commands(app)

    # Register teardown handlers
    register_teardown_handlers(app)

    # Configure logging
    configure_logging(app)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    # Initialize CSRF Protection
    csrf.init_app(app)
    # One event hub per app; mutation routes pass it into the models
    EventPublisher(app.config.get('EVENT_BUFFER_SIZE', 200)).init_app(app)


def register_blueprints(app):
    """Register Flask blueprints."""
    from blueprints.api import api_bp

    app.register_blueprint(api_bp, url_prefix='/api')

    @app.route('/health')
    def health():
        """Root health check for load balancers."""
        return jsonify({'status': 'OK', 'app': app.config.get('APP_NAME', 'Hostal')})


def register_error_handlers(app):
    """Register error handlers. Every error answers with the JSON envelope."""

    @app.errorhandler(AppError)
    def app_error(error):
        """Handle domain errors (validation, not found, conflict)."""
        if error.status_code >= 500:
            app.logger.error(f'Internal error: {error}', exc_info=error.cause or error)
            return api_error(get_message('internal_error'), status=error.status_code)
        app.logger.info(f'{type(error).__name__}: {error.message}')
        return api_error(error.message, status=error.status_code, **error.details)

    @app.errorhandler(sqlite3.Error)
    def storage_error(error):
        """Handle storage failures: roll back, log full detail, answer generically."""
        db = g.get('db')
        if db and db.in_transaction:
            db.rollback()
        app.logger.exception(f'Storage failure: {error}')
        return api_error(get_message('internal_error'), status=500)

    @app.errorhandler(HTTPException)
    def http_error(error):
        """Handle werkzeug HTTP errors (404, 405, CSRF 400...)."""
        messages = {
            404: get_message('resource_not_found'),
            405: get_message('method_not_allowed')
        }
        return api_error(messages.get(error.code, error.description), status=error.code)

    @app.errorhandler(Exception)
    def internal_error(error):
        """Handle anything unexpected."""
        db = g.get('db')
        if db and db.in_transaction:
            db.rollback()
        app.logger.exception(f'Unhandled error: {error}')
        return api_error(get_message('internal_error'), status=500)


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    def init_db_command():
        """Initialize database with schema and seed data."""
        click.echo('Initializing database...')
        with app.app_context():
            init_db()
        click.echo('Database initialized successfully!')

    @app.cli.command('check-integrity')
    def check_integrity_command():
        """Report overlapping ACTIVE reservations on the same room."""
        from models.room import find_overlapping_reservations

        with app.app_context():
            issues = find_overlapping_reservations()

        if not issues:
            click.echo('No overlapping reservations found.')
            return

        for issue in issues:
            click.echo(
                f"Room {issue['room_number']}: reservation {issue['first_id']} "
                f"{issue['first_window'][0]} - {issue['first_window'][1]} overlaps "
                f"reservation {issue['second_id']} "
                f"{issue['second_window'][0]} - {issue['second_window'][1]}",
                err=True
            )
        raise SystemExit(1)


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connection at end of request."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = logging.FileHandler('logs/hostal.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        logging.getLogger('utils.events').addHandler(file_handler)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Hostal startup')
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(host='0.0.0.0', debug=True)
