"""
Portfolio Site - Application Factory

Initializes the Flask application with its extensions, configuration and
hooks, loads the portfolio document into memory, and registers the public,
auth and admin blueprints. Route handling lives in the blueprints.
"""

import cloudinary
import cloudinary.uploader
from flask import Flask, render_template, redirect, url_for, request, abort, current_app
from config import get_config, validate_config
from extensions import db, login_manager
from models import AdminUser
from utils.assets import AssetManager
from utils.cache import PortfolioCache, get_portfolio_cache

from blueprints.auth import auth_bp
from blueprints.pages import pages_bp
from blueprints.admin import admin_bp


# Endpoints that must answer even before the document is in memory
UNGUARDED_ENDPOINTS = {'static', 'health_check'}


def create_app(config_class=None, asset_uploader=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_class (type, optional): Configuration class; defaults to FLASK_ENV selection
        asset_uploader (optional): Object exposing Cloudinary's `upload`/`destroy`;
            defaults to `cloudinary.uploader`

    Returns:
        Flask: Configured Flask application instance

    Raises:
        ConfigurationError: a required setting is missing
        DocumentStoreError: the document store is unreachable
    """
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config_class or get_config())
    validate_config(app.config)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    initialize_extensions(app)
    initialize_assets(app, asset_uploader)
    initialize_portfolio(app)

    register_blueprints(app)
    register_error_handlers(app)
    register_hooks(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {'status': 'ok', 'document_loaded': get_portfolio_cache().is_loaded}, 200

    return app


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    db.init_app(app)
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_admin(user_id):
        if user_id and user_id == current_app.config.get('ADMIN_USERNAME'):
            return AdminUser(user_id)
        return None

    # Create tables if they don't exist; an unreachable database is fatal
    with app.app_context():
        from sqlalchemy import text
        db.create_all()
        db.session.execute(text('SELECT 1'))
        app.logger.info("✓ Database initialized successfully")


def initialize_assets(app, asset_uploader=None):
    """Configure Cloudinary and attach the asset manager"""
    if asset_uploader is None:
        cloudinary.config(
            cloud_name=app.config['CLOUDINARY_CLOUD_NAME'],
            api_key=app.config['CLOUDINARY_API_KEY'],
            api_secret=app.config['CLOUDINARY_API_SECRET'],
            secure=True
        )
        asset_uploader = cloudinary.uploader

    app.extensions['asset_manager'] = AssetManager(
        asset_uploader, root_folder=app.config.get('ASSET_ROOT_FOLDER', 'portfolio'))


def initialize_portfolio(app):
    """Load the portfolio document into the process-local cache"""
    cache = PortfolioCache(app.config['PORTFOLIO_DOCUMENT_ID'],
                           seed_path=app.config.get('PORTFOLIO_SEED_PATH'))
    app.extensions['portfolio_cache'] = cache

    with app.app_context():
        cache.load()
    app.logger.info(f"✓ Portfolio document {cache.document_id} loaded")


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(auth_bp)
    app.register_blueprint(pages_bp)
    app.register_blueprint(admin_bp)


def register_error_handlers(app):
    """Register custom error handlers"""

    @app.errorhandler(404)
    def page_not_found(e):
        return render_template('404.html'), 404

    @app.errorhandler(500)
    def internal_server_error(e):
        app.logger.error(f"Server Error: {str(e)}")
        return render_template('500.html'), 500

    @app.errorhandler(503)
    def service_unavailable(e):
        return render_template('503.html'), 503

    @app.errorhandler(413)
    def file_too_large(e):
        return redirect(url_for('admin.index', uploadError='File is too large. Maximum size is 16MB.'))


def register_hooks(app):
    """Register request/response hooks and context processors"""

    @app.before_request
    def ensure_document_loaded():
        """Reject requests while the portfolio document is not in memory"""
        if request.endpoint in UNGUARDED_ENDPOINTS:
            return None
        if not get_portfolio_cache().is_loaded:
            abort(503)
        return None

    @app.context_processor
    def inject_global_vars():
        from datetime import datetime
        return {'current_year': datetime.now().year}

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response

