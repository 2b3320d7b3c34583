import os
from datetime import timedelta

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing at startup"""


class Config:
    """Base configuration"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SESSION_SECRET', 'CHANGE-THIS-SECRET-KEY-IN-PRODUCTION')
    PERMANENT_SESSION_LIFETIME = timedelta(hours=12)
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Database Settings
    _database_url = os.environ.get('DATABASE_URL')
    if not _database_url:
        pg_user = os.environ.get('PGUSER')
        pg_pass = os.environ.get('PGPASSWORD')
        pg_host = os.environ.get('PGHOST')
        pg_port = os.environ.get('PGPORT')
        pg_db = os.environ.get('PGDATABASE')
        if all([pg_user, pg_pass, pg_host, pg_port, pg_db]):
            _database_url = f"postgresql://{pg_user}:{pg_pass}@{pg_host}:{pg_port}/{pg_db}"

    if _database_url and _database_url.startswith("postgres://"):
        _database_url = _database_url.replace("postgres://", "postgresql://", 1)

    SQLALCHEMY_DATABASE_URI = _database_url or 'sqlite:///portfolio.db'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Portfolio Document Settings
    PORTFOLIO_DOCUMENT_ID = os.environ.get('PORTFOLIO_DOCUMENT_ID', 'portfolio_data')
    PORTFOLIO_SEED_PATH = os.environ.get(
        'PORTFOLIO_SEED_PATH', os.path.join(BASE_DIR, 'data', 'initial_portfolio.json'))

    # Upload Settings
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB

    # Cloudinary Settings
    CLOUDINARY_CLOUD_NAME = os.environ.get('CLOUDINARY_CLOUD_NAME')
    CLOUDINARY_API_KEY = os.environ.get('CLOUDINARY_API_KEY')
    CLOUDINARY_API_SECRET = os.environ.get('CLOUDINARY_API_SECRET')
    ASSET_ROOT_FOLDER = os.environ.get('ASSET_ROOT_FOLDER', 'portfolio')

    # JSON Settings
    JSON_AS_ASCII = False

    # Admin Settings
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    SECRET_KEY = 'testing-secret'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    # In-memory SQLite runs on a StaticPool; pool options do not apply.
    SQLALCHEMY_ENGINE_OPTIONS = {}
    ADMIN_USERNAME = 'admin'
    ADMIN_PASSWORD = 'correct-horse'
    CLOUDINARY_CLOUD_NAME = 'demo-cloud'
    CLOUDINARY_API_KEY = 'test-key'
    CLOUDINARY_API_SECRET = 'test-secret'


REQUIRED_SETTINGS = (
    'ADMIN_USERNAME',
    'ADMIN_PASSWORD',
    'CLOUDINARY_CLOUD_NAME',
    'CLOUDINARY_API_KEY',
    'CLOUDINARY_API_SECRET',
)


# Select configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config():
    """Get configuration based on FLASK_ENV"""
    env = os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])


def validate_config(settings):
    """
    Ensure every required setting is present.

    Args:
        settings (Mapping): A Flask config (or any mapping of settings)

    Raises:
        ConfigurationError: listing all missing settings at once
    """
    missing = [key for key in REQUIRED_SETTINGS if not settings.get(key)]
    if missing:
        raise ConfigurationError(
            f"Missing required configuration: {', '.join(missing)}")
