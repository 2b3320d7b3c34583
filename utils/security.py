"""
Security Module - Admin credentials and client identification
"""

from flask import request, current_app
from werkzeug.security import generate_password_hash, check_password_hash


def get_client_ip():
    """Get real client IP address"""
    return request.environ.get('HTTP_X_FORWARDED_FOR',
                              request.environ.get('REMOTE_ADDR', 'unknown'))


def get_admin_credentials():
    """Load the operator credentials from the app configuration"""
    username = current_app.config.get('ADMIN_USERNAME')
    password = current_app.config.get('ADMIN_PASSWORD')
    if not username or not password:
        return {'username': None, 'password_hash': None}
    return {
        'username': username,
        'password_hash': generate_password_hash(password)
    }


def verify_password(password, password_hash):
    """Verify password against hash"""
    if not password or not password_hash:
        return False
    return check_password_hash(password_hash, password)


def check_admin_login(username, password):
    """Return True only when both username and password match the configured operator"""
    credentials = get_admin_credentials()
    if not credentials['username'] or username != credentials['username']:
        return False
    return verify_password(password, credentials['password_hash'])


__all__ = [
    'get_client_ip',
    'get_admin_credentials',
    'verify_password',
    'check_admin_login',
]
