"""
Decorators Module - Authentication decorators
"""

from functools import wraps
from flask_login import current_user

from extensions import login_manager


def admin_required(f):
    """Decorator to require the logged-in site operator"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            # Flashes login_message and redirects to login_view
            return login_manager.unauthorized()
        return f(*args, **kwargs)
    return decorated_function
