"""
Extensions Module - Flask extensions shared by the factory and blueprints

`login_manager` owns the admin gate: `utils.decorators.admin_required`
hands unauthenticated requests to `login_manager.unauthorized()`, which
flashes `login_message` and redirects to `login_view`.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

db = SQLAlchemy()

login_manager = LoginManager()
login_manager.login_view = 'auth.login'
login_manager.login_message = 'Please log in to edit the portfolio.'
login_manager.login_message_category = 'error'

__all__ = ['db', 'login_manager']
