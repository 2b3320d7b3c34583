"""
Auth Routes - Operator login and logout
"""

from flask import render_template, session, redirect, url_for, request, current_app
from flask_login import login_user, logout_user, current_user
from utils.security import check_admin_login, get_client_ip
from models import AdminUser
from . import auth_bp


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Operator login"""
    if request.method == 'GET':
        if current_user.is_authenticated:
            return redirect(url_for('admin.index'))
        return render_template('login.html', error=None)

    username = request.form.get('username', '')
    password = request.form.get('password', '')

    if check_admin_login(username, password):
        # Signed, expiring cookie bound to this client only
        session.permanent = True
        login_user(AdminUser(username))
        current_app.logger.info(f"Admin login from {get_client_ip()}")
        return redirect(url_for('admin.index'))

    current_app.logger.warning(f"Failed login attempt from {get_client_ip()}")
    return render_template('login.html', error='Invalid username or password.')


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Logout current client"""
    logout_user()
    return redirect(url_for('pages.index'))
