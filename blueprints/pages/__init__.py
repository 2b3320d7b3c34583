"""
Pages Blueprint - Public portfolio pages
Handles: Home, Projects, Certificates, About
"""

from flask import Blueprint

pages_bp = Blueprint('pages', __name__, url_prefix='')

from . import routes
