"""
Admin Blueprint - Hidden content management panel
Handles: Carousel, About, Projects, Certificates, Gallery, Education, Footer
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')

from . import routes
