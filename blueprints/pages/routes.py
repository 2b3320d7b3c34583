"""
Pages Routes - Public portfolio pages rendered from the held document
"""

from flask import render_template
from utils.cache import get_portfolio_cache
from . import pages_bp


@pages_bp.route('/')
def index():
    """Home page - carousel, about summary, project summary, gallery"""
    return render_template('index.html', portfolio=get_portfolio_cache().document)


@pages_bp.route('/projects')
def projects():
    return render_template('projects.html', portfolio=get_portfolio_cache().document)


@pages_bp.route('/certificates')
def certificates():
    return render_template('certificates.html', portfolio=get_portfolio_cache().document)


@pages_bp.route('/about')
def about():
    return render_template('about.html', portfolio=get_portfolio_cache().document)
