"""
Data Management Module - Handles loading and saving the portfolio document
The whole site lives in one row of `portfolio_documents`, keyed by a fixed id.
"""

import copy
import json
import os
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from models import PortfolioDocument


class DocumentStoreError(RuntimeError):
    """Raised when the document store cannot be read or written"""


# Top-level collections every page and editor expects to find
LIST_SECTIONS = ('carousel', 'education', 'certificates', 'gallery', 'projects')


def get_default_portfolio_data():
    """Return the empty document skeleton used when no seed template exists"""
    return {
        'carousel': [],
        'about': {
            'summary': '',
            'fullStory': '',
            'skills': [],
            'photoUrl': ''
        },
        'projectSummary': {
            'title': '',
            'paragraph1': '',
            'paragraph2': '',
            'buttonLink': '',
            'image': ''
        },
        'education': [],
        'certificates': [],
        'gallery': [],
        'projects': []
    }


def normalize_document(content):
    """
    Fill in any missing top-level section so templates and editors can rely on it.
    `footerInfo` is deliberately left alone; it is created on first write.
    """
    document = dict(content or {})
    defaults = get_default_portfolio_data()
    for key in LIST_SECTIONS:
        if not isinstance(document.get(key), list):
            document[key] = []
    for key in ('about', 'projectSummary'):
        section = document.get(key)
        if not isinstance(section, dict):
            document[key] = defaults[key]
    if not isinstance(document['about'].get('skills'), list):
        document['about']['skills'] = []
    for project in document['projects']:
        if isinstance(project, dict) and not isinstance(project.get('images'), list):
            project['images'] = []
    return document


def load_seed_document(path):
    """
    Load the seed template for a fresh deployment

    Args:
        path (str): Path to a JSON file holding the initial document

    Returns:
        dict: The seed document (the default skeleton if the file is absent)
    """
    if not path or not os.path.exists(path):
        current_app.logger.warning(f"Seed template not found at {path}, using empty skeleton")
        return get_default_portfolio_data()

    with open(path, 'r', encoding='utf-8') as f:
        seed = json.load(f)
    seed.pop('_id', None)
    return normalize_document(seed)


def fetch_document(document_id):
    """
    Find the document by its fixed identifier

    Always re-reads the row so the result reflects what the store holds,
    never a stale identity-map copy.

    Returns:
        dict | None: A detached copy of the document content
    """
    try:
        record = db.session.get(PortfolioDocument, document_id, populate_existing=True)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error loading document {document_id}: {str(e)}")
        raise DocumentStoreError(f"Could not load document {document_id}") from e

    if record is None:
        return None
    return normalize_document(copy.deepcopy(record.content))


def persist_document(document_id, content):
    """Upsert the whole document under its fixed identifier"""
    try:
        record = db.session.get(PortfolioDocument, document_id)
        if record is None:
            record = PortfolioDocument(id=document_id)
            db.session.add(record)
        record.content = copy.deepcopy(content)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error saving document {document_id}: {str(e)}")
        raise DocumentStoreError(f"Could not save document {document_id}") from e


__all__ = [
    'DocumentStoreError',
    'get_default_portfolio_data',
    'normalize_document',
    'load_seed_document',
    'fetch_document',
    'persist_document',
]
