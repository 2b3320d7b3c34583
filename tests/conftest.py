"""
Shared fixtures: an app on in-memory SQLite with a recording fake Cloudinary uploader.
"""

import copy
import io

import pytest

from app import create_app
from config import TestingConfig
from extensions import db
from utils.cache import get_portfolio_cache
from utils.data import fetch_document

CLOUD_URL = 'https://res.cloudinary.com/demo-cloud/image/upload'


def cloud_url(public_id, ext='jpg', version='v1700000000'):
    """Build a delivery URL the way Cloudinary returns it"""
    return f"{CLOUD_URL}/{version}/{public_id}.{ext}"


class FakeUploader:
    """Stands in for `cloudinary.uploader`, recording every call"""

    def __init__(self):
        self.uploads = []
        self.destroyed = []
        self.destroy_result = {'result': 'ok'}
        self.upload_error = None
        self.destroy_error = None

    def upload(self, file, **options):
        if self.upload_error is not None:
            raise self.upload_error
        self.uploads.append(options)
        ext = 'pdf' if options['allowed_formats'] == ['pdf'] else 'jpg'
        return {'secure_url': cloud_url(f"{options['folder']}/asset{len(self.uploads)}", ext)}

    def destroy(self, public_id):
        self.destroyed.append(public_id)
        if self.destroy_error is not None:
            raise self.destroy_error
        return self.destroy_result


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def app(uploader):
    app = create_app(TestingConfig, asset_uploader=uploader)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    client = app.test_client()
    response = client.post('/login', data={
        'username': TestingConfig.ADMIN_USERNAME,
        'password': TestingConfig.ADMIN_PASSWORD,
    })
    assert response.status_code == 302
    return client


@pytest.fixture
def set_document(app):
    """Replace whole sections of the document, persisted and reloaded"""
    def _set(**sections):
        with app.app_context():
            cache = get_portfolio_cache()
            cache.document.update(copy.deepcopy(sections))
            cache.commit()
            return cache.document
    return _set


@pytest.fixture
def stored_document(app):
    """Read the document straight from the store, bypassing the cache"""
    def _read():
        with app.app_context():
            return fetch_document(app.config['PORTFOLIO_DOCUMENT_ID'])
    return _read


@pytest.fixture
def image_file():
    def _make(name='photo.jpg'):
        return (io.BytesIO(b'\x89fake-image-bytes'), name)
    return _make
