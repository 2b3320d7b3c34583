"""
Assets Module - Uploads and deletes media on Cloudinary

Every record that points at an uploaded file stores the file's secure URL.
The Cloudinary public id is derived from that URL when the file has to go.
Deletion is best-effort: failures are logged and never block the document
change that triggered them.
"""

import re
from enum import Enum
from flask import current_app


class AssetUploadError(Exception):
    """Raised when a file is rejected or the upload fails"""


class DeleteOutcome(Enum):
    SKIPPED = 'skipped'
    DELETED = 'deleted'
    NOT_FOUND = 'not_found'
    FAILED = 'failed'


IMAGE_FORMATS = ('jpg', 'png', 'jpeg')
DOCUMENT_FORMATS = ('pdf',)
IMAGE_TRANSFORMATION = [{'quality': 'auto', 'fetch_format': 'auto'}]

# category -> Cloudinary sub-folder
CATEGORY_FOLDERS = {
    'carousel': 'Carousel',
    'story': 'Story',
    'project': 'Project',
    'gallery': 'Gallery',
    'education': 'Education',
    'pdf': 'Pdf',
}
DOCUMENT_CATEGORIES = {'pdf'}

ASSET_HOST_MARKER = 'cloudinary.com'
_PUBLIC_ID_PATTERN = re.compile(r'/upload/(?:v\d+/)?(.*)')


def extract_public_id(file_url):
    """
    Derive the Cloudinary public id from a delivery URL

    .../upload/v1712345678/portfolio/Gallery/abc123.jpg -> portfolio/Gallery/abc123

    Returns:
        str | None: None if the URL does not belong to Cloudinary or has no
        recognizable public id
    """
    if not file_url or ASSET_HOST_MARKER not in file_url:
        return None

    match = _PUBLIC_ID_PATTERN.search(file_url)
    if not match or not match.group(1):
        return None

    public_id_with_extension = match.group(1)
    if '.' not in public_id_with_extension:
        return None
    return public_id_with_extension.rsplit('.', 1)[0] or None


def allowed_formats_for(category):
    return DOCUMENT_FORMATS if category in DOCUMENT_CATEGORIES else IMAGE_FORMATS


def allowed_file(filename, formats):
    """Check if file extension is allowed"""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in formats


class AssetManager:
    """Thin wrapper over the Cloudinary uploader API"""

    def __init__(self, uploader, root_folder='portfolio'):
        self.uploader = uploader
        self.root_folder = root_folder

    def folder_for(self, category):
        return f"{self.root_folder}/{CATEGORY_FOLDERS[category]}"

    def upload(self, category, file_storage):
        """
        Upload a file into the category folder

        Args:
            category (str): One of CATEGORY_FOLDERS
            file_storage (FileStorage): The uploaded file from the request

        Returns:
            str: The secure URL of the stored asset

        Raises:
            AssetUploadError: wrong category, missing file, disallowed format,
            or a failure reported by Cloudinary
        """
        if category not in CATEGORY_FOLDERS:
            raise AssetUploadError(f"Unknown upload category: {category}")
        if not file_storage or not file_storage.filename:
            raise AssetUploadError('No file was provided.')

        formats = allowed_formats_for(category)
        if not allowed_file(file_storage.filename, formats):
            raise AssetUploadError(
                f"Unsupported file type. Allowed: {', '.join(formats)}")

        options = {
            'folder': self.folder_for(category),
            'allowed_formats': list(formats),
        }
        if category not in DOCUMENT_CATEGORIES:
            options['transformation'] = IMAGE_TRANSFORMATION

        try:
            result = self.uploader.upload(file_storage.stream, **options)
        except Exception as e:
            current_app.logger.error(f"✗ Cloudinary upload to {options['folder']} failed: {str(e)}")
            raise AssetUploadError(str(e)) from e

        url = (result or {}).get('secure_url')
        if not url:
            raise AssetUploadError('Upload did not return a URL.')
        current_app.logger.info(f"✓ Uploaded asset to {options['folder']}: {url}")
        return url

    def delete(self, file_url):
        """Best-effort removal of the asset behind a stored URL"""
        public_id = extract_public_id(file_url)
        if not public_id:
            return DeleteOutcome.SKIPPED

        try:
            result = self.uploader.destroy(public_id)
        except Exception as e:
            current_app.logger.error(f"Cloudinary deletion error for {public_id}: {str(e)}")
            return DeleteOutcome.FAILED

        status = (result or {}).get('result')
        if status == 'ok':
            current_app.logger.info(f"Successfully deleted Cloudinary asset: {public_id}")
            return DeleteOutcome.DELETED
        if status == 'not found':
            current_app.logger.warning(f"Cloudinary asset not found: {public_id}")
            return DeleteOutcome.NOT_FOUND

        current_app.logger.error(f"Failed to delete Cloudinary asset {public_id}: {result}")
        return DeleteOutcome.FAILED


def get_asset_manager():
    """Return the asset manager owned by the current application"""
    return current_app.extensions['asset_manager']


__all__ = [
    'AssetManager',
    'AssetUploadError',
    'DeleteOutcome',
    'extract_public_id',
    'get_asset_manager',
]
