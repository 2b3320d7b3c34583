"""
Admin Routes - Content management for the portfolio document
Every mutating route edits the held document, commits it when something
changed, and redirects back to the matching section of the admin panel.
"""

from flask import render_template, redirect, url_for, request, current_app
from utils.assets import AssetUploadError, get_asset_manager
from utils.cache import get_portfolio_cache
from utils.data import DocumentStoreError
from utils.decorators import admin_required
from utils import editors
from utils.editors import pick
from . import admin_bp


SAVE_FAILED_MESSAGE = 'Database save failed after successful file upload.'


def _back_to(section):
    return redirect(url_for('admin.index', _anchor=section))


def _upload_failed(label, error):
    current_app.logger.error(f"✗ {label} upload error: {str(error)}")
    return redirect(url_for('admin.index', uploadError=f'{label} upload failed: {str(error)}'))


@admin_bp.route('', methods=['GET'])
@admin_required
def index():
    """Admin panel"""
    return render_template('admin.html',
                           portfolio=get_portfolio_cache().document,
                           upload_error=request.args.get('uploadError'))


# ---------------- Carousel ----------------

@admin_bp.route('/update-carousel/<position>', methods=['POST'])
@admin_required
def update_carousel(position):
    cache = get_portfolio_cache()
    try:
        changed = editors.update_carousel_slide(
            cache.document, position, pick(request.form, editors.CAROUSEL_FIELDS),
            request.files.get('carouselImage'), get_asset_manager())
    except AssetUploadError as e:
        return _upload_failed('Carousel', e)

    if changed:
        cache.commit()
    return _back_to('carousel')


# ---------------- About & project summary ----------------

@admin_bp.route('/update-text', methods=['POST'])
@admin_required
def update_text():
    cache = get_portfolio_cache()
    editors.update_about_text(cache.document,
                              request.form.get('aboutSummary', ''),
                              request.form.get('aboutFull', ''),
                              request.form.get('aboutSkills', ''))
    cache.commit()
    return _back_to('general')


@admin_bp.route('/upload-photo', methods=['POST'])
@admin_required
def upload_photo():
    cache = get_portfolio_cache()
    try:
        changed = editors.replace_profile_photo(
            cache.document, request.files.get('profilePhoto'), get_asset_manager())
    except AssetUploadError as e:
        return _upload_failed('Profile photo', e)

    if changed:
        cache.commit()
    return _back_to('general')


@admin_bp.route('/update-project-summary', methods=['POST'])
@admin_required
def update_project_summary():
    cache = get_portfolio_cache()
    try:
        editors.update_project_summary(
            cache.document, pick(request.form, editors.PROJECT_SUMMARY_FIELDS),
            request.files.get('projectSummaryImage'), get_asset_manager())
    except AssetUploadError as e:
        return _upload_failed('Project summary image', e)

    cache.commit()
    return _back_to('general')


# ---------------- Projects ----------------

@admin_bp.route('/add-project', methods=['POST'])
@admin_required
def add_project():
    cache = get_portfolio_cache()
    editors.add_project(cache.document, pick(request.form, editors.PROJECT_FIELDS))
    cache.commit()
    return _back_to('projects')


@admin_bp.route('/update-project/<project_id>', methods=['POST'])
@admin_required
def update_project(project_id):
    cache = get_portfolio_cache()
    if editors.update_project(cache.document, project_id, pick(request.form, editors.PROJECT_FIELDS)):
        cache.commit()
    return _back_to('projects')


@admin_bp.route('/delete-project/<project_id>', methods=['POST'])
@admin_required
def delete_project(project_id):
    cache = get_portfolio_cache()
    if editors.remove_project(cache.document, project_id, get_asset_manager()):
        cache.commit()
    return _back_to('projects')


@admin_bp.route('/upload-project-image/<project_id>', methods=['POST'])
@admin_required
def upload_project_image(project_id):
    cache = get_portfolio_cache()
    try:
        changed = editors.add_project_image(
            cache.document, project_id, request.files.get('projectImage'), get_asset_manager())
    except AssetUploadError as e:
        return _upload_failed('Project image', e)

    if changed:
        cache.commit()
    return _back_to('projects')


@admin_bp.route('/delete-project-image/<project_id>', methods=['POST'])
@admin_required
def delete_project_image(project_id):
    cache = get_portfolio_cache()
    if editors.remove_project_image(cache.document, project_id,
                                    request.form.get('imageUrl'), get_asset_manager()):
        cache.commit()
    return _back_to('projects')


# ---------------- Certificates ----------------

@admin_bp.route('/upload-certificate', methods=['POST'])
@admin_required
def upload_certificate():
    cache = get_portfolio_cache()
    try:
        changed = editors.add_certificate(
            cache.document, pick(request.form, editors.CERTIFICATE_FIELDS),
            request.files.get('certificateFile'), get_asset_manager())
    except AssetUploadError as e:
        return _upload_failed('Certificate', e)

    if changed:
        cache.commit()
    return _back_to('certificates')


@admin_bp.route('/update-certificate/<certificate_id>', methods=['POST'])
@admin_required
def update_certificate(certificate_id):
    cache = get_portfolio_cache()
    try:
        changed = editors.update_certificate(
            cache.document, certificate_id, pick(request.form, editors.CERTIFICATE_FIELDS),
            request.files.get('certificateFile'), get_asset_manager())
    except AssetUploadError as e:
        return _upload_failed('Certificate', e)

    if changed:
        cache.commit()
    return _back_to('certificates')


@admin_bp.route('/delete-certificate/<certificate_id>', methods=['POST'])
@admin_required
def delete_certificate(certificate_id):
    cache = get_portfolio_cache()
    if editors.remove_certificate(cache.document, certificate_id, get_asset_manager()):
        cache.commit()
    return _back_to('certificates')


# ---------------- Gallery ----------------

@admin_bp.route('/upload-gallery', methods=['POST'])
@admin_required
def upload_gallery():
    cache = get_portfolio_cache()
    try:
        changed = editors.add_gallery_photo(
            cache.document, request.form.get('caption', ''),
            request.files.get('galleryImage'), get_asset_manager())
    except AssetUploadError as e:
        return _upload_failed('Gallery photo', e)

    if changed:
        try:
            cache.commit()
        except DocumentStoreError as e:
            current_app.logger.error(f"✗ Database save error after gallery upload: {str(e)}")
            return SAVE_FAILED_MESSAGE, 500
        current_app.logger.info("✓ Gallery photo saved")
    return _back_to('gallery')


@admin_bp.route('/update-gallery-photo/<photo_id>', methods=['POST'])
@admin_required
def update_gallery_photo(photo_id):
    cache = get_portfolio_cache()
    try:
        changed = editors.replace_gallery_photo(
            cache.document, photo_id, request.files.get('galleryImage'), get_asset_manager())
    except AssetUploadError as e:
        return _upload_failed('Gallery photo replacement', e)

    if changed:
        try:
            cache.commit()
        except DocumentStoreError as e:
            current_app.logger.error(f"✗ Database save error after gallery photo update: {str(e)}")
            return SAVE_FAILED_MESSAGE, 500
        current_app.logger.info(f"✓ Gallery photo with ID {photo_id} URL updated.")
    return _back_to('gallery')


@admin_bp.route('/update-gallery-caption/<photo_id>', methods=['POST'])
@admin_required
def update_gallery_caption(photo_id):
    cache = get_portfolio_cache()
    if editors.update_gallery_caption(cache.document, photo_id, request.form.get('caption', '')):
        cache.commit()
    return _back_to('gallery')


@admin_bp.route('/delete-gallery-photo/<photo_id>', methods=['POST'])
@admin_required
def delete_gallery_photo(photo_id):
    cache = get_portfolio_cache()
    if editors.remove_gallery_photo(cache.document, photo_id, get_asset_manager()):
        cache.commit()
    return _back_to('gallery')


# ---------------- Education ----------------

@admin_bp.route('/add-education', methods=['POST'])
@admin_required
def add_education():
    cache = get_portfolio_cache()
    try:
        changed = editors.add_education(
            cache.document, pick(request.form, editors.EDUCATION_FIELDS),
            request.files.get('educationLogo'), get_asset_manager())
    except AssetUploadError as e:
        return _upload_failed('Education logo', e)

    if changed:
        cache.commit()
    return _back_to('general')


@admin_bp.route('/delete-education/<identifier>', methods=['POST'])
@admin_required
def delete_education(identifier):
    cache = get_portfolio_cache()
    if editors.remove_education(cache.document, identifier, get_asset_manager()):
        cache.commit()
    return _back_to('general')


# ---------------- Footer ----------------

@admin_bp.route('/update-footer', methods=['POST'])
@admin_required
def update_footer():
    cache = get_portfolio_cache()
    try:
        editors.update_footer(cache.document, pick(request.form, editors.FOOTER_FIELDS))
        cache.commit()
        current_app.logger.info("Footer text and links updated successfully.")
    except DocumentStoreError as e:
        current_app.logger.error(f"Error updating footer info: {str(e)}")
    return _back_to('general')
