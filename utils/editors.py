"""
Editors Module - Field and collection edits on the held portfolio document

Every editor mutates the document in place and returns True when something
changed, so the caller knows to commit. A missing target is a silent no-op
(False): the admin panel is the only caller and treats it as already done.

Asset ordering for replacements: the new file is uploaded first, then the
old asset is deleted, then the URL is swapped in the document. An upload
failure raises AssetUploadError before anything is touched.
"""

import uuid
from flask import current_app
from .identifiers import find_record, parse_position


CAROUSEL_FIELDS = ('title', 'description', 'link', 'buttonText')
PROJECT_SUMMARY_FIELDS = ('title', 'paragraph1', 'paragraph2', 'buttonLink')
PROJECT_FIELDS = ('title', 'description', 'githubLink')
CERTIFICATE_FIELDS = ('title', 'issuer')
EDUCATION_FIELDS = ('title', 'institution', 'years')
FOOTER_FIELDS = ('name', 'line1', 'line2', 'githubLink', 'emailLink', 'phoneLink', 'linkedinLink')


def has_file(file_storage):
    return file_storage is not None and bool(file_storage.filename)


def pick(form, keys):
    """Copy the given keys out of a form, defaulting to empty strings"""
    return {key: form.get(key, '') for key in keys}


def _replace_asset(record, key, category, file_storage, assets):
    new_url = assets.upload(category, file_storage)
    assets.delete(record.get(key))
    record[key] = new_url


# ---------------- Carousel ----------------

def update_carousel_slide(document, position, fields, image, assets):
    """Edit the slide at a position; out-of-range positions are ignored"""
    slides = document['carousel']
    index = parse_position(position)
    if index is None or index >= len(slides):
        current_app.logger.info(f"Carousel position {position} out of range, nothing updated")
        return False

    slide = slides[index]
    if has_file(image):
        _replace_asset(slide, 'url', 'carousel', image, assets)
    slide.update({key: fields.get(key, '') for key in CAROUSEL_FIELDS})
    return True


# ---------------- About ----------------

def update_about_text(document, summary, full_story, skills_text):
    about = document['about']
    about['summary'] = summary
    about['fullStory'] = full_story
    about['skills'] = [s.strip() for s in (skills_text or '').split('\n') if s.strip()]
    return True


def replace_profile_photo(document, image, assets):
    if not has_file(image):
        return False
    _replace_asset(document['about'], 'photoUrl', 'story', image, assets)
    return True


# ---------------- Project summary ----------------

def update_project_summary(document, fields, image, assets):
    summary = document['projectSummary']
    if has_file(image):
        _replace_asset(summary, 'image', 'project', image, assets)
    summary.update({key: fields.get(key, '') for key in PROJECT_SUMMARY_FIELDS})
    return True


# ---------------- Projects ----------------

def _find_project(document, project_id):
    return find_record(document['projects'], project_id, lenient=False)


def add_project(document, fields):
    project = {'id': 'proj' + str(uuid.uuid4())}
    project.update({key: fields.get(key, '') for key in PROJECT_FIELDS})
    project['images'] = []
    document['projects'].append(project)
    return True


def update_project(document, project_id, fields):
    _, project = _find_project(document, project_id)
    if project is None:
        return False
    project.update({key: fields.get(key, '') for key in PROJECT_FIELDS})
    return True


def add_project_image(document, project_id, image, assets):
    _, project = _find_project(document, project_id)
    if project is None or not has_file(image):
        return False
    url = assets.upload('project', image)
    project.setdefault('images', []).append(url)
    return True


def remove_project_image(document, project_id, image_url, assets):
    _, project = _find_project(document, project_id)
    if project is None or not image_url:
        return False

    images = project.get('images', [])
    if image_url not in images:
        return False

    assets.delete(image_url)
    images.remove(image_url)
    current_app.logger.info(f"Image {image_url} deleted from project {project_id}.")
    return True


def remove_project(document, project_id, assets):
    index, project = _find_project(document, project_id)
    if project is None:
        return False

    for image_url in project.get('images', []):
        assets.delete(image_url)
    del document['projects'][index]
    current_app.logger.info(f"Project with ID {project_id} and its images deleted.")
    return True


# ---------------- Certificates ----------------

def add_certificate(document, fields, pdf, assets):
    if not has_file(pdf):
        return False
    url = assets.upload('pdf', pdf)
    certificate = {'id': str(uuid.uuid4())}
    certificate.update({key: fields.get(key, '') for key in CERTIFICATE_FIELDS})
    certificate['pdfUrl'] = url
    document['certificates'].append(certificate)
    return True


def update_certificate(document, certificate_id, fields, pdf, assets):
    _, certificate = find_record(document['certificates'], certificate_id)
    if certificate is None:
        return False
    if has_file(pdf):
        _replace_asset(certificate, 'pdfUrl', 'pdf', pdf, assets)
    certificate.update({key: fields.get(key, '') for key in CERTIFICATE_FIELDS})
    return True


def remove_certificate(document, certificate_id, assets):
    index, certificate = find_record(document['certificates'], certificate_id)
    if certificate is None:
        return False
    assets.delete(certificate.get('pdfUrl'))
    del document['certificates'][index]
    current_app.logger.info(f"Certificate with ID {certificate_id} deleted.")
    return True


# ---------------- Gallery ----------------

def add_gallery_photo(document, caption, image, assets):
    if not has_file(image):
        return False
    url = assets.upload('gallery', image)
    document['gallery'].append({'id': str(uuid.uuid4()), 'url': url, 'caption': caption})
    return True


def replace_gallery_photo(document, photo_id, image, assets):
    _, photo = find_record(document['gallery'], photo_id)
    if photo is None:
        return False
    if not has_file(image):
        current_app.logger.warning("Attempted to update gallery photo but no file was provided.")
        return False
    _replace_asset(photo, 'url', 'gallery', image, assets)
    return True


def update_gallery_caption(document, photo_id, caption):
    _, photo = find_record(document['gallery'], photo_id)
    if photo is None:
        return False
    photo['caption'] = caption
    return True


def remove_gallery_photo(document, photo_id, assets):
    index, photo = find_record(document['gallery'], photo_id)
    if photo is None:
        return False
    assets.delete(photo.get('url'))
    del document['gallery'][index]
    current_app.logger.info(f"Gallery photo with ID {photo_id} deleted.")
    return True


# ---------------- Education ----------------

def add_education(document, fields, logo, assets):
    if not has_file(logo):
        current_app.logger.error("No file uploaded for new education entry.")
        return False
    url = assets.upload('education', logo)
    entry = {'id': str(uuid.uuid4()), 'imageUrl': url}
    entry.update({key: fields.get(key, '') for key in EDUCATION_FIELDS})
    document['education'].append(entry)
    return True


def remove_education(document, identifier, assets):
    # Legacy entries without ids are addressed by their current position.
    index, entry = find_record(document['education'], identifier, positional_fallback=True)
    if entry is None:
        current_app.logger.warning(f"Could not find Education entry with identifier: {identifier}")
        return False
    assets.delete(entry.get('imageUrl'))
    del document['education'][index]
    current_app.logger.info(f"Education entry deleted (Identifier: {identifier}).")
    return True


# ---------------- Footer ----------------

def update_footer(document, fields):
    footer = document.get('footerInfo')
    if not isinstance(footer, dict):
        footer = document['footerInfo'] = {}
    footer.update({key: fields.get(key, '') for key in FOOTER_FIELDS})
    return True
