"""
Tests for the admin content routes.
"""

import pytest

from conftest import cloud_url
from utils import cache as cache_module
from utils.data import DocumentStoreError

U1 = cloud_url('portfolio/Gallery/u1')
IMG_A = cloud_url('portfolio/Project/a')
IMG_B = cloud_url('portfolio/Project/b')


def location(response):
    return response.headers['Location']


def test_admin_view_shows_upload_error(admin_client):
    response = admin_client.get('/admin?uploadError=Something+broke')
    assert response.status_code == 200
    assert b'Something broke' in response.data


# ---------------- Gallery ----------------

def test_update_gallery_caption(admin_client, set_document, stored_document, uploader):
    set_document(gallery=[{'id': 'g1', 'url': U1, 'caption': 'old'}])

    response = admin_client.post('/admin/update-gallery-caption/g1', data={'caption': 'new'})

    assert response.status_code == 302
    assert location(response).endswith('/admin#gallery')
    assert stored_document()['gallery'] == [{'id': 'g1', 'url': U1, 'caption': 'new'}]
    assert uploader.uploads == []
    assert uploader.destroyed == []


def test_delete_gallery_photo(admin_client, set_document, stored_document, uploader):
    set_document(gallery=[{'id': 'g1', 'url': U1, 'caption': 'old'}])

    response = admin_client.post('/admin/delete-gallery-photo/g1')

    assert response.status_code == 302
    assert stored_document()['gallery'] == []
    assert uploader.destroyed == ['portfolio/Gallery/u1']


def test_gallery_accepts_legacy_numeric_ids(admin_client, set_document, stored_document):
    set_document(gallery=[{'id': 3, 'url': U1, 'caption': 'old'}])

    admin_client.post('/admin/update-gallery-caption/3', data={'caption': 'renamed'})

    assert stored_document()['gallery'][0]['caption'] == 'renamed'


def test_delete_with_foreign_url_skips_asset_store(admin_client, set_document, stored_document, uploader):
    set_document(gallery=[{'id': 'g1', 'url': 'https://example.com/me.jpg', 'caption': ''}])

    response = admin_client.post('/admin/delete-gallery-photo/g1')

    assert response.status_code == 302
    assert stored_document()['gallery'] == []
    assert uploader.destroyed == []


def test_missing_gallery_photo_is_a_silent_noop(admin_client, set_document, stored_document, uploader):
    set_document(gallery=[{'id': 'g1', 'url': U1, 'caption': 'old'}])
    before = stored_document()

    response = admin_client.post('/admin/delete-gallery-photo/unknown')

    assert response.status_code == 302
    assert stored_document() == before
    assert uploader.destroyed == []


def test_upload_gallery_photo(admin_client, stored_document, uploader, image_file):
    response = admin_client.post('/admin/upload-gallery',
                                 data={'caption': 'Sunset', 'galleryImage': image_file()},
                                 content_type='multipart/form-data')

    assert response.status_code == 302
    gallery = stored_document()['gallery']
    assert len(gallery) == 1
    assert gallery[0]['caption'] == 'Sunset'
    assert gallery[0]['id']
    assert gallery[0]['url'].startswith('https://res.cloudinary.com/')
    assert uploader.uploads[0]['folder'] == 'portfolio/Gallery'


def test_rejected_upload_redirects_with_error(admin_client, stored_document, uploader, image_file):
    before = stored_document()

    response = admin_client.post('/admin/upload-gallery',
                                 data={'caption': 'Animated', 'galleryImage': image_file('anim.gif')},
                                 content_type='multipart/form-data')

    assert response.status_code == 302
    assert 'uploadError=' in location(response)
    assert stored_document() == before
    assert uploader.uploads == []


def test_replace_gallery_photo_deletes_old_asset(admin_client, set_document, stored_document,
                                                 uploader, image_file):
    set_document(gallery=[{'id': 'g1', 'url': U1, 'caption': 'keep'}])

    admin_client.post('/admin/update-gallery-photo/g1',
                      data={'galleryImage': image_file('new.png')},
                      content_type='multipart/form-data')

    photo = stored_document()['gallery'][0]
    assert photo['url'] != U1
    assert photo['url'].startswith('https://res.cloudinary.com/')
    assert photo['caption'] == 'keep'
    assert uploader.destroyed == ['portfolio/Gallery/u1']
    assert U1 not in str(stored_document())


def test_gallery_upload_save_failure_returns_500(admin_client, app, uploader, image_file, monkeypatch):
    def broken_persist(document_id, content):
        raise DocumentStoreError('database is down')

    monkeypatch.setattr(cache_module, 'persist_document', broken_persist)

    response = admin_client.post('/admin/upload-gallery',
                                 data={'caption': 'x', 'galleryImage': image_file()},
                                 content_type='multipart/form-data')

    assert response.status_code == 500
    assert b'Database save failed after successful file upload.' in response.data


def test_failed_asset_delete_still_removes_record(admin_client, set_document, stored_document, uploader):
    set_document(gallery=[{'id': 'g1', 'url': U1, 'caption': 'old'}])
    uploader.destroy_error = ConnectionError('asset store unreachable')

    response = admin_client.post('/admin/delete-gallery-photo/g1')

    assert response.status_code == 302
    assert stored_document()['gallery'] == []


def test_gallery_replace_save_failure_returns_500(admin_client, set_document, uploader,
                                                  image_file, monkeypatch):
    set_document(gallery=[{'id': 'g1', 'url': U1, 'caption': 'keep'}])

    def broken_persist(document_id, content):
        raise DocumentStoreError('database is down')

    monkeypatch.setattr(cache_module, 'persist_document', broken_persist)

    response = admin_client.post('/admin/update-gallery-photo/g1',
                                 data={'galleryImage': image_file('new.png')},
                                 content_type='multipart/form-data')

    assert response.status_code == 500
    assert b'Database save failed after successful file upload.' in response.data
    assert len(uploader.uploads) == 1


# ---------------- Projects ----------------

def test_add_and_update_project(admin_client, stored_document):
    admin_client.post('/admin/add-project', data={
        'title': 'Weather Station', 'description': 'IoT', 'githubLink': 'https://github.com/me/ws'})

    project = stored_document()['projects'][-1]
    assert project['id'].startswith('proj')
    assert project['images'] == []

    admin_client.post(f"/admin/update-project/{project['id']}", data={
        'title': 'Weather Station v2', 'description': 'IoT', 'githubLink': ''})

    assert stored_document()['projects'][-1]['title'] == 'Weather Station v2'


def test_delete_project_image_twice(admin_client, set_document, stored_document, uploader):
    set_document(projects=[{'id': 'proj1', 'title': 'P', 'images': [IMG_A, IMG_B]}])

    admin_client.post('/admin/delete-project-image/proj1', data={'imageUrl': IMG_A})
    assert stored_document()['projects'][0]['images'] == [IMG_B]
    assert uploader.destroyed == ['portfolio/Project/a']

    admin_client.post('/admin/delete-project-image/proj1', data={'imageUrl': IMG_A})
    assert stored_document()['projects'][0]['images'] == [IMG_B]
    assert uploader.destroyed == ['portfolio/Project/a']


def test_upload_project_image(admin_client, set_document, stored_document, image_file):
    set_document(projects=[{'id': 'proj1', 'title': 'P', 'images': [IMG_A]}])

    admin_client.post('/admin/upload-project-image/proj1',
                      data={'projectImage': image_file()},
                      content_type='multipart/form-data')

    images = stored_document()['projects'][0]['images']
    assert len(images) == 2
    assert images[0] == IMG_A


def test_delete_project_removes_every_image(admin_client, set_document, stored_document, uploader):
    set_document(projects=[{'id': 'proj1', 'title': 'P', 'images': [IMG_A, IMG_B]},
                           {'id': 'proj2', 'title': 'Q', 'images': []}])

    admin_client.post('/admin/delete-project/proj1')

    assert [p['id'] for p in stored_document()['projects']] == ['proj2']
    assert uploader.destroyed == ['portfolio/Project/a', 'portfolio/Project/b']


def test_persist_failure_propagates_for_plain_routes(admin_client, app, stored_document, monkeypatch):
    def broken_persist(document_id, content):
        raise DocumentStoreError('database is down')

    monkeypatch.setattr(cache_module, 'persist_document', broken_persist)

    with pytest.raises(DocumentStoreError):
        admin_client.post('/admin/add-project', data={'title': 'Lost'})

    assert all(p['title'] != 'Lost' for p in stored_document()['projects'])
    assert app.extensions['portfolio_cache'].document['projects'][-1]['title'] == 'Lost'


# ---------------- Carousel ----------------

def test_update_carousel_slide(admin_client, stored_document, uploader, image_file):
    response = admin_client.post('/admin/update-carousel/1', data={
        'title': 'New title', 'description': 'New description',
        'link': '/about', 'buttonText': 'Go', 'carouselImage': image_file(),
    }, content_type='multipart/form-data')

    assert location(response).endswith('/admin#carousel')
    slide = stored_document()['carousel'][1]
    assert slide['title'] == 'New title'
    assert slide['buttonText'] == 'Go'
    assert slide['url'].startswith('https://res.cloudinary.com/')
    # The seed slide had no stored asset, so there was nothing to delete
    assert uploader.destroyed == []


def test_update_carousel_out_of_range_is_noop(admin_client, stored_document, uploader, image_file):
    before = stored_document()
    assert len(before['carousel']) == 3

    response = admin_client.post('/admin/update-carousel/5', data={
        'title': 'Ghost', 'carouselImage': image_file(),
    }, content_type='multipart/form-data')

    assert response.status_code == 302
    assert location(response).endswith('/admin#carousel')
    assert stored_document() == before
    assert uploader.uploads == []


def test_update_carousel_with_oversized_position_is_noop(admin_client, stored_document, uploader):
    before = stored_document()

    response = admin_client.post('/admin/update-carousel/' + '9' * 5000, data={'title': 'Ghost'})

    assert response.status_code == 302
    assert location(response).endswith('/admin#carousel')
    assert stored_document() == before
    assert uploader.uploads == []


# ---------------- About, summary, footer ----------------

def test_update_text_is_visible_on_next_read(admin_client, client):
    admin_client.post('/admin/update-text', data={
        'aboutSummary': 'Short', 'aboutFull': 'The long story',
        'aboutSkills': ' Python \n\n  Docker\n',
    })

    page = client.get('/about').data
    assert b'The long story' in page
    assert b'<li>Python</li>' in page
    assert b'<li>Docker</li>' in page


def test_upload_profile_photo_replaces_old(admin_client, set_document, stored_document,
                                           uploader, image_file):
    old = cloud_url('portfolio/Story/old')
    set_document(about={'summary': '', 'fullStory': '', 'skills': [], 'photoUrl': old})

    admin_client.post('/admin/upload-photo', data={'profilePhoto': image_file()},
                      content_type='multipart/form-data')

    assert stored_document()['about']['photoUrl'] != old
    assert uploader.destroyed == ['portfolio/Story/old']


def test_update_project_summary_without_image(admin_client, stored_document, uploader):
    admin_client.post('/admin/update-project-summary', data={
        'title': 'Work', 'paragraph1': 'one', 'paragraph2': 'two', 'buttonLink': '/projects'})

    summary = stored_document()['projectSummary']
    assert summary['title'] == 'Work'
    assert summary['paragraph2'] == 'two'
    assert uploader.uploads == []


def test_update_footer_creates_missing_section(admin_client, app, stored_document):
    with app.app_context():
        cache = app.extensions['portfolio_cache']
        cache.document.pop('footerInfo', None)
        cache.commit()
    assert 'footerInfo' not in stored_document()

    admin_client.post('/admin/update-footer', data={
        'name': 'Ada', 'line1': 'Engineer', 'line2': 'London',
        'githubLink': 'https://github.com/ada', 'emailLink': 'mailto:ada@example.com',
        'phoneLink': 'tel:123', 'linkedinLink': 'https://linkedin.com/in/ada'})

    footer = stored_document()['footerInfo']
    assert footer['name'] == 'Ada'
    assert footer['phoneLink'] == 'tel:123'


def test_update_footer_save_failure_still_redirects(admin_client, stored_document, monkeypatch):
    before = stored_document()

    def broken_persist(document_id, content):
        raise DocumentStoreError('database is down')

    monkeypatch.setattr(cache_module, 'persist_document', broken_persist)

    response = admin_client.post('/admin/update-footer', data={'name': 'Ada'})

    assert response.status_code == 302
    assert location(response).endswith('/admin#general')
    assert stored_document() == before


# ---------------- Certificates ----------------

def test_upload_update_and_delete_certificate(admin_client, stored_document, uploader):
    import io

    admin_client.post('/admin/upload-certificate', data={
        'title': 'Cloud Basics', 'issuer': 'ACME',
        'certificateFile': (io.BytesIO(b'%PDF-1.4'), 'cert.pdf'),
    }, content_type='multipart/form-data')

    certificate = stored_document()['certificates'][0]
    assert certificate['pdfUrl'].endswith('.pdf')
    assert uploader.uploads[0]['folder'] == 'portfolio/Pdf'

    admin_client.post(f"/admin/update-certificate/{certificate['id']}", data={
        'title': 'Cloud Basics II', 'issuer': 'ACME',
        'certificateFile': (io.BytesIO(b'%PDF-1.4'), 'cert2.pdf'),
    }, content_type='multipart/form-data')

    updated = stored_document()['certificates'][0]
    assert updated['title'] == 'Cloud Basics II'
    assert updated['pdfUrl'] != certificate['pdfUrl']
    assert uploader.destroyed == ['portfolio/Pdf/asset1']

    admin_client.post(f"/admin/delete-certificate/{certificate['id']}")
    assert stored_document()['certificates'] == []
    assert uploader.destroyed == ['portfolio/Pdf/asset1', 'portfolio/Pdf/asset2']


# ---------------- Education ----------------

def test_add_education_requires_logo(admin_client, stored_document, image_file):
    admin_client.post('/admin/add-education', data={
        'title': 'BSc', 'institution': 'Uni', 'years': '2015-2019'})
    assert stored_document()['education'] == []

    admin_client.post('/admin/add-education', data={
        'title': 'BSc', 'institution': 'Uni', 'years': '2015-2019',
        'educationLogo': image_file('logo.png')}, content_type='multipart/form-data')

    entry = stored_document()['education'][0]
    assert entry['id']
    assert entry['institution'] == 'Uni'
    assert entry['imageUrl'].startswith('https://res.cloudinary.com/')


def test_delete_legacy_education_by_position(admin_client, set_document, stored_document, uploader):
    logo = cloud_url('portfolio/Education/old-logo', ext='png')
    set_document(education=[{'title': 'A', 'imageUrl': ''},
                            {'title': 'B', 'imageUrl': logo}])

    admin_client.post('/admin/delete-education/1')

    assert [e['title'] for e in stored_document()['education']] == ['A']
    assert uploader.destroyed == ['portfolio/Education/old-logo']


def test_delete_education_prefers_matching_id(admin_client, set_document, stored_document):
    set_document(education=[{'title': 'Legacy', 'imageUrl': ''},
                            {'id': '0', 'title': 'Numbered', 'imageUrl': ''}])

    admin_client.post('/admin/delete-education/0')

    assert [e['title'] for e in stored_document()['education']] == ['Legacy']


def test_delete_education_out_of_range_is_noop(admin_client, set_document, stored_document):
    set_document(education=[{'title': 'Only', 'imageUrl': ''}])

    response = admin_client.post('/admin/delete-education/4')

    assert response.status_code == 302
    assert [e['title'] for e in stored_document()['education']] == ['Only']


def test_delete_education_with_oversized_identifier_is_noop(admin_client, set_document, stored_document):
    set_document(education=[{'title': 'Only', 'imageUrl': ''}])

    response = admin_client.post('/admin/delete-education/' + '1' * 5000)

    assert response.status_code == 302
    assert [e['title'] for e in stored_document()['education']] == ['Only']
