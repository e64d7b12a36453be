"""
Admin Routes

Authenticated CRUD over the site content. Every handler converts its own
failures into the response envelope.
"""

import logging

from flask import request

from clinic_site.admin import admin_bp
from clinic_site.admin.decorators import admin_required
from clinic_site.errors import ValidationError, NotFoundError
from clinic_site.extensions import db
from clinic_site.responses import success_response, error_response, get_json_body
from clinic_site.services import resources, uploads
from clinic_site.services.blog import calculate_reading_time, render_content

logger = logging.getLogger(__name__)


def _failure(message):
    db.session.rollback()
    logger.exception(message)
    return error_response(message, 500)


# -----------------------------------------------------------------------------
# Generic list entities: services, education, experience, skills, awards,
# portfolio, social links
# -----------------------------------------------------------------------------

def _make_create_view(resource):
    def create_view():
        try:
            item = resource.create(get_json_body())
            return success_response({'id': item.id},
                                    f'{resource.label.capitalize()} created successfully')
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception:
            return _failure(f'Failed to create {resource.label}')
    return create_view


def _make_update_view(resource):
    def update_view(item_id):
        try:
            item = resource.update(item_id, get_json_body())
            return success_response(item.to_dict(),
                                    f'{resource.label.capitalize()} updated successfully')
        except ValidationError as e:
            return error_response(str(e), 400)
        except NotFoundError as e:
            return error_response(str(e), 404)
        except Exception:
            return _failure(f'Failed to update {resource.label}')
    return update_view


def _make_delete_view(resource):
    def delete_view(item_id):
        try:
            resource.delete(item_id)
            return success_response(message=f'{resource.label.capitalize()} deleted successfully')
        except Exception:
            return _failure(f'Failed to delete {resource.label}')
    return delete_view


def _register_resource(resource):
    endpoint = resource.name.replace('-', '_')
    admin_bp.add_url_rule(f'/{resource.name}', f'create_{endpoint}',
                          admin_required(_make_create_view(resource)), methods=['POST'])
    admin_bp.add_url_rule(f'/{resource.name}/<int:item_id>', f'update_{endpoint}',
                          admin_required(_make_update_view(resource)), methods=['PUT'])
    admin_bp.add_url_rule(f'/{resource.name}/<int:item_id>', f'delete_{endpoint}',
                          admin_required(_make_delete_view(resource)), methods=['DELETE'])


for _resource in resources.LIST_RESOURCES:
    _register_resource(_resource)


# -----------------------------------------------------------------------------
# Singletons
# -----------------------------------------------------------------------------

@admin_bp.route('/profile', methods=['PUT'])
@admin_required
def update_profile():
    """Merge the payload over the profile row (created on first save)."""
    try:
        profile = resources.profile.upsert(get_json_body())
        return success_response(profile.to_dict(), 'Profile updated successfully')
    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception:
        return _failure('Failed to update profile')


@admin_bp.route('/contact', methods=['PUT'])
@admin_required
def update_contact():
    try:
        contact = resources.contact.upsert(get_json_body())
        return success_response(contact.to_dict(), 'Contact info updated successfully')
    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception:
        return _failure('Failed to update contact info')


# -----------------------------------------------------------------------------
# Blog
# -----------------------------------------------------------------------------

def _post_with_html(post):
    data = post.to_dict()
    data['content_html'] = render_content(post.content, post.inline_images)
    return data


@admin_bp.route('/blog', methods=['GET'])
@admin_required
def list_blog_posts():
    """All posts, drafts included, newest first."""
    try:
        posts = resources.blog_posts.list_all()
        return success_response([p.to_dict() for p in posts])
    except Exception:
        return _failure('Failed to fetch blog posts')


@admin_bp.route('/blog', methods=['POST'])
@admin_required
def create_blog_post():
    try:
        post = resources.blog_posts.create(get_json_body())
        return success_response({'id': post.id, 'slug': post.slug}, 'Blog post created successfully')
    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception:
        return _failure('Failed to create blog post')


@admin_bp.route('/blog/<int:post_id>', methods=['GET'])
@admin_required
def get_blog_post(post_id):
    try:
        post = resources.blog_posts.get_or_404(post_id)
        return success_response(_post_with_html(post))
    except NotFoundError as e:
        return error_response(str(e), 404)
    except Exception:
        return _failure('Failed to fetch blog post')


@admin_bp.route('/blog/<int:post_id>', methods=['PUT'])
@admin_required
def update_blog_post(post_id):
    """Partial update: omitted fields keep their stored values."""
    try:
        post = resources.blog_posts.update(post_id, get_json_body())
        return success_response(post.to_dict(), 'Blog post updated successfully')
    except ValidationError as e:
        return error_response(str(e), 400)
    except NotFoundError as e:
        return error_response(str(e), 404)
    except Exception:
        return _failure('Failed to update blog post')


@admin_bp.route('/blog/<int:post_id>', methods=['DELETE'])
@admin_required
def delete_blog_post(post_id):
    try:
        resources.blog_posts.delete(post_id)
        return success_response(message='Blog post deleted successfully')
    except Exception:
        return _failure('Failed to delete blog post')


@admin_bp.route('/blog/preview', methods=['POST'])
@admin_required
def preview_blog_post():
    """Render unsaved editor content with its inline images."""
    try:
        body = get_json_body()
        content = str(body.get('content') or '')
        images = resources.blog_posts.clean({'inline_images': body.get('inline_images') or []})
        return success_response({
            'html': render_content(content, images['inline_images']),
            'reading_time': calculate_reading_time(content),
        })
    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception:
        return _failure('Failed to render preview')


# -----------------------------------------------------------------------------
# Appointments
# -----------------------------------------------------------------------------

@admin_bp.route('/appointments', methods=['GET'])
@admin_required
def list_appointments():
    try:
        appointments = resources.appointments.list_all()
        return success_response([a.to_dict() for a in appointments])
    except Exception:
        return _failure('Failed to fetch appointments')


@admin_bp.route('/appointments/<int:appointment_id>', methods=['PUT'])
@admin_required
def update_appointment(appointment_id):
    """Usually just ``{status}``; other fields merge like any update."""
    try:
        appointment = resources.appointments.update(appointment_id, get_json_body())
        return success_response(appointment.to_dict(), 'Appointment updated successfully')
    except ValidationError as e:
        return error_response(str(e), 400)
    except NotFoundError as e:
        return error_response(str(e), 404)
    except Exception:
        return _failure('Failed to update appointment')


@admin_bp.route('/appointments/<int:appointment_id>', methods=['DELETE'])
@admin_required
def delete_appointment(appointment_id):
    try:
        resources.appointments.delete(appointment_id)
        return success_response(message='Appointment deleted successfully')
    except Exception:
        return _failure('Failed to delete appointment')


# -----------------------------------------------------------------------------
# Uploads
# -----------------------------------------------------------------------------

@admin_bp.route('/upload', methods=['POST'])
@admin_required
def upload_image():
    try:
        stored = uploads.save_image(request.files.get('file'))
        return success_response(stored, 'File uploaded successfully')
    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception:
        return _failure('Failed to upload file')


@admin_bp.route('/upload/<path:filename>', methods=['DELETE'])
@admin_required
def delete_uploaded_image(filename):
    try:
        uploads.delete_image(filename)
        return success_response(message='File deleted successfully')
    except ValidationError as e:
        return error_response(str(e), 400)
    except NotFoundError as e:
        return error_response(str(e), 404)
    except Exception:
        return _failure('Failed to delete file')
