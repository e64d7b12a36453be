"""
Public Routes

Read-only JSON for the public site, appointment booking and uploaded files.
"""

import logging

from flask import current_app, request, send_from_directory

from clinic_site.errors import ValidationError, NotFoundError
from clinic_site.extensions import db
from clinic_site.public import public_bp
from clinic_site.responses import success_response, error_response, get_json_body
from clinic_site.services import resources
from clinic_site.services.blog import render_content

logger = logging.getLogger(__name__)

ALL_CATEGORIES = 'All Work'


def _list_view(resource):
    def list_view():
        try:
            return success_response([item.to_dict() for item in resource.list_all()])
        except Exception:
            logger.exception('Failed to fetch %s', resource.name)
            return error_response(f'Failed to fetch {resource.label}', 500)
    return list_view


for _resource in (resources.services, resources.education, resources.experience,
                  resources.skills, resources.awards, resources.social_links):
    public_bp.add_url_rule(f'/{_resource.name}', f'list_{_resource.name.replace("-", "_")}',
                           _list_view(_resource), methods=['GET'])


@public_bp.route('/profile', methods=['GET'])
def get_profile():
    try:
        profile = resources.profile.current()
        return success_response(profile.to_dict() if profile else None)
    except Exception:
        logger.exception('Failed to fetch profile')
        return error_response('Failed to fetch profile', 500)


@public_bp.route('/contact', methods=['GET'])
def get_contact():
    try:
        contact = resources.contact.current()
        return success_response(contact.to_dict() if contact else None)
    except Exception:
        logger.exception('Failed to fetch contact info')
        return error_response('Failed to fetch contact info', 500)


@public_bp.route('/portfolio', methods=['GET'])
def get_portfolio():
    """Portfolio items, optionally narrowed to one ``category``."""
    try:
        category = (request.args.get('category') or '').strip()
        if category and category != ALL_CATEGORIES:
            items = resources.portfolio.list_all(category=category)
        else:
            items = resources.portfolio.list_all()
        return success_response([item.to_dict() for item in items])
    except Exception:
        logger.exception('Failed to fetch portfolio')
        return error_response('Failed to fetch portfolio', 500)


@public_bp.route('/blog', methods=['GET'])
def list_blog_posts():
    try:
        posts = resources.blog_posts.list_published()
        return success_response([post.to_dict() for post in posts])
    except Exception:
        logger.exception('Failed to fetch blog posts')
        return error_response('Failed to fetch blog posts', 500)


@public_bp.route('/blog/<slug>', methods=['GET'])
def get_blog_post(slug):
    """A published post with its rendered HTML."""
    try:
        post = resources.blog_posts.get_published(slug)
        data = post.to_dict()
        data['content_html'] = render_content(post.content, post.inline_images)
        return success_response(data)
    except NotFoundError as e:
        return error_response(str(e), 404)
    except Exception:
        logger.exception('Failed to fetch blog post %s', slug)
        return error_response('Failed to fetch blog post', 500)


@public_bp.route('/appointments', methods=['POST'])
def create_appointment():
    """Booking form: full name and email are mandatory."""
    try:
        appointment = resources.appointments.submit(get_json_body())
        return success_response({'id': appointment.id},
                                'Appointment request submitted successfully')
    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception:
        db.session.rollback()
        logger.exception('Failed to create appointment')
        return error_response('Failed to create appointment', 500)


def serve_upload(filename):
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
