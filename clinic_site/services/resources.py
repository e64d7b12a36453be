"""
Resource Services

One ``Resource`` per entity implements the uniform list/create/update/delete
contract used by both the public and admin routes. Updates always re-read the
stored row and fold the incoming fields over it, so a partial payload never
nulls out omitted columns.
"""

import logging

from sqlalchemy.exc import IntegrityError

from clinic_site.errors import ValidationError, NotFoundError
from clinic_site.extensions import db
from clinic_site.models import (
    Service, Education, Experience, Skill, Award, PortfolioItem, SocialLink,
    Profile, ContactInfo, Appointment, APPOINTMENT_STATUSES, BlogPost, DEFAULT_THEME,
)
from clinic_site.services.blog import calculate_reading_time, slugify

logger = logging.getLogger(__name__)

_TRUE_STRINGS = ('1', 'true', 'yes', 'on')
_FALSE_STRINGS = ('0', 'false', 'no', 'off', '')

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


def _label(field):
    return field.replace('_', ' ').capitalize()


def coerce_value(column, value):
    """Convert JSON input to the column's Python type (ints and bools)."""
    if value is None:
        return None
    if isinstance(column.type, db.Boolean):
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str) and value.strip().lower() in _TRUE_STRINGS + _FALSE_STRINGS:
            return value.strip().lower() in _TRUE_STRINGS
        raise ValidationError(f'{_label(column.name)} must be a boolean')
    if isinstance(column.type, db.Integer):
        if isinstance(value, bool):
            raise ValidationError(f'{_label(column.name)} must be a number')
        try:
            number = int(value)
        except (TypeError, ValueError, OverflowError):
            raise ValidationError(f'{_label(column.name)} must be a number') from None
        # SQLite INTEGER is a signed 64-bit value
        if not INT64_MIN <= number <= INT64_MAX:
            raise ValidationError(f'{_label(column.name)} must be a number')
        return number
    return value


class Resource:
    """CRUD contract over one model.

    Args:
        name: URL segment, e.g. ``social-links``
        model: Flask-SQLAlchemy model class
        fields: writable columns
        required: columns that must be non-empty after create/merge
        label: human name used in envelope messages
        order_by: callable returning the ORDER BY clauses for ``list_all``
    """

    def __init__(self, name, model, fields, required=(), label=None, order_by=None):
        self.name = name
        self.model = model
        self.fields = tuple(fields)
        self.required = tuple(required)
        self.label = label or name.replace('-', ' ')
        self._order_by = order_by or (lambda m: (m.display_order.asc(), m.id.asc()))

    def __repr__(self):
        return f'<Resource {self.name}>'

    def _column(self, field):
        return self.model.__table__.columns[field]

    def clean(self, payload):
        """Pick known fields out of ``payload``, coerced; ``None`` means unset."""
        cleaned = {}
        for field in self.fields:
            if field in payload and payload[field] is not None:
                cleaned[field] = coerce_value(self._column(field), payload[field])
        return cleaned

    def validate(self, values):
        for field in self.required:
            value = values.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(f'{_label(field)} is required')

    def list_all(self, **filters):
        query = self.model.query
        if filters:
            query = query.filter_by(**filters)
        return query.order_by(*self._order_by(self.model)).all()

    def get(self, item_id):
        return db.session.get(self.model, item_id)

    def get_or_404(self, item_id):
        item = self.get(item_id)
        if item is None:
            raise NotFoundError(f'{self.label.capitalize()} not found')
        return item

    def create(self, payload):
        values = self.clean(payload)
        self.validate(values)
        item = self.model(**values)
        db.session.add(item)
        self._commit()
        logger.info('Created %s #%s', self.name, item.id)
        return item

    def merge(self, item, payload):
        """Fold ``payload`` over the stored row; returns the merged values."""
        merged = {field: getattr(item, field) for field in self.fields}
        merged.update(self.clean(payload))
        self.validate(merged)
        return merged

    def update(self, item_id, payload):
        item = self.get_or_404(item_id)
        for field, value in self.merge(item, payload).items():
            setattr(item, field, value)
        self._commit()
        logger.info('Updated %s #%s', self.name, item.id)
        return item

    def delete(self, item_id):
        """Hard delete; unknown ids are a no-op. Returns True if a row went."""
        removed = self.model.query.filter_by(id=item_id).delete()
        db.session.commit()
        if removed:
            logger.info('Deleted %s #%s', self.name, item_id)
        return bool(removed)

    def _commit(self):
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ValidationError(f'Invalid {self.label} data') from None


class SingletonResource(Resource):
    """Single-row tables (id = 1) such as the profile and contact details."""

    SINGLETON_ID = 1

    def current(self):
        return self.get(self.SINGLETON_ID)

    def upsert(self, payload):
        item = self.current()
        if item is None:
            values = self.clean(payload)
            self.validate(values)
            item = self.model(id=self.SINGLETON_ID, **values)
            db.session.add(item)
        else:
            for field, value in self.merge(item, payload).items():
                setattr(item, field, value)
        self._commit()
        logger.info('Saved %s', self.name)
        return item


class AppointmentResource(Resource):

    def clean(self, payload):
        cleaned = super().clean(payload)
        status = cleaned.get('status')
        if status is not None and status not in APPOINTMENT_STATUSES:
            raise ValidationError(
                'Status must be one of: ' + ', '.join(APPOINTMENT_STATUSES))
        return cleaned

    def validate(self, values):
        if not values.get('full_name') or not values.get('email'):
            raise ValidationError('Full name and email are required')

    def submit(self, payload):
        """Public booking: only contact fields are accepted, status starts pending."""
        values = {k: payload.get(k) for k in ('full_name', 'email', 'phone', 'message')}
        values = super().clean({k: v or None for k, v in values.items()})
        self.validate(values)
        item = Appointment(status='pending', **values)
        db.session.add(item)
        self._commit()
        logger.info('Appointment request #%s received', item.id)
        return item


profile = SingletonResource(
    'profile', Profile,
    fields=('full_name', 'title', 'tagline', 'about_text_short', 'about_text',
            'specialization', 'photo_base64', 'years_experience', 'surgeries_count'),
    required=('full_name', 'title', 'tagline'),
)

contact = SingletonResource(
    'contact', ContactInfo,
    fields=('email', 'phone', 'address', 'permanent_address', 'description', 'working_hours'),
    required=('email',),
    label='contact info',
)

services = Resource(
    'services', Service,
    fields=('title', 'description', 'icon', 'display_order'),
    required=('title',), label='service',
)

education = Resource(
    'education', Education,
    fields=('degree', 'institution', 'year', 'description', 'display_order'),
    required=('degree', 'institution'),
)

experience = Resource(
    'experience', Experience,
    fields=('position', 'organization', 'start_date', 'end_date', 'description', 'display_order'),
    required=('position', 'organization'),
)

skills = Resource(
    'skills', Skill,
    fields=('name', 'proficiency', 'category', 'display_order'),
    required=('name',), label='skill',
)

awards = Resource(
    'awards', Award,
    fields=('title', 'issuer', 'year', 'description', 'image_base64', 'display_order'),
    required=('title',), label='award',
)

portfolio = Resource(
    'portfolio', PortfolioItem,
    fields=('title', 'description', 'image_base64', 'category', 'display_order'),
    required=('title', 'category'), label='portfolio item',
)

social_links = Resource(
    'social-links', SocialLink,
    fields=('platform', 'url', 'icon', 'display_order'),
    required=('platform', 'url'), label='social link',
)

appointments = AppointmentResource(
    'appointments', Appointment,
    fields=('full_name', 'email', 'phone', 'message', 'status'),
    label='appointment',
    order_by=lambda m: (m.created_at.desc(), m.id.desc()),
)

# Entities exposed through the generic admin POST/PUT/DELETE routes
LIST_RESOURCES = (services, education, experience, skills, awards, portfolio, social_links)


class BlogPostResource(Resource):
    """Blog posts: derived slug and reading time, JSON tag/theme/image columns."""

    def clean(self, payload):
        cleaned = super().clean(payload)
        if 'slug' in cleaned:
            cleaned['slug'] = slugify(cleaned['slug'])
        if 'tags' in cleaned:
            cleaned['tags'] = self._clean_tags(cleaned['tags'])
        if 'theme' in cleaned and not isinstance(cleaned['theme'], dict):
            raise ValidationError('Theme must be an object')
        if 'inline_images' in cleaned:
            cleaned['inline_images'] = self._clean_images(cleaned['inline_images'])
        return cleaned

    @staticmethod
    def _clean_tags(tags):
        if isinstance(tags, str):
            tags = tags.split(',')
        if not isinstance(tags, list):
            raise ValidationError('Tags must be a list')
        result = []
        for tag in tags:
            tag = str(tag).strip()
            if tag and tag not in result:
                result.append(tag)
        return result

    @staticmethod
    def _clean_images(images):
        if not isinstance(images, list):
            raise ValidationError('Inline images must be a list')
        result = []
        for image in images:
            if not isinstance(image, dict) or not image.get('id'):
                raise ValidationError('Each inline image needs an id')
            result.append({
                'id': str(image['id']),
                'name': image.get('name') or '',
                'base64': image.get('base64') or '',
                'alt': image.get('alt') or '',
                'caption': image.get('caption') or '',
            })
        return result

    def _check_slug(self, slug, item_id=None):
        query = BlogPost.query.filter(BlogPost.slug == slug)
        if item_id is not None:
            query = query.filter(BlogPost.id != item_id)
        if query.first() is not None:
            raise ValidationError('Slug already exists')

    def list_published(self):
        return self.list_all(published=True)

    def get_published(self, slug):
        post = BlogPost.query.filter_by(slug=slug, published=True).first()
        if post is None:
            raise NotFoundError('Blog post not found')
        return post

    def create(self, payload):
        values = self.clean(payload)
        if not values.get('slug'):
            values['slug'] = slugify(values.get('title'))
        self.validate(values)
        self._check_slug(values['slug'])
        values['theme'] = {**DEFAULT_THEME, **values.get('theme', {})}
        values.setdefault('published', False)
        values.setdefault('tags', [])
        values.setdefault('inline_images', [])
        values['reading_time'] = calculate_reading_time(values['content'])
        post = BlogPost(**values)
        db.session.add(post)
        self._commit()
        logger.info('Created blog post #%s (%s)', post.id, post.slug)
        return post

    def merge(self, item, payload):
        merged = super().merge(item, payload)
        if isinstance(payload.get('theme'), dict):
            merged['theme'] = {**DEFAULT_THEME, **(item.theme or {}), **payload['theme']}
        return merged

    def update(self, item_id, payload):
        post = self.get_or_404(item_id)
        merged = self.merge(post, payload)
        if merged['slug'] != post.slug:
            self._check_slug(merged['slug'], item_id=post.id)
        for field, value in merged.items():
            setattr(post, field, value)
        post.reading_time = calculate_reading_time(post.content)
        self._commit()
        logger.info('Updated blog post #%s (%s)', post.id, post.slug)
        return post


blog_posts = BlogPostResource(
    'blog', BlogPost,
    fields=('title', 'slug', 'excerpt', 'content', 'image_base64', 'published', 'theme',
            'meta_title', 'meta_description', 'meta_keywords', 'tags', 'category',
            'author', 'inline_images'),
    required=('title', 'slug', 'content'),
    label='blog post',
    order_by=lambda m: (m.created_at.desc(), m.id.desc()),
)
