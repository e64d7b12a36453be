"""
Blog Post Model
"""

from clinic_site.extensions import db
from clinic_site.models.base import SerializerMixin, TimestampMixin

DEFAULT_THEME = {
    'mode': 'light',
    'primaryColor': '#3b82f6',
    'fontFamily': 'sans-serif',
    'fontSize': 'medium',
    'layout': 'standard',
    'showCoverImage': True,
    'showReadingTime': True,
    'showAuthor': True,
    'showDate': True,
    'enableComments': False,
}


class BlogPost(SerializerMixin, TimestampMixin, db.Model):
    """Markdown-like article with inline image placeholders"""
    __tablename__ = 'blog_posts'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(300), nullable=False)
    slug = db.Column(db.String(300), unique=True, nullable=False, index=True)
    excerpt = db.Column(db.Text)
    content = db.Column(db.Text, nullable=False)
    image_base64 = db.Column(db.Text)
    published = db.Column(db.Boolean, default=False, nullable=False)
    theme = db.Column(db.JSON)
    meta_title = db.Column(db.String(300))
    meta_description = db.Column(db.Text)
    meta_keywords = db.Column(db.Text)
    tags = db.Column(db.JSON)
    category = db.Column(db.String(100))
    author = db.Column(db.String(200))
    reading_time = db.Column(db.Integer, default=1)
    inline_images = db.Column(db.JSON)

    def to_dict(self):
        data = super().to_dict()
        data['theme'] = {**DEFAULT_THEME, **(self.theme or {})}
        data['tags'] = list(self.tags or [])
        data['inline_images'] = list(self.inline_images or [])
        return data

    def __repr__(self):
        return f'<BlogPost {self.slug}>'
