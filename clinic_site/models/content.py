"""
Site Content Models

Profile and contact details are singletons (id = 1); everything else is a
list ordered by ``display_order``.
"""

from clinic_site.extensions import db
from clinic_site.models.base import SerializerMixin, TimestampMixin, OrderedMixin


class Profile(SerializerMixin, TimestampMixin, db.Model):
    """Hero and about section"""
    __tablename__ = 'profile'

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(200), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    tagline = db.Column(db.String(300), nullable=False)
    about_text_short = db.Column(db.Text)
    about_text = db.Column(db.Text)
    specialization = db.Column(db.String(200))
    photo_base64 = db.Column(db.Text)
    years_experience = db.Column(db.Integer, default=0)
    surgeries_count = db.Column(db.Integer, default=0)

    def __repr__(self):
        return f'<Profile {self.full_name}>'


class ContactInfo(SerializerMixin, TimestampMixin, db.Model):
    __tablename__ = 'contact_info'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(200), nullable=False)
    phone = db.Column(db.String(50))
    address = db.Column(db.Text)
    permanent_address = db.Column(db.Text)
    description = db.Column(db.Text)
    working_hours = db.Column(db.String(200))

    def __repr__(self):
        return f'<ContactInfo {self.email}>'


class Service(SerializerMixin, OrderedMixin, db.Model):
    __tablename__ = 'services'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    icon = db.Column(db.String(100))

    def __repr__(self):
        return f'<Service {self.title}>'


class Education(SerializerMixin, OrderedMixin, db.Model):
    __tablename__ = 'education'

    id = db.Column(db.Integer, primary_key=True)
    degree = db.Column(db.String(200), nullable=False)
    institution = db.Column(db.String(200), nullable=False)
    year = db.Column(db.String(20))
    description = db.Column(db.Text)

    def __repr__(self):
        return f'<Education {self.degree}>'


class Experience(SerializerMixin, OrderedMixin, db.Model):
    __tablename__ = 'experience'

    id = db.Column(db.Integer, primary_key=True)
    position = db.Column(db.String(200), nullable=False)
    organization = db.Column(db.String(200), nullable=False)
    start_date = db.Column(db.String(20))
    end_date = db.Column(db.String(20))
    description = db.Column(db.Text)

    def __repr__(self):
        return f'<Experience {self.position}>'


class Skill(SerializerMixin, OrderedMixin, db.Model):
    __tablename__ = 'skills'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    proficiency = db.Column(db.Integer, default=50)
    category = db.Column(db.String(100))

    def __repr__(self):
        return f'<Skill {self.name}:{self.proficiency}>'


class Award(SerializerMixin, OrderedMixin, db.Model):
    __tablename__ = 'awards'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    issuer = db.Column(db.String(200))
    year = db.Column(db.String(20))
    description = db.Column(db.Text)
    image_base64 = db.Column(db.Text)

    def __repr__(self):
        return f'<Award {self.title}>'


class PortfolioItem(SerializerMixin, OrderedMixin, db.Model):
    __tablename__ = 'portfolio_items'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    image_base64 = db.Column(db.Text)
    category = db.Column(db.String(100), nullable=False, index=True)

    def __repr__(self):
        return f'<PortfolioItem {self.title}>'


class SocialLink(SerializerMixin, OrderedMixin, db.Model):
    __tablename__ = 'social_links'

    id = db.Column(db.Integer, primary_key=True)
    platform = db.Column(db.String(50), nullable=False)
    url = db.Column(db.String(500), nullable=False)
    icon = db.Column(db.String(100))

    def __repr__(self):
        return f'<SocialLink {self.platform}>'
