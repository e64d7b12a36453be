"""
Default Content

Starter rows for an empty database. Each table is only filled when empty.
"""

import logging

from clinic_site.extensions import db
from clinic_site.models import (
    Profile, ContactInfo, Service, Education, Experience, Skill, Award, SocialLink,
    BlogPost, DEFAULT_THEME,
)
from clinic_site.services.blog import calculate_reading_time

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = {
    'full_name': 'Dr. Jane Smith',
    'title': 'MBBS, MS (General Surgery)',
    'tagline': 'Compassionate care, backed by surgical excellence',
    'about_text_short': 'Dedicated to safe, patient-centred treatment.',
    'about_text': 'A surgeon with many years of experience across general and '
                  'laparoscopic surgery.',
    'specialization': 'General & Laparoscopic Surgery',
    'years_experience': 15,
    'surgeries_count': 1200,
}

DEFAULT_CONTACT = {
    'email': 'appointments@example.com',
    'phone': '+1 555 0100',
    'address': '12 Clinic Road, Springfield',
    'working_hours': 'Mon - Fri, 9:00 - 17:00',
}

DEMO_ROWS = [
    (Service, [
        {'title': 'General Consultation', 'description': 'Assessment and treatment planning.',
         'icon': 'medical'},
        {'title': 'Laparoscopic Surgery', 'description': 'Minimally invasive procedures.',
         'icon': 'treatment'},
        {'title': 'Post-operative Care', 'description': 'Follow-up and recovery support.',
         'icon': 'care'},
    ]),
    (Education, [
        {'degree': 'MS General Surgery', 'institution': 'State Medical College', 'year': '2010'},
        {'degree': 'MBBS', 'institution': 'State Medical College', 'year': '2006'},
    ]),
    (Experience, [
        {'position': 'Consultant Surgeon', 'organization': 'City Hospital',
         'start_date': '2015', 'end_date': 'Present'},
        {'position': 'Registrar', 'organization': 'General Hospital',
         'start_date': '2010', 'end_date': '2015'},
    ]),
    (Skill, [
        {'name': 'Laparoscopy', 'proficiency': 95, 'category': 'Surgery'},
        {'name': 'Patient Communication', 'proficiency': 90, 'category': 'Care'},
    ]),
    (Award, [
        {'title': 'Excellence in Surgery', 'issuer': 'National Surgical Society', 'year': '2019'},
    ]),
    (SocialLink, [
        {'platform': 'LinkedIn', 'url': 'https://www.linkedin.com/', 'icon': 'linkedin'},
    ]),
]

DEMO_POSTS = [
    {
        'title': 'Five Habits for a Healthier Week',
        'slug': 'five-habits-healthier-week',
        'excerpt': 'Small, steady changes that make a real difference to everyday health.',
        'content': (
            '# Five Habits for a Healthier Week\n\n'
            'Good health rarely comes from one big change. It comes from a few '
            'habits repeated every day.\n\n'
            '## Start with water\n\n'
            'A glass of water before breakfast helps after a night without fluids.\n\n'
            '## Move a little, often\n\n'
            '- Take the stairs\n'
            '- Walk after meals\n'
            '- Stretch between long sitting sessions\n\n'
            '## Sleep on a schedule\n\n'
            'Aim for **7 to 9 hours** and keep bedtimes consistent.\n\n'
            '> Progress, not perfection.'
        ),
        'category': 'Health Tips',
        'tags': ['health', 'lifestyle', 'tips'],
    },
    {
        'title': 'What to Expect Before Keyhole Surgery',
        'slug': 'what-to-expect-before-keyhole-surgery',
        'excerpt': 'A short guide to preparing for a laparoscopic procedure.',
        'content': (
            '# What to Expect Before Keyhole Surgery\n\n'
            'Laparoscopic surgery uses small incisions and a camera, so most '
            'patients recover faster than after open surgery.\n\n'
            '## Before the day\n\n'
            '1. Share a full list of your medicines\n'
            '2. Follow the fasting instructions you are given\n'
            '3. Arrange for someone to take you home\n\n'
            'Questions are always welcome at your *pre-operative* visit.'
        ),
        'category': 'Surgery',
        'tags': ['surgery', 'laparoscopy', 'preparation'],
    },
]


def seed_content():
    """Fill empty tables; returns the names of the tables that were seeded."""
    created = []

    if db.session.get(Profile, 1) is None:
        db.session.add(Profile(id=1, **DEFAULT_PROFILE))
        created.append(Profile.__tablename__)
    if db.session.get(ContactInfo, 1) is None:
        db.session.add(ContactInfo(id=1, **DEFAULT_CONTACT))
        created.append(ContactInfo.__tablename__)

    for model, rows in DEMO_ROWS:
        if model.query.first() is not None:
            continue
        for order, row in enumerate(rows, start=1):
            db.session.add(model(display_order=order, **row))
        created.append(model.__tablename__)

    if BlogPost.query.first() is None:
        for post in DEMO_POSTS:
            db.session.add(BlogPost(
                published=True,
                author=DEFAULT_PROFILE['full_name'],
                theme=dict(DEFAULT_THEME),
                inline_images=[],
                reading_time=calculate_reading_time(post['content']),
                **post,
            ))
        created.append(BlogPost.__tablename__)

    db.session.commit()
    if created:
        logger.info('Seeded %s', ', '.join(created))
    return created
