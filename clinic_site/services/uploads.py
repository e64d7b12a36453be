"""
Upload Services

Image uploads for the admin dashboard, stored on disk under
``UPLOAD_FOLDER`` and served back from ``/uploads/<filename>``.
"""

import logging
import os
import secrets
import time

from flask import current_app
from werkzeug.utils import secure_filename

from clinic_site.errors import ValidationError, NotFoundError

logger = logging.getLogger(__name__)


# Stored names keep one of these, so files are always served as images
ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}


def upload_folder():
    folder = current_app.config['UPLOAD_FOLDER']
    os.makedirs(folder, exist_ok=True)
    return folder


def _extension(filename):
    filename = secure_filename(filename or '')
    if '.' in filename:
        return filename.rsplit('.', 1)[1].lower()
    return ''


def save_image(file):
    """Validate and store an uploaded image; returns ``{url, filename}``."""
    if file is None or not file.filename:
        raise ValidationError('No file provided')
    extension = _extension(file.filename)
    if not (file.mimetype or '').startswith('image/') or extension not in ALLOWED_EXTENSIONS:
        raise ValidationError('File must be an image')

    data = file.read()
    max_bytes = current_app.config['MAX_UPLOAD_BYTES']
    if len(data) > max_bytes:
        raise ValidationError(f'File size must be less than {max_bytes // (1024 * 1024)}MB')

    filename = f'{int(time.time() * 1000)}-{secrets.token_hex(6)}.{extension}'
    with open(os.path.join(upload_folder(), filename), 'wb') as fh:
        fh.write(data)

    logger.info('Stored upload %s (%d bytes)', filename, len(data))
    return {'url': f'/uploads/{filename}', 'filename': filename}


def delete_image(filename):
    safe_name = secure_filename(filename or '')
    if not safe_name:
        raise ValidationError('Filename required')
    path = os.path.join(upload_folder(), safe_name)
    if not os.path.isfile(path):
        raise NotFoundError('File not found')
    os.remove(path)
    logger.info('Deleted upload %s', safe_name)
