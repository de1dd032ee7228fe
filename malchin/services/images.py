"""Upload product images to ImgBB."""

import base64
import logging
import requests
from flask import current_app
from malchin.errors import ImageUploadError, ValidationError

logger = logging.getLogger(__name__)


def allowed_file(filename):
    """Check if file extension is allowed."""
    allowed = current_app.config['ALLOWED_EXTENSIONS']
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in allowed


def upload_image(file):
    """Upload one file-like image and return its public URL.

    The file is sent base64 encoded together with the configured API key.
    Nothing is retried; any failure surfaces as ``ImageUploadError``.
    """
    filename = getattr(file, 'filename', '') or ''
    if not allowed_file(filename):
        raise ValidationError(f'Unsupported image type: {filename or "unnamed file"}')

    payload = {
        'key': current_app.config['IMGBB_API_KEY'],
        'image': base64.b64encode(file.read()).decode('ascii'),
    }
    try:
        response = requests.post(
            current_app.config['IMGBB_UPLOAD_URL'],
            data=payload,
            timeout=current_app.config['IMGBB_TIMEOUT'],
        )
    except requests.RequestException as exc:
        logger.error('Image upload request failed: %s', exc)
        raise ImageUploadError() from exc

    if not response.ok:
        logger.error('ImgBB API error: %s', response.status_code)
        raise ImageUploadError()

    try:
        data = response.json()
    except ValueError as exc:
        logger.error('ImgBB returned a non-JSON body')
        raise ImageUploadError() from exc

    if not isinstance(data, dict) or not data.get('success'):
        logger.error('ImgBB upload failed: %s', data)
        raise ImageUploadError()

    try:
        return data['data']['url']
    except (KeyError, TypeError) as exc:
        logger.error('ImgBB response has no image URL')
        raise ImageUploadError() from exc


def upload_images(files):
    """Upload every non-empty file; all must succeed."""
    return [upload_image(f) for f in files if f and getattr(f, 'filename', '')]
