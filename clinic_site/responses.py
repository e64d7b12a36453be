"""
Response Envelope

Every API response is ``{success, data?, message?, error?}``.
"""

from flask import jsonify, request

from clinic_site.errors import ValidationError

_MISSING = object()


def success_response(data=_MISSING, message=None, status=200):
    """Build a successful envelope. ``data`` is only emitted when given,
    so singleton reads can still return an explicit ``null``."""
    body = {'success': True}
    if data is not _MISSING:
        body['data'] = data
    if message:
        body['message'] = message
    return jsonify(body), status


def error_response(error, status):
    return jsonify({'success': False, 'error': error}), status


def get_json_body():
    """Return the request body as a dict or raise ValidationError."""
    body = request.get_json(silent=True)
    if body is None:
        if request.get_data(cache=True):
            raise ValidationError('Invalid JSON body')
        return {}
    if not isinstance(body, dict):
        raise ValidationError('Invalid JSON body')
    return body
