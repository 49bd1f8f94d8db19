"""
Responses Module - The {success, message, data, errors} envelope
"""

from flask import jsonify, current_app


def success_response(data=None, message=None, status=200):
    body = {'success': True}
    if message:
        body['message'] = message
    if data is not None:
        body['data'] = data
    return jsonify(body), status


def error_response(message, status=500, errors=None, detail=None):
    """Build a failure envelope; exception detail only when the config allows it"""
    body = {'success': False, 'message': message}
    if errors:
        body['errors'] = errors
    if detail and current_app.config.get('EXPOSE_ERROR_DETAILS'):
        body['error'] = detail
    return jsonify(body), status


__all__ = ['success_response', 'error_response']
