"""
Errors Module - Exceptions raised by contact operations

Each error knows the HTTP status it maps to; the app-level error handler
turns them into response envelopes.
"""


class ContactAPIError(Exception):
    """Base class for errors reported to API callers"""
    status_code = 500
    default_message = 'Something went wrong. Please try again.'

    def __init__(self, message=None, detail=None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(ContactAPIError):
    """Malformed or out-of-range input, one entry per failing field"""
    status_code = 400
    default_message = 'Validation failed'

    def __init__(self, errors, message=None):
        super().__init__(message)
        self.errors = list(errors)

    @property
    def fields(self):
        return [error['field'] for error in self.errors]


class InvalidStatus(ContactAPIError):
    status_code = 400
    default_message = 'Invalid status. Must be one of: new, read, replied, archived'


class Unauthorized(ContactAPIError):
    status_code = 401
    default_message = 'Unauthorized access'


class NotFound(ContactAPIError):
    status_code = 404
    default_message = 'Contact not found'


class RateLimited(ContactAPIError):
    status_code = 429
    default_message = 'Too many requests. Please try again later.'


class StoreFailure(ContactAPIError):
    """Underlying persistence error; detail is only echoed in development"""
    status_code = 500


__all__ = [
    'ContactAPIError',
    'ValidationError',
    'InvalidStatus',
    'Unauthorized',
    'NotFound',
    'RateLimited',
    'StoreFailure'
]
