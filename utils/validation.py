"""
Validation Module - Field rules for contact submissions

The same rules back the request validation in the public service and the
write-time validators on the Contact model.
"""

import enum
from email_validator import validate_email, EmailNotValidError
from .errors import ValidationError


class ContactStatus(str, enum.Enum):
    NEW = 'new'
    READ = 'read'
    REPLIED = 'replied'
    ARCHIVED = 'archived'

    @classmethod
    def values(cls):
        return [status.value for status in cls]

    @classmethod
    def parse(cls, value):
        """Return the matching status or None for anything outside the set"""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


NAME_MAX_LENGTH = 100
SUBJECT_MAX_LENGTH = 200
MESSAGE_MAX_LENGTH = 2000

NAME_RULE = f'Name must be between 1 and {NAME_MAX_LENGTH} characters'
EMAIL_RULE = 'Please provide a valid email'
SUBJECT_RULE = f'Subject cannot exceed {SUBJECT_MAX_LENGTH} characters'
MESSAGE_RULE = f'Message must be between 1 and {MESSAGE_MAX_LENGTH} characters'


def field_error(field, message, value=None):
    error = {'field': field, 'message': message}
    if value is not None:
        error['value'] = value
    return error


def normalize_email(value):
    """Return the canonical (lower-cased) form of an address or None if invalid"""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        validated = validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        return None
    return validated.normalized.lower()


def check_length(value, minimum, maximum):
    return isinstance(value, str) and minimum <= len(value) <= maximum


def validate_submission(payload):
    """
    Validate and clean a contact form payload

    Args:
        payload (dict): Raw name/email/subject/message values

    Returns:
        dict: Cleaned values ready to be stored

    Raises:
        ValidationError: With one entry per failing field
    """
    errors = []
    cleaned = {}

    name = payload.get('name')
    name = name.strip() if isinstance(name, str) else None
    if name is None or not check_length(name, 1, NAME_MAX_LENGTH):
        errors.append(field_error('name', NAME_RULE, payload.get('name')))
    else:
        cleaned['name'] = name

    email = normalize_email(payload.get('email'))
    if email is None:
        errors.append(field_error('email', EMAIL_RULE, payload.get('email')))
    else:
        cleaned['email'] = email

    subject = payload.get('subject')
    if subject is None:
        cleaned['subject'] = ''
    elif not isinstance(subject, str) or len(subject.strip()) > SUBJECT_MAX_LENGTH:
        errors.append(field_error('subject', SUBJECT_RULE, subject))
    else:
        cleaned['subject'] = subject.strip()

    message = payload.get('message')
    message = message.strip() if isinstance(message, str) else None
    if message is None or not check_length(message, 1, MESSAGE_MAX_LENGTH):
        errors.append(field_error('message', MESSAGE_RULE, payload.get('message')))
    else:
        cleaned['message'] = message

    if errors:
        raise ValidationError(errors)
    return cleaned


__all__ = [
    'ContactStatus',
    'NAME_MAX_LENGTH',
    'SUBJECT_MAX_LENGTH',
    'MESSAGE_MAX_LENGTH',
    'NAME_RULE',
    'EMAIL_RULE',
    'SUBJECT_RULE',
    'MESSAGE_RULE',
    'field_error',
    'normalize_email',
    'check_length',
    'validate_submission'
]
