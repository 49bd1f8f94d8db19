"""
Client Module - Thin HTTP clients for the contact form and the admin panel

ContactFormClient mirrors the site's contact form: it validates on the
client side, performs a single POST and reports a success/error state.
AdminPanelClient drives the admin triage endpoints with the shared key.
"""

import re
from collections import namedtuple
import requests

DEFAULT_TIMEOUT = 10
ADMIN_KEY_HEADER = 'X-Admin-Key'
EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

FormResult = namedtuple('FormResult', ['status', 'message', 'data'])


class ClientError(Exception):
    """Non-success envelope returned by the API"""

    def __init__(self, status_code, message, errors=None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


def decode_envelope(response):
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {'success': False, 'message': f'Unexpected response (HTTP {response.status_code})'}
    return body


def form_value(form, key):
    """Read a form field as text; missing values become ''"""
    value = form.get(key)
    return '' if value is None else str(value)


class ContactFormClient:
    SUCCESS_MESSAGE = 'Thank you for your message! We will get back to you soon.'
    FAILURE_MESSAGE = 'Something went wrong. Please try again.'
    NETWORK_ERROR_MESSAGE = 'Network error. Please check your connection and try again.'

    def __init__(self, base_url, session=None, timeout=DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def validate(self, form):
        """Client-side checks run before anything is sent"""
        name = form_value(form, 'name').strip()
        email = form_value(form, 'email').strip()
        subject = form_value(form, 'subject').strip()
        message = form_value(form, 'message').strip()
        problems = []

        if not name:
            problems.append('Name is required')
        elif len(name) < 2:
            problems.append('Name must be at least 2 characters')
        elif len(name) > 100:
            problems.append('Name cannot exceed 100 characters')

        if not email:
            problems.append('Email is required')
        elif not EMAIL_PATTERN.match(email):
            problems.append('Please enter a valid email')

        if len(subject) > 200:
            problems.append('Subject cannot exceed 200 characters')

        if not message:
            problems.append('Message is required')
        elif len(message) < 10:
            problems.append('Message must be at least 10 characters')
        elif len(message) > 2000:
            problems.append('Message cannot exceed 2000 characters')

        return problems

    def submit(self, form):
        """
        Send the form to the API

        The form dict is never modified, so a failed submission can be
        retried with the same values.

        Returns:
            FormResult: status is 'success' or 'error'
        """
        problems = self.validate(form)
        if problems:
            return FormResult('error', ', '.join(problems), None)

        payload = {key: form_value(form, key) for key in ('name', 'email', 'subject', 'message')}
        try:
            response = self.session.request(
                'POST', f'{self.base_url}/contact', json=payload, timeout=self.timeout)
        except requests.RequestException:
            return FormResult('error', self.NETWORK_ERROR_MESSAGE, None)

        body = decode_envelope(response)
        if 200 <= response.status_code < 300 and body.get('success'):
            return FormResult('success', body.get('message') or self.SUCCESS_MESSAGE, body.get('data'))

        errors = body.get('errors') or []
        if errors:
            return FormResult('error', ', '.join(err.get('message', '') for err in errors), None)
        return FormResult('error', body.get('message') or self.FAILURE_MESSAGE, None)


class AdminPanelClient:

    def __init__(self, base_url, admin_key, session=None, timeout=DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip('/')
        self.admin_key = admin_key
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method, path, **kwargs):
        response = self.session.request(
            method,
            f'{self.base_url}/admin{path}',
            headers={ADMIN_KEY_HEADER: self.admin_key},
            timeout=self.timeout,
            **kwargs
        )
        body = decode_envelope(response)
        if not (200 <= response.status_code < 300 and body.get('success')):
            raise ClientError(response.status_code, body.get('message'), body.get('errors'))
        return body.get('data')

    def list_contacts(self, page=1, status='all', search='', limit=10):
        """One page of the contact table, as {contacts, pagination}"""
        params = {'page': page, 'limit': limit, 'status': status}
        if search:
            params['search'] = search
        return self._request('GET', '/contacts', params=params)

    def stats(self):
        return self._request('GET', '/contacts/stats')

    def update_status(self, contact_id, status):
        return self._request('PATCH', f'/contacts/{contact_id}/status', json={'status': status})

    def delete_contact(self, contact_id):
        self._request('DELETE', f'/contacts/{contact_id}')
